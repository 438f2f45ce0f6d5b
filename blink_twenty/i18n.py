import os
import sys
import ctypes
import locale

MESSAGES_EN = {
    "rest_prompt": "Time to rest! Look at something 20 feet away for 20 seconds.",
    "start_rest": "Start Rest",
    "skip_rest": "Skip",
    "rest_progress": "Resting... please look away.",
    "rest_complete": "Rest Complete! You can continue working.",
    "status_tooltip": "Time until next rest",
    "rule_intro": "Every 20 minutes, look at something 20 feet away for 20 seconds.",
    "resting": "Resting...",
    "show_rule": "Show rule",
    "show": "Show",
    "quit": "Quit",
}

MESSAGES_ZH = {
    "rest_prompt": "休息时间到了！请注视 20 英尺（约 6 米）外的物体 20 秒。",
    "start_rest": "开始休息",
    "skip_rest": "跳过",
    "rest_progress": "休息中... 请眺望远方。",
    "rest_complete": "休息结束！由于您的坚持，您的眼睛得到了一次很好的放松。",
    "status_tooltip": "距离下次休息还有",
    "rule_intro": "每工作 20 分钟，眺望 20 英尺（约 6 米）外的物体 20 秒。",
    "resting": "休息中...",
    "show_rule": "规则说明",
    "show": "显示",
    "quit": "退出",
}


def _windows_ui_language() -> str | None:
    # getlocale() on Windows yields names like "Chinese (Simplified)_China"
    lcid = ctypes.windll.kernel32.GetUserDefaultUILanguage()
    return locale.windows_locale.get(lcid)


def detect_language() -> str:
    if sys.platform == "win32":
        lang = _windows_ui_language()
        if lang:
            return lang
    try:
        lang = locale.getlocale()[0]
    except ValueError:
        lang = None
    if lang and lang.lower().startswith("chinese"):
        lang = "zh"
    return lang or os.getenv("LANG") or "en"


class Messages:
    def __init__(self, language: str | None = None):
        self.language = language or detect_language()
        is_zh = self.language.lower().replace("-", "_").startswith("zh")
        self._catalog = MESSAGES_ZH if is_zh else MESSAGES_EN

    def get(self, key: str) -> str:
        return self._catalog.get(key) or MESSAGES_EN.get(key) or key
