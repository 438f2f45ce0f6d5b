import tkinter as tk

import customtkinter as ctk

from .config import APP_TITLE, APPDATA_DIR, STATE_FILE, Settings
from .utils import ensure_dir, ms_to_mmss
from .logging_setup import setup_logger
from .i18n import Messages
from .audio import Chime
from .state_store import StateStore
from .timer_state import TimerState
from .timer import RestTimer
from .scheduler import TkScheduler
from .notifier import TkNotifier
from .process_monitor import FocusWatcher, TargetMatcher, make_work_focus_probe
from .tray import TrayController


ctk.set_appearance_mode("Dark")
ctk.set_default_color_theme("blue")


class ToolTip:
    def __init__(self, widget, text: str = ""):
        self.widget = widget
        self.text = text
        self.tip = None
        widget.bind("<Enter>", self._show)
        widget.bind("<Leave>", self._hide)

    def _show(self, event=None):
        if not self.text:
            return
        x = self.widget.winfo_rootx() + 20
        y = self.widget.winfo_rooty() + self.widget.winfo_height() + 4
        self.tip = tk.Toplevel(self.widget)
        self.tip.wm_overrideredirect(True)
        self.tip.wm_geometry(f"+{x}+{y}")
        tk.Label(
            self.tip, text=self.text, fg="#f1f5f9", bg="#1e293b", relief="solid", borderwidth=1, padx=6, pady=3
        ).pack()

    def _hide(self, event=None):
        if self.tip:
            self.tip.destroy()
            self.tip = None


class BlinkTwentyApp:
    def __init__(self, settings: Settings, watch_patterns: str = ""):
        ensure_dir(APPDATA_DIR)

        self.logger = setup_logger(verbose=settings.fast)
        self.logger.info("App start")
        if settings.fast:
            self.logger.info("Running with fast profile")
        self.logger.info(
            f"interval={ms_to_mmss(settings.interval_ms)} rest={settings.rest_duration_ms}ms "
            f"reset_threshold={ms_to_mmss(settings.reset_threshold_ms)} allow_skip={settings.allow_skip}"
        )

        self.settings = settings
        self.messages = Messages(settings.language)

        self.root = ctk.CTk()
        self.root.title(APP_TITLE)
        self.root.geometry("260x170")
        self.root.resizable(False, False)
        self.root.attributes("-topmost", True)
        self.root.protocol("WM_DELETE_WINDOW", self.hide_to_tray)

        self.scheduler = TkScheduler(self.root, self.logger)
        self.notifier = TkNotifier(self.root, self.logger)

        self.store = StateStore(STATE_FILE, self.logger)
        self.store.load()

        self.matcher = TargetMatcher(watch_patterns)
        if not self.matcher.empty:
            self.logger.info(f"Work apps: {watch_patterns}")

        self.focus = FocusWatcher(
            self.scheduler,
            make_work_focus_probe(self.matcher),
            on_blur=self._on_blur,
            on_focus=self._on_focus,
            logger=self.logger,
        )

        self.timer = RestTimer(
            settings=settings,
            state=TimerState(self.store),
            scheduler=self.scheduler,
            notifier=self.notifier,
            status=self,
            is_focused=self.focus.is_focused,
            messages=self.messages,
            logger=self.logger,
            chime=Chime(),
        )

        self.tray = TrayController(
            title=APP_TITLE,
            on_show=self.show_from_tray,
            on_show_rule=lambda: self.root.after(0, self.show_rule),
            on_quit=self.quit_app,
            labels={
                "show": self.messages.get("show"),
                "show_rule": self.messages.get("show_rule"),
                "quit": self.messages.get("quit"),
            },
        )

        self._build_ui()

    # UI
    def _build_ui(self) -> None:
        self.header = ctk.CTkLabel(self.root, text=APP_TITLE, font=("Roboto", 18, "bold"))
        self.header.pack(pady=(12, 2))

        self.status_label = ctk.CTkLabel(self.root, text="", font=("Consolas", 28, "bold"), cursor="hand2")
        self.status_label.pack(pady=(2, 6))
        self.status_label.bind("<Button-1>", lambda event: self.show_rule())
        self.status_tip = ToolTip(self.status_label)

        self.rule_btn = ctk.CTkButton(self.root, text=self.messages.get("show_rule"), command=self.show_rule)
        self.rule_btn.pack(padx=18, pady=(0, 8), fill="x")

        self.footer = ctk.CTkLabel(self.root, text='Close to hide in tray.', text_color="gray")
        self.footer.pack(pady=(0, 8))

    def set_status(self, text: str, tooltip: str) -> None:
        self.status_label.configure(text=text)
        self.status_tip.text = tooltip
        self.tray.set_title(text)

    def show_rule(self) -> None:
        try:
            self.notifier.show_info(self.messages.get("rule_intro"))
        except Exception:
            self.logger.exception("Show rule failed")

    # Focus
    def _on_blur(self) -> None:
        self.timer.on_blur()

    def _on_focus(self) -> None:
        self.timer.on_focus()

    # Tray
    def hide_to_tray(self) -> None:
        self.logger.info("Hide to tray")
        self.tray.ensure_running()
        self.root.withdraw()

    def show_from_tray(self) -> None:
        self.logger.info("Show from tray")

        def _do():
            try:
                self.root.deiconify()
                self.root.lift()
            except tk.TclError:
                pass

        self.root.after(0, _do)

    def quit_app(self) -> None:
        self.logger.info("Quit requested")

        def _do():
            self.focus.stop()
            self.timer.dispose()
            self.tray.stop()
            try:
                self.root.destroy()
            except tk.TclError:
                pass
            self.logger.info("App stopped")

        self.root.after(0, _do)

    def run(self) -> None:
        self.focus.start()
        self.timer.start()
        self.tray.ensure_running()
        self.root.mainloop()
