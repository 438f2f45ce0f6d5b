import os


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def ms_to_mmss(ms: float) -> str:
    ms = max(0, int(ms))
    minutes = ms // 60000
    seconds = (ms % 60000) // 1000
    return f"{minutes:02d}:{seconds:02d}"
