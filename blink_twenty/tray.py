import threading
import pystray
from PIL import Image, ImageDraw


def make_icon_image() -> Image.Image:
    img = Image.new("RGB", (64, 64), color=(40, 40, 40))
    draw = ImageDraw.Draw(img)
    draw.ellipse((6, 18, 58, 46), fill=(245, 245, 245))
    draw.ellipse((22, 22, 42, 42), fill=(34, 140, 200))
    draw.ellipse((28, 28, 36, 36), fill=(20, 20, 20))
    return img


class TrayController:
    def __init__(self, title: str, on_show, on_show_rule, on_quit, labels: dict[str, str] | None = None):
        self._title = title
        self._on_show = on_show
        self._on_show_rule = on_show_rule
        self._on_quit = on_quit
        self._labels = labels or {"show": "Show", "show_rule": "Show rule", "quit": "Quit"}

        self._icon = None
        self._thread = None
        self._running = False

    def ensure_running(self) -> None:
        if self._icon is not None and self._running:
            return

        def on_show(icon, item):
            self._on_show()

        def on_show_rule(icon, item):
            self._on_show_rule()

        def on_quit(icon, item):
            self._on_quit()

        menu = pystray.Menu(
            pystray.MenuItem(self._labels["show"], on_show, default=True),
            pystray.MenuItem(self._labels["show_rule"], on_show_rule),
            pystray.MenuItem(self._labels["quit"], on_quit),
        )

        self._icon = pystray.Icon("BlinkTwenty", make_icon_image(), self._title, menu)

        def run_icon():
            self._running = True
            try:
                self._icon.run()
            finally:
                self._running = False

        self._thread = threading.Thread(target=run_icon, daemon=True)
        self._thread.start()

    def set_title(self, text: str) -> None:
        if self._icon is None:
            return
        self._icon.title = f"{self._title} {text}"

    def stop(self) -> None:
        if self._icon is None:
            return
        try:
            self._icon.stop()
        except Exception:
            pass
