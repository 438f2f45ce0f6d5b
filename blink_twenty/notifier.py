import logging
import tkinter as tk

import customtkinter as ctk

from .config import APP_TITLE, TOAST_DISMISS_MS
from .errors import NotificationUnavailable


def _center_on_screen(win, width: int, height: int) -> None:
    win.update_idletasks()
    x = (win.winfo_screenwidth() - width) // 2
    y = (win.winfo_screenheight() - height) // 3
    win.geometry(f"{width}x{height}+{x}+{y}")


class RestProgress:
    """Non-cancellable progress window: no close button, no cancel action."""

    def __init__(self, root, title: str):
        self._percent = 0.0

        self.win = ctk.CTkToplevel(root)
        self.win.title(APP_TITLE)
        self.win.attributes("-topmost", True)
        self.win.protocol("WM_DELETE_WINDOW", lambda: None)
        _center_on_screen(self.win, 380, 140)

        ctk.CTkLabel(self.win, text=title, font=("Arial", 15, "bold"), wraplength=340).pack(
            padx=18, pady=(18, 8)
        )
        self.bar = ctk.CTkProgressBar(self.win)
        self.bar.pack(fill="x", padx=18, pady=4)
        self.bar.set(0.0)
        self.message_label = ctk.CTkLabel(self.win, text="", font=("Consolas", 14))
        self.message_label.pack(pady=(4, 12))

    def report(self, increment: float, message: str) -> None:
        self._percent = min(100.0, self._percent + float(increment))
        try:
            self.bar.set(self._percent / 100.0)
            self.message_label.configure(text=message)
        except tk.TclError as e:
            raise NotificationUnavailable(f"progress window gone: {e}") from e

    def close(self) -> None:
        try:
            self.win.destroy()
        except tk.TclError:
            pass


class TkNotifier:
    def __init__(self, root, logger: logging.Logger):
        self._root = root
        self._logger = logger

    def ask(self, message: str, buttons: list[str]) -> str | None:
        """Modal prompt. Returns the chosen label, or None when closed."""
        choice = {"value": None}
        try:
            win = ctk.CTkToplevel(self._root)
            win.title(APP_TITLE)
            win.attributes("-topmost", True)
            _center_on_screen(win, 420, 170)

            ctk.CTkLabel(win, text=message, wraplength=380, font=("Arial", 14)).pack(padx=18, pady=(20, 14))
            row = ctk.CTkFrame(win, fg_color="transparent")
            row.pack(pady=(0, 16))

            def choose(label):
                choice["value"] = label
                win.destroy()

            for label in buttons:
                ctk.CTkButton(row, text=label, width=120, command=lambda lb=label: choose(lb)).pack(
                    side="left", padx=6
                )

            win.protocol("WM_DELETE_WINDOW", win.destroy)
            win.lift()
            win.focus_force()
            win.grab_set()
            self._root.wait_window(win)
        except tk.TclError as e:
            raise NotificationUnavailable(f"cannot show prompt: {e}") from e

        return choice["value"]

    def open_progress(self, title: str) -> RestProgress:
        try:
            return RestProgress(self._root, title)
        except tk.TclError as e:
            raise NotificationUnavailable(f"cannot show progress: {e}") from e

    def show_info(self, message: str) -> None:
        try:
            win = ctk.CTkToplevel(self._root)
            win.title(APP_TITLE)
            win.attributes("-topmost", True)
            _center_on_screen(win, 380, 130)
            ctk.CTkLabel(win, text=message, wraplength=340, font=("Arial", 14)).pack(padx=18, pady=(20, 10))
            ctk.CTkButton(win, text="OK", width=90, command=win.destroy).pack(pady=(0, 14))
        except tk.TclError as e:
            raise NotificationUnavailable(f"cannot show notice: {e}") from e

        def _dismiss():
            try:
                win.destroy()
            except tk.TclError:
                pass

        self._root.after(TOAST_DISMISS_MS, _dismiss)
