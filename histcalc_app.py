#!/usr/bin/env python3
"""
Calculator with a short history of finished calculations.

Features:
- Tkinter window (no external dependencies).
- Up to three previous calculations shown in gray above the display.
- 4x5 button grid with a double-width 0, light gray top row, blue last column.
- Keyboard input: 0-9, . , + - * / %, Enter/= and Esc (C).
- Pressing C twice in a row also clears the history.
"""

import tkinter as tk
from tkinter import font as tkfont
import logging
from logging.handlers import RotatingFileHandler
import os

from histcalc import (
    ADDITION,
    CLEAR,
    DECIMAL,
    DIVISION,
    EQUALS,
    MULTIPLICATION,
    NEGATIVE,
    PERCENTAGE,
    SUBTRACTION,
    Calculator,
)


# ------------------ LOGGING ------------------
def _setup_logging():
    level_name = os.getenv("CALC_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger("calculator")
    logger.setLevel(level)

    if logger.handlers:
        return logger  # already configured

    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")

    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(fmt)
    logger.addHandler(sh)

    log_dir = os.getenv("CALC_LOG_DIR") or os.path.dirname(os.path.abspath(__file__))
    log_path = os.path.join(log_dir, "calculator.log")
    fh = RotatingFileHandler(log_path, maxBytes=512_000, backupCount=2, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    return logger


log = _setup_logging()

BUTTON_ROWS = [
    [CLEAR, NEGATIVE, PERCENTAGE, DIVISION],
    [7, 8, 9, MULTIPLICATION],
    [4, 5, 6, SUBTRACTION],
    [1, 2, 3, ADDITION],
    [0, DECIMAL, EQUALS],
]

# keysym -> token
KEY_TOKENS = {
    "period": DECIMAL,
    "comma": DECIMAL,
    "plus": ADDITION,
    "KP_Add": ADDITION,
    "minus": SUBTRACTION,
    "KP_Subtract": SUBTRACTION,
    "asterisk": MULTIPLICATION,
    "KP_Multiply": MULTIPLICATION,
    "slash": DIVISION,
    "KP_Divide": DIVISION,
    "percent": PERCENTAGE,
    "equal": EQUALS,
    "Return": EQUALS,
    "KP_Enter": EQUALS,
    "Escape": CLEAR,
}
KEY_TOKENS.update({str(d): d for d in range(10)})

COLOR_BG = "black"
COLOR_TOP = "lightgray"
COLOR_LAST = "#007bff"
COLOR_NUM = "#333333"
COLOR_HISTORY = "darkgray"

DISPLAY_FONT_SIZE = 48
DISPLAY_FONT_MIN = 16
DISPLAY_FIT_CHARS = 9


class CalculatorApp(tk.Tk):
    def __init__(self):
        super().__init__()
        self.title("Calculator")
        self.configure(bg=COLOR_BG)
        self.minsize(320, 520)

        self.calc = Calculator()

        self.font_display = tkfont.Font(family="Helvetica", size=DISPLAY_FONT_SIZE)
        self.font_history = tkfont.Font(family="Helvetica", size=16)
        self.font_btn = tkfont.Font(family="Helvetica", size=22)

        self._build_ui()
        self._bind_keys()
        log.info("Application started")

    def press(self, token):
        self.calc.handle_token(token)
        self._update_display()

    # ------------------ UI ------------------
    def _build_ui(self):
        results = tk.Frame(self, bg=COLOR_BG)
        results.grid(row=0, column=0, columnspan=4, sticky="nsew", padx=16, pady=(40, 12))
        results.columnconfigure(0, weight=1)

        self.history_vars = []
        for i in range(self.calc.history_size):
            var = tk.StringVar()
            tk.Label(
                results, textvariable=var, anchor="e", bg=COLOR_BG,
                fg=COLOR_HISTORY, font=self.font_history
            ).grid(row=i, column=0, sticky="e")
            self.history_vars.append(var)

        self.display_var = tk.StringVar()
        tk.Label(
            results, textvariable=self.display_var, anchor="e", bg=COLOR_BG,
            fg="white", font=self.font_display
        ).grid(row=len(self.history_vars), column=0, sticky="e")

        self.rowconfigure(0, weight=2, minsize=180)
        for i in range(1, len(BUTTON_ROWS) + 1):
            self.rowconfigure(i, weight=1, minsize=64)
        for j in range(4):
            self.columnconfigure(j, weight=1, minsize=72)

        for r, row in enumerate(BUTTON_ROWS, start=1):
            c = 0
            for idx, token in enumerate(row):
                last = idx == len(row) - 1
                if last:
                    color, fg = COLOR_LAST, "white"
                elif r == 1:
                    color, fg = COLOR_TOP, "black"
                else:
                    color, fg = COLOR_NUM, "white"
                width = 2 if token == 0 else 1
                self._make_btn(token, r, c, width, color, fg)
                c += width

        self._update_display()

    def _make_btn(self, token, r, c, w, color, fg):
        label = str(token)
        btn = tk.Button(
            self, text=label, bg=color, fg=fg, activebackground="#4a4a4a",
            activeforeground="white", bd=0, font=self.font_btn
        )
        btn.grid(row=r, column=c, columnspan=w, sticky="nsew", padx=6, pady=6)

        def on_click(t=token, lab=label):
            log.info("Button pressed: %s", lab)
            self.press(t)

        btn.configure(command=on_click)
        return btn

    def _bind_keys(self):
        def handler(event):
            token = KEY_TOKENS.get(event.keysym)
            if token is None:
                return
            log.info("Key pressed: %s", event.keysym)
            self.press(token)

        self.bind("<Key>", handler)

    # ------------------ DISPLAY ------------------
    def _display_font_size(self, text: str) -> int:
        if len(text) <= DISPLAY_FIT_CHARS:
            return DISPLAY_FONT_SIZE
        size = DISPLAY_FONT_SIZE * DISPLAY_FIT_CHARS // len(text)
        return max(DISPLAY_FONT_MIN, size)

    def _update_display(self):
        text = self.calc.display
        self.font_display.configure(size=self._display_font_size(text))
        self.display_var.set(text)

        # Oldest first; empty slots on top so the latest sits right above the display
        entries = list(self.calc.history)
        padded = [""] * (len(self.history_vars) - len(entries)) + entries
        for var, entry in zip(self.history_vars, padded):
            var.set(entry)
        log.debug("Display updated: %s | history=%s", text, entries)


def main():
    try:
        app = CalculatorApp()
        app.mainloop()
    finally:
        log.info("Application closed")


if __name__ == "__main__":
    main()
