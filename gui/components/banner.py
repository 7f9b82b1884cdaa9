"""Dismissible page-level error banner."""

import tkinter as tk
from tkinter import ttk


class Banner(ttk.Frame):
    """
    Shows a transport error until it is dismissed or cleared.

    Hidden (not packed) while there is no message.
    """

    def __init__(self, parent, on_dismiss):
        super().__init__(parent, style="Banner.TFrame", padding=(8, 4))
        self.message_var = tk.StringVar(value="")
        ttk.Label(self, textvariable=self.message_var, style="Banner.TLabel").pack(side=tk.LEFT, fill="x", expand=True)
        ttk.Button(self, text="✕", width=3, command=on_dismiss).pack(side=tk.RIGHT)
        self._visible = False

    def show(self, message: str, **pack_opts):
        self.message_var.set(message)
        if message and not self._visible:
            self.pack(fill="x", pady=(0, 8), **pack_opts)
            self._visible = True
        elif not message and self._visible:
            self.pack_forget()
            self._visible = False
