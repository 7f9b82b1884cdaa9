"""Theme primitives for the GUI.

Colors live in plain dataclasses so they can be created without a display;
``apply`` pushes them into a ``ttk.Style``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """Base theme definition."""

    name: str = "Default"
    primary_color: str = "#1f2937"  # slate-800
    muted_color: str = "#6b7280"  # gray-500
    background_color: str = "#ffffff"
    error_background: str = "#fee2e2"  # red-100
    error_foreground: str = "#b91c1c"  # red-700

    def apply(self, style) -> None:
        style.configure("Main.TFrame", background=self.background_color)
        style.configure(
            "Header.TLabel",
            background=self.background_color,
            foreground=self.primary_color,
            font=("Helvetica", 16, "bold"),
        )
        style.configure("Muted.TLabel", background=self.background_color, foreground=self.muted_color)
        style.configure("Banner.TFrame", background=self.error_background)
        style.configure("Banner.TLabel", background=self.error_background, foreground=self.error_foreground)
