"""Base class for GUI views."""

from __future__ import annotations

from tkinter import ttk


class BaseView(ttk.Frame):
    """A frame bound to a controller. Subclasses lay out widgets in ``_build``."""

    def __init__(self, parent, controller, **kwargs):
        super().__init__(parent, style="Main.TFrame", **kwargs)
        self.controller = controller
        self._build()

    def _build(self):
        raise NotImplementedError
