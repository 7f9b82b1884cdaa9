"""Main GUI application object.

Wires the Users API client, the controller and the users view onto a Tk root.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Optional

from gui.controller import UserController
from gui.services.clients import get_user_api_client
from gui.theme import Theme
from gui.utils.async_tasks import ThreadedRunner
from gui.utils.logging import log
from gui.views.users import UsersView, ask_delete
from usermgmt.api_client import UserApi
from usermgmt.config import get_settings
from usermgmt.utils.logger import setup_logging


class UserManagementApp:
    """Application shell: one window, one users screen."""

    def __init__(self, root: tk.Tk, api: Optional[UserApi] = None, theme: Optional[Theme] = None):
        self.root = root
        self.root.title("User Management")
        self.root.geometry("760x480")

        self.theme = theme or Theme()
        self.theme.apply(ttk.Style(self.root))
        self.root.configure(bg=self.theme.background_color)

        self.controller = UserController(
            api or get_user_api_client(),
            runner=ThreadedRunner(root),
            confirm=ask_delete(root),
        )
        self.view = UsersView(root, self.controller, padding=12)
        self.view.pack(fill="both", expand=True)

    def run(self) -> None:
        self.controller.mount()
        self.root.mainloop()


def main():
    """Run the GUI application."""
    settings = get_settings()
    setup_logging(settings.log_level)
    log(f"Using Users API at {settings.api_base}")
    root = tk.Tk()
    app = UserManagementApp(root)
    app.run()


if __name__ == "__main__":
    main()
