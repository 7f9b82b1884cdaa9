"""
Users View - table of users with an add/edit modal form.

Every widget is driven from ``present(controller.state)``; user actions go
straight to the controller.
"""
import tkinter as tk
from tkinter import messagebox, ttk

from gui.components.banner import Banner
from gui.presenter import COLUMNS, FormModel, ScreenModel, present
from gui.state import ViewState
from gui.views.base import BaseView


def ask_delete(parent):
    """Build a confirm callback for UserController.delete backed by a Tk dialog."""

    def confirm(user_id, user):
        label = f"'{user.name}' (ID {user_id})" if user is not None else f"ID {user_id}"
        return messagebox.askyesno(
            "Delete User",
            f"Delete user {label}?\n\nThis cannot be undone.",
            parent=parent,
        )

    return confirm


class UserFormDialog(tk.Toplevel):
    """Modal add/edit form with an inline error label under each entry."""

    def __init__(self, parent, controller, model: FormModel):
        super().__init__(parent)
        self.controller = controller
        self.transient(parent)
        self.resizable(False, False)
        self.protocol("WM_DELETE_WINDOW", controller.close)

        self._syncing = False
        self.vars = {}
        self.error_vars = {}
        self.entries = {}

        body = ttk.Frame(self, padding=12)
        body.pack(fill="both", expand=True)
        body.columnconfigure(0, weight=1)

        self.other_errors_var = tk.StringVar()
        ttk.Label(body, textvariable=self.other_errors_var, foreground="#b91c1c").grid(
            row=0, column=0, sticky="w"
        )

        row = 1
        for field in model.fields:
            ttk.Label(body, text=field.label).grid(row=row, column=0, sticky="w")
            var = tk.StringVar(value=field.value)
            var.trace_add("write", lambda *_, name=field.name: self._on_change(name))
            entry = ttk.Entry(body, textvariable=var, width=32)
            entry.grid(row=row + 1, column=0, sticky="ew")
            error_var = tk.StringVar(value=field.error)
            ttk.Label(body, textvariable=error_var, foreground="#b91c1c").grid(
                row=row + 2, column=0, sticky="w", pady=(0, 6)
            )
            self.vars[field.name] = var
            self.entries[field.name] = entry
            self.error_vars[field.name] = error_var
            if row == 1:
                entry.focus_set()
            row += 3

        buttons = ttk.Frame(body)
        buttons.grid(row=row, column=0, sticky="e", pady=(8, 0))
        ttk.Button(buttons, text="Close", command=controller.close).pack(side=tk.LEFT, padx=(0, 6))
        self.submit_btn = ttk.Button(buttons, command=controller.submit)
        self.submit_btn.pack(side=tk.LEFT)
        self.bind("<Return>", lambda _: controller.submit())
        self.bind("<Escape>", lambda _: controller.close())

        self.update_model(model)
        self.grab_set()

    def _on_change(self, name):
        if self._syncing:
            return
        self.controller.change_field(name, self.vars[name].get())

    def update_model(self, model: FormModel):
        self._syncing = True
        try:
            self.title(model.title)
            self.submit_btn.configure(
                text=model.submit_label,
                state="normal" if model.can_submit else "disabled",
            )
            self.other_errors_var.set("\n".join(model.other_errors))
            for field in model.fields:
                # Only overwrite when it differs so typing keeps the cursor.
                if self.vars[field.name].get() != field.value:
                    self.vars[field.name].set(field.value)
                self.error_vars[field.name].set(field.error)
                self.entries[field.name].configure(state="normal" if model.can_submit else "disabled")
        finally:
            self._syncing = False


class UsersView(BaseView):
    """User management screen."""

    def _build(self):
        header = ttk.Frame(self, style="Main.TFrame")
        header.pack(fill="x", pady=(0, 8))
        ttk.Label(header, text="User Management", style="Header.TLabel").pack(side=tk.LEFT)
        self.busy_label = ttk.Label(header, text="", style="Muted.TLabel")
        self.busy_label.pack(side=tk.RIGHT)

        self.banner = Banner(self, on_dismiss=self.controller.dismiss_banner)

        actions = ttk.Frame(self, style="Main.TFrame")
        actions.pack(fill="x", pady=(0, 8))
        self.actions = actions
        ttk.Button(actions, text="Add User", command=self.controller.open_add).pack(side=tk.LEFT)
        ttk.Button(actions, text="Edit", command=self._edit_selected).pack(side=tk.LEFT, padx=(6, 0))
        ttk.Button(actions, text="Delete", command=self._delete_selected).pack(side=tk.LEFT, padx=(6, 0))
        ttk.Button(actions, text="↻ Refresh", command=self.controller.refresh).pack(side=tk.RIGHT)

        table = ttk.Frame(self, style="Main.TFrame")
        table.pack(fill="both", expand=True)
        table.rowconfigure(0, weight=1)
        table.columnconfigure(0, weight=1)

        self.tree = ttk.Treeview(table, columns=[key for key, _ in COLUMNS], show="headings", selectmode="browse")
        for key, heading in COLUMNS:
            self.tree.heading(key, text=heading)
            self.tree.column(key, width=60 if key in ("id", "age") else 140, anchor="w")
        self.tree.grid(row=0, column=0, sticky="nsew")
        self.tree.bind("<Double-1>", lambda _: self._edit_selected())
        scroll = ttk.Scrollbar(table, orient=tk.VERTICAL, command=self.tree.yview)
        scroll.grid(row=0, column=1, sticky="ns")
        self.tree.configure(yscrollcommand=scroll.set)

        self.dialog = None
        self.controller.subscribe(self.render)
        self.render(self.controller.state)

    def _selected_id(self):
        selection = self.tree.selection()
        if not selection:
            return None
        return int(selection[0])

    def _edit_selected(self):
        user_id = self._selected_id()
        if user_id is None:
            return
        user = next((u for u in self.controller.state.users if u.id == user_id), None)
        if user is not None:
            self.controller.open_edit(user)

    def _delete_selected(self):
        user_id = self._selected_id()
        if user_id is not None:
            self.controller.delete(user_id)

    def render(self, state: ViewState):
        screen = present(state)
        self._render_table(screen)
        self._render_form(screen)
        self.banner.show(screen.banner, before=self.actions)
        self.busy_label.configure(text="Working…" if screen.busy else "")

    def _render_table(self, screen: ScreenModel):
        selected = self.tree.selection()
        self.tree.delete(*self.tree.get_children())
        for row in screen.rows:
            self.tree.insert("", tk.END, iid=str(row.user_id), values=row.values)
        keep = [iid for iid in selected if self.tree.exists(iid)]
        if keep:
            self.tree.selection_set(keep)

    def _render_form(self, screen: ScreenModel):
        if screen.form is None:
            if self.dialog is not None:
                self.dialog.grab_release()
                self.dialog.destroy()
                self.dialog = None
            return
        if self.dialog is None:
            self.dialog = UserFormDialog(self.winfo_toplevel(), self.controller, screen.form)
        else:
            self.dialog.update_model(screen.form)
