"""Screen model for the users view.

``present`` turns a ``ViewState`` into plain strings and flags so the tkinter
widgets only copy values across.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from gui.state import ViewState
from usermgmt.models.draft import FIELDS
from usermgmt.models.schemas import UserSchema

COLUMNS: Tuple[Tuple[str, str], ...] = (
    ("id", "ID"),
    ("name", "Name"),
    ("age", "Age"),
    ("salary", "Salary"),
    ("mobileNumber", "Mobile Number"),
)

FIELD_LABELS = {
    "name": "Name",
    "age": "Age",
    "salary": "Salary",
    "mobileNumber": "Mobile Number",
}


@dataclass(frozen=True)
class Row:
    user_id: int
    values: Tuple[str, ...]


@dataclass(frozen=True)
class FormField:
    name: str
    label: str
    value: str
    error: str = ""


@dataclass(frozen=True)
class FormModel:
    title: str
    submit_label: str
    fields: Tuple[FormField, ...]
    can_submit: bool
    # Server errors keyed by something other than a form field
    other_errors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ScreenModel:
    rows: Tuple[Row, ...]
    form: Optional[FormModel]
    banner: str = ""
    busy: bool = False


def _text(value) -> str:
    if value is None:
        return ""
    # Entry text stays as typed; only values loaded from a user are formatted.
    if isinstance(value, float):
        return _number(value)
    return str(value)


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _row(user: UserSchema) -> Row:
    return Row(
        user_id=user.id,
        values=(
            str(user.id),
            user.name,
            str(user.age),
            _number(user.salary),
            user.mobile_number,
        ),
    )


def present(state: ViewState) -> ScreenModel:
    form = None
    if state.modal.is_open:
        editing = state.modal.is_edit
        fields: List[FormField] = [
            FormField(
                name=name,
                label=FIELD_LABELS[name],
                value=_text(state.draft.get(name)),
                error=state.errors.get(name, ""),
            )
            for name in FIELDS
        ]
        form = FormModel(
            title="Edit User" if editing else "Add User",
            submit_label="Update" if editing else "Add",
            fields=tuple(fields),
            can_submit=not state.submitting,
            other_errors=tuple(
                f"{key}: {message}" for key, message in state.errors.items() if key not in FIELDS
            ),
        )

    return ScreenModel(
        rows=tuple(_row(user) for user in state.users),
        form=form,
        banner=state.banner or "",
        busy=state.loading or state.submitting or state.deleting is not None,
    )
