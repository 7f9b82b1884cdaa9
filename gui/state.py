"""View state for the users screen.

``ViewState`` is an immutable snapshot; ``reduce`` is the only place it
changes. The controller feeds events in and hands the resulting state to
whatever renders it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from usermgmt.models.draft import FIELDS, UserDraft
from usermgmt.models.schemas import UserSchema
from usermgmt.results import ApiResult, Success, TransportFailure, ValidationFailure

CLOSED = "closed"
ADD_OPEN = "add"
EDIT_OPEN = "edit"


@dataclass(frozen=True)
class Modal:
    """Which form dialog is showing, if any."""

    kind: str = CLOSED
    target_id: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.kind != CLOSED

    @property
    def is_edit(self) -> bool:
        return self.kind == EDIT_OPEN


MODAL_CLOSED = Modal()


@dataclass(frozen=True)
class ViewState:
    users: Tuple[UserSchema, ...] = ()
    draft: UserDraft = field(default_factory=UserDraft)
    errors: Dict[str, str] = field(default_factory=dict)
    modal: Modal = MODAL_CLOSED
    submitting: bool = False
    # Advances whenever a form session starts or ends; late results carrying an
    # older token are dropped.
    session: int = 0
    banner: Optional[str] = None
    loading: bool = False
    deleting: Optional[int] = None


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RefreshStarted:
    pass


@dataclass(frozen=True)
class RefreshFinished:
    result: ApiResult


@dataclass(frozen=True)
class OpenAdd:
    pass


@dataclass(frozen=True)
class OpenEdit:
    user: UserSchema


@dataclass(frozen=True)
class FieldChanged:
    field: str
    value: Any


@dataclass(frozen=True)
class SubmitStarted:
    session: int


@dataclass(frozen=True)
class SubmitFinished:
    session: int
    result: ApiResult


@dataclass(frozen=True)
class Close:
    pass


@dataclass(frozen=True)
class DeleteStarted:
    user_id: int


@dataclass(frozen=True)
class DeleteFinished:
    user_id: int
    result: ApiResult


@dataclass(frozen=True)
class DismissBanner:
    pass


def _open(state: ViewState, draft: UserDraft, modal: Modal) -> ViewState:
    return replace(
        state,
        draft=draft,
        errors={},
        modal=modal,
        submitting=False,
        session=state.session + 1,
    )


def _closed(state: ViewState) -> ViewState:
    return replace(
        state,
        draft=UserDraft(),
        errors={},
        modal=MODAL_CLOSED,
        submitting=False,
        session=state.session + 1,
    )


def reduce(state: ViewState, event: Any) -> ViewState:
    """Return the state that follows ``event``. Never mutates ``state``."""

    if isinstance(event, RefreshStarted):
        return replace(state, loading=True)

    if isinstance(event, RefreshFinished):
        if isinstance(event.result, Success):
            return replace(state, users=tuple(event.result.value), loading=False, banner=None)
        # Keep the last good list on a failed refresh.
        return replace(state, loading=False, banner=_failure_text("Could not load users", event.result))

    if isinstance(event, OpenAdd):
        if state.modal.is_open:
            return state
        return _open(state, UserDraft(), Modal(ADD_OPEN))

    if isinstance(event, OpenEdit):
        if state.modal.is_open:
            return state
        return _open(state, UserDraft.from_user(event.user), Modal(EDIT_OPEN, event.user.id))

    if isinstance(event, FieldChanged):
        if event.field not in FIELDS:
            raise KeyError(event.field)
        # The draft is frozen while it is on the wire so field errors match what was sent.
        if not state.modal.is_open or state.submitting:
            return state
        errors = {k: v for k, v in state.errors.items() if k != event.field}
        return replace(state, draft=state.draft.with_field(event.field, event.value), errors=errors)

    if isinstance(event, SubmitStarted):
        if event.session != state.session or not state.modal.is_open or state.submitting:
            return state
        return replace(state, submitting=True)

    if isinstance(event, SubmitFinished):
        if event.session != state.session:
            return state
        result = event.result
        if isinstance(result, Success):
            return replace(_closed(state), banner=None)
        if isinstance(result, ValidationFailure):
            return replace(state, submitting=False, errors=dict(result.errors))
        return replace(state, submitting=False, banner=_failure_text("Could not save user", result))

    if isinstance(event, Close):
        return _closed(state)

    if isinstance(event, DeleteStarted):
        return replace(state, deleting=event.user_id)

    if isinstance(event, DeleteFinished):
        if isinstance(event.result, Success):
            return replace(state, deleting=None, banner=None)
        return replace(
            state,
            deleting=None,
            banner=_failure_text(f"Could not delete user {event.user_id}", event.result),
        )

    if isinstance(event, DismissBanner):
        return replace(state, banner=None)

    raise TypeError(f"Unknown event: {event!r}")


def _failure_text(prefix: str, result: ApiResult) -> str:
    if isinstance(result, TransportFailure) and result.detail:
        return f"{prefix}: {result.detail}"
    return prefix
