"""Controller for the users screen.

Turns user intents into API calls and folds the results back into
``ViewState`` through ``gui.state.reduce``. Rendering is a subscriber.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from gui.state import (
    Close,
    DeleteFinished,
    DeleteStarted,
    DismissBanner,
    FieldChanged,
    OpenAdd,
    OpenEdit,
    RefreshFinished,
    RefreshStarted,
    SubmitFinished,
    SubmitStarted,
    ViewState,
    reduce,
)
from gui.utils.async_tasks import run_async
from gui.utils.logging import log
from usermgmt.api_client import UserApi
from usermgmt.models.schemas import UserSchema
from usermgmt.results import ApiResult, Success

Listener = Callable[[ViewState], None]
Runner = Callable[..., Any]
Confirm = Callable[[int, Optional[UserSchema]], bool]


def _decline(user_id: int, user: Optional[UserSchema]) -> bool:
    log(f"No confirmation handler; refusing to delete user {user_id}", logging.WARNING)
    return False


class UserController:
    """Owns the users screen state and the single active form session.

    Args:
        api: Users backend (see ``usermgmt.api_client.UserApi``)
        runner: ``runner(fn, callback)`` executing blocking calls
        confirm: asked before every delete; returning False aborts it
    """

    def __init__(
        self,
        api: UserApi,
        runner: Runner = run_async,
        confirm: Confirm = _decline,
        state: Optional[ViewState] = None,
    ):
        self.api = api
        self.runner = runner
        self.confirm = confirm
        self._state = state or ViewState()
        self._listeners: List[Listener] = []
        self._refresh_seq = 0

    @property
    def state(self) -> ViewState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, event: Any) -> ViewState:
        new_state = reduce(self._state, event)
        if new_state is not self._state:
            self._state = new_state
            for listener in list(self._listeners):
                listener(new_state)
        return self._state

    # ------------------------------------------------------------------
    # List
    # ------------------------------------------------------------------
    def mount(self) -> None:
        self.refresh()

    def refresh(self) -> None:
        self._refresh_seq += 1
        seq = self._refresh_seq
        self.dispatch(RefreshStarted())
        self.runner(self.api.list_all, lambda result: self._refresh_done(seq, result))

    def _refresh_done(self, seq: int, result: ApiResult) -> None:
        if seq != self._refresh_seq:
            log(f"Dropping superseded refresh #{seq}", logging.DEBUG)
            return
        if not isinstance(result, Success):
            log(f"Refresh failed: {result}", logging.ERROR)
        self.dispatch(RefreshFinished(result))

    # ------------------------------------------------------------------
    # Form session
    # ------------------------------------------------------------------
    def open_add(self) -> None:
        self.dispatch(OpenAdd())

    def open_edit(self, user: UserSchema) -> None:
        self.dispatch(OpenEdit(user))

    def change_field(self, field: str, value: Any) -> None:
        self.dispatch(FieldChanged(field, value))

    def close(self) -> None:
        self.dispatch(Close())

    def submit(self) -> bool:
        """Send the draft. Returns False when nothing was dispatched."""
        state = self._state
        if not state.modal.is_open:
            log("Submit ignored: no form open", logging.DEBUG)
            return False
        if state.submitting:
            log("Submit ignored: previous submit still in flight", logging.DEBUG)
            return False

        session, draft, modal = state.session, state.draft, state.modal
        self.dispatch(SubmitStarted(session))
        if modal.is_edit:
            call = lambda: self.api.replace(modal.target_id, draft)  # noqa: E731
        else:
            call = lambda: self.api.create(draft)  # noqa: E731
        self.runner(call, lambda result: self._submit_done(session, result))
        return True

    def _submit_done(self, session: int, result: ApiResult) -> None:
        if session != self._state.session:
            log(f"Discarding late submit result for session {session}: {result}", logging.INFO)
        self.dispatch(SubmitFinished(session, result))
        # The server changed even if the form that asked for it is gone.
        if isinstance(result, Success):
            self.refresh()

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------
    def delete(self, user_id: int) -> bool:
        """Delete after confirmation. Returns False when declined or busy."""
        if self._state.deleting is not None:
            log(f"Delete ignored: user {self._state.deleting} still being deleted", logging.DEBUG)
            return False
        user = next((u for u in self._state.users if u.id == user_id), None)
        if not self.confirm(user_id, user):
            log(f"Delete of user {user_id} cancelled", logging.INFO)
            return False

        self.dispatch(DeleteStarted(user_id))
        self.runner(lambda: self.api.remove(user_id), lambda result: self._delete_done(user_id, result))
        return True

    def _delete_done(self, user_id: int, result: ApiResult) -> None:
        self.dispatch(DeleteFinished(user_id, result))
        if isinstance(result, Success):
            self.refresh()

    def dismiss_banner(self) -> None:
        self.dispatch(DismissBanner())
