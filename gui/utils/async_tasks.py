"""Runners for blocking work such as HTTP calls.

``run_async`` executes the call immediately and hands the result to the
callback; tests and the CLI use it. ``ThreadedRunner`` runs the call on a
daemon thread and delivers the result back on the Tk event loop.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional

from gui.utils.logging import logger
from usermgmt.results import TransportFailure

Callback = Optional[Callable[[Any], None]]


def run_async(fn: Callable[[], Any], callback: Callback = None) -> Any:
    result = fn()
    if callback is not None:
        callback(result)
    return result


class ThreadedRunner:
    """Run ``fn`` in a background thread and call ``callback`` via ``root.after``."""

    def __init__(self, root):
        self.root = root

    def __call__(self, fn: Callable[[], Any], callback: Callback = None) -> None:
        def wrapper():
            try:
                result = fn()
            except Exception as exc:
                logger.exception("Background task failed")
                result = TransportFailure(f"Unexpected error: {exc}")
            if callback is not None:
                self.root.after(0, lambda cb=callback, res=result: cb(res))

        thread = threading.Thread(target=wrapper, daemon=True)
        thread.start()
