"""Uniform outcome of a Users API call.

Every client operation returns exactly one of these instead of raising, so
callers branch on the result type rather than catching transport errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Success:
    value: Any = None


@dataclass(frozen=True)
class ValidationFailure:
    """Server rejected the submission; ``errors`` maps field name -> message."""

    errors: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class TransportFailure:
    """Network problem, unexpected status, or unreadable response."""

    detail: str = ""


ApiResult = Union[Success, ValidationFailure, TransportFailure]
