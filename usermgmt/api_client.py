"""
Users API Client - CRUD calls against the Users REST endpoint.

Each public method performs exactly one HTTP request and returns an ApiResult
(Success / ValidationFailure / TransportFailure). Nothing raised by requests or
by payload parsing escapes this module; the caller decides how to surface it.
"""
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union

import requests
from pydantic import ValidationError

from .config import get_settings
from .models.draft import UserDraft
from .models.schemas import UserSchema
from .results import ApiResult, Success, TransportFailure, ValidationFailure
from .utils.logger import get_logger

logger = get_logger(__name__)

USERS_PATH = "/users"

# Expected success statuses per operation; the server may answer updates and
# deletes with or without a body.
CREATED = (201,)
OK = (200,)
OK_OR_NO_CONTENT = (200, 204)
VALIDATION_STATUS = 400


class UserApi(Protocol):
    """Operations the view controller needs from a Users backend."""

    def list_all(self) -> ApiResult: ...

    def create(self, draft: UserDraft) -> ApiResult: ...

    def replace(self, user_id: int, draft: UserDraft) -> ApiResult: ...

    def patch(self, user_id: int, partial: Union[UserDraft, Mapping[str, Any]]) -> ApiResult: ...

    def remove(self, user_id: int) -> ApiResult: ...


class UserApiClient:
    """
    Client for the Users REST API.

    Provides methods to:
    - List all users
    - Get one user
    - Create, replace and partially update a user
    - Delete a user
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the Users API client.

        Args:
            base_url: API root, e.g. http://localhost:9393/api (defaults to settings)
            timeout: Per-request timeout in seconds (defaults to settings)
            session: requests.Session to reuse (auto-created if not provided)
        """
        settings = get_settings()
        self.base_url = (base_url or settings.api_base).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )

    def _url(self, user_id: Optional[int] = None) -> str:
        if user_id is None:
            return f"{self.base_url}{USERS_PATH}"
        return f"{self.base_url}{USERS_PATH}/{user_id}"

    def _send(self, method: str, url: str, **kwargs) -> Union[requests.Response, TransportFailure]:
        """Perform the request, converting connection-level errors to TransportFailure."""
        logger.debug("%s %s", method, url)
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.Timeout:
            logger.error("No response received from server: %s %s timed out", method, url)
            return TransportFailure(f"{method} {url} timed out after {self.timeout}s")
        except requests.RequestException as exc:
            logger.error("No response received from server: %s %s (%s)", method, url, exc)
            return TransportFailure(f"{method} {url} failed: {exc}")

    @staticmethod
    def _body(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def _unexpected(self, method: str, url: str, response: requests.Response) -> TransportFailure:
        logger.error(
            "Server responded with error: %s %s -> %s %s",
            method,
            url,
            response.status_code,
            response.text[:500],
        )
        return TransportFailure(f"{method} {url} returned HTTP {response.status_code}")

    def _mutate(
        self,
        method: str,
        url: str,
        payload: Dict[str, Any],
        expected: tuple,
    ) -> ApiResult:
        """Send a create/update and map the outcome, including 400 field errors."""
        response = self._send(method, url, json=payload)
        if isinstance(response, TransportFailure):
            return response

        if response.status_code in expected:
            body = self._body(response)
            if isinstance(body, dict):
                try:
                    return Success(UserSchema.model_validate(body))
                except ValidationError:
                    logger.debug("Response body for %s %s is not a user; ignoring", method, url)
            return Success(None)

        if response.status_code == VALIDATION_STATUS:
            body = self._body(response)
            if not isinstance(body, dict):
                logger.error("Validation response without field map: %s", response.text[:500])
                return TransportFailure(
                    f"{method} {url} returned HTTP 400 without field errors"
                )
            errors = {str(k): v if isinstance(v, str) else str(v) for k, v in body.items()}
            logger.warning("Server rejected %s %s: %s", method, url, errors)
            return ValidationFailure(errors)

        return self._unexpected(method, url, response)

    def list_all(self) -> ApiResult:
        """
        Fetch every user.

        Returns:
            Success(list[UserSchema]) in server order, or TransportFailure
        """
        url = self._url()
        response = self._send("GET", url)
        if isinstance(response, TransportFailure):
            return response
        if response.status_code not in OK:
            return self._unexpected("GET", url, response)

        body = self._body(response)
        if not isinstance(body, list):
            logger.error("Expected a list of users, got: %s", response.text[:500])
            return TransportFailure(f"GET {url} returned a malformed user list")
        try:
            users: List[UserSchema] = [UserSchema.model_validate(item) for item in body]
        except ValidationError as exc:
            logger.error("Malformed user in list response: %s", exc)
            return TransportFailure(f"GET {url} returned a malformed user: {exc.error_count()} error(s)")
        logger.info("Fetched %d users", len(users))
        return Success(users)

    def get(self, user_id: int) -> ApiResult:
        """
        Fetch a single user by id.

        Returns:
            Success(UserSchema) or TransportFailure
        """
        url = self._url(user_id)
        response = self._send("GET", url)
        if isinstance(response, TransportFailure):
            return response
        if response.status_code not in OK:
            return self._unexpected("GET", url, response)
        try:
            return Success(UserSchema.model_validate(self._body(response)))
        except ValidationError as exc:
            logger.error("Malformed user response: %s", exc)
            return TransportFailure(f"GET {url} returned a malformed user")

    def create(self, draft: UserDraft) -> ApiResult:
        """POST a new user. 201 is success, 400 carries field errors."""
        return self._mutate("POST", self._url(), draft.to_payload(), CREATED)

    def replace(self, user_id: int, draft: UserDraft) -> ApiResult:
        """PUT the full user. 200/204 is success, 400 carries field errors."""
        return self._mutate("PUT", self._url(user_id), draft.to_payload(), OK_OR_NO_CONTENT)

    def patch(self, user_id: int, partial: Union[UserDraft, Mapping[str, Any]]) -> ApiResult:
        """PATCH only the given fields. 200/204 is success, 400 carries field errors."""
        if isinstance(partial, UserDraft):
            payload = partial.to_payload()
        else:
            payload = dict(partial)
        return self._mutate("PATCH", self._url(user_id), payload, OK_OR_NO_CONTENT)

    def remove(self, user_id: int) -> ApiResult:
        """DELETE a user. Deletion has no field-level validation."""
        url = self._url(user_id)
        response = self._send("DELETE", url)
        if isinstance(response, TransportFailure):
            return response
        if response.status_code in OK_OR_NO_CONTENT:
            logger.info("Deleted user %s", user_id)
            return Success(None)
        return self._unexpected("DELETE", url, response)
