"""
Tests for usermgmt/api_client.py.
The requests session is mocked; no network access is needed.
"""

import json
import os
import sys
from unittest.mock import MagicMock

import pytest
import requests

ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from usermgmt.api_client import UserApiClient
from usermgmt.models.draft import UserDraft
from usermgmt.models.schemas import UserSchema
from usermgmt.results import Success, TransportFailure, ValidationFailure

BASE = "http://api.test/api"

ADA = {"id": 7, "name": "Ada", "age": 36, "salary": 5000, "mobileNumber": "5550100"}
GRACE = {"id": 3, "name": "Grace", "age": 45, "salary": 7000, "mobileNumber": "5550199"}


def make_response(status, body=None, raw=None):
    response = requests.Response()
    response.status_code = status
    response.encoding = "utf-8"
    if raw is not None:
        response._content = raw.encode("utf-8")
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = b""
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return UserApiClient(base_url=BASE + "/", timeout=3, session=session)


def sent(session):
    args, kwargs = session.request.call_args
    return args[0], args[1], kwargs


# ===========================================================================
# Construction
# ===========================================================================


def test_client_sets_json_headers(session):
    UserApiClient(base_url=BASE, session=session)
    session.headers.update.assert_called_once_with(
        {"Content-Type": "application/json", "Accept": "application/json"}
    )


def test_client_defaults_from_settings(monkeypatch, session):
    monkeypatch.setenv("USERMGMT_API_BASE", "http://from-env/api")
    monkeypatch.setenv("USERMGMT_TIMEOUT", "4")
    client = UserApiClient(session=session)
    assert client.base_url == "http://from-env/api"
    assert client.timeout == 4.0


# ===========================================================================
# list_all / get
# ===========================================================================


class TestListAll:
    def test_success_keeps_server_order(self, client, session):
        session.request.return_value = make_response(200, [ADA, GRACE])

        result = client.list_all()

        assert isinstance(result, Success)
        assert [u.id for u in result.value] == [7, 3]
        assert all(isinstance(u, UserSchema) for u in result.value)
        method, url, kwargs = sent(session)
        assert (method, url) == ("GET", f"{BASE}/users")
        assert kwargs["timeout"] == 3

    def test_empty_list(self, client, session):
        session.request.return_value = make_response(200, [])
        assert client.list_all() == Success([])

    def test_server_error_is_transport_failure(self, client, session):
        session.request.return_value = make_response(500, raw="boom")
        result = client.list_all()
        assert isinstance(result, TransportFailure)
        assert "500" in result.detail

    def test_400_is_not_a_validation_failure(self, client, session):
        session.request.return_value = make_response(400, {"name": "required"})
        assert isinstance(client.list_all(), TransportFailure)

    def test_connection_error(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")
        result = client.list_all()
        assert isinstance(result, TransportFailure)
        assert "refused" in result.detail

    def test_timeout(self, client, session):
        session.request.side_effect = requests.Timeout()
        result = client.list_all()
        assert isinstance(result, TransportFailure)
        assert "timed out" in result.detail

    def test_non_list_body(self, client, session):
        session.request.return_value = make_response(200, {"users": [ADA]})
        assert isinstance(client.list_all(), TransportFailure)

    def test_invalid_json(self, client, session):
        session.request.return_value = make_response(200, raw="<html>")
        assert isinstance(client.list_all(), TransportFailure)

    def test_user_without_id_is_malformed(self, client, session):
        missing_id = {k: v for k, v in ADA.items() if k != "id"}
        session.request.return_value = make_response(200, [missing_id])
        assert isinstance(client.list_all(), TransportFailure)


class TestGet:
    def test_success(self, client, session):
        session.request.return_value = make_response(200, ADA)
        result = client.get(7)
        assert result == Success(UserSchema.model_validate(ADA))
        assert sent(session)[:2] == ("GET", f"{BASE}/users/7")

    def test_not_found(self, client, session):
        session.request.return_value = make_response(404, raw="")
        result = client.get(7)
        assert isinstance(result, TransportFailure)
        assert "404" in result.detail

    def test_empty_body(self, client, session):
        session.request.return_value = make_response(200)
        assert isinstance(client.get(7), TransportFailure)


# ===========================================================================
# create / replace / patch
# ===========================================================================


class TestCreate:
    def test_201_is_success_with_created_user(self, client, session):
        session.request.return_value = make_response(201, ADA)
        draft = UserDraft(name="Ada", age=36, salary=5000, mobile_number="5550100")

        result = client.create(draft)

        assert isinstance(result, Success)
        assert result.value.id == 7
        method, url, kwargs = sent(session)
        assert (method, url) == ("POST", f"{BASE}/users")
        assert kwargs["json"] == {"name": "Ada", "age": 36, "salary": 5000, "mobileNumber": "5550100"}

    def test_201_without_body(self, client, session):
        session.request.return_value = make_response(201)
        assert client.create(UserDraft(name="Ada")) == Success(None)

    def test_200_is_not_the_create_contract(self, client, session):
        session.request.return_value = make_response(200, ADA)
        assert isinstance(client.create(UserDraft(name="Ada")), TransportFailure)

    def test_400_maps_errors_verbatim(self, client, session):
        errors = {"name": "required", "mobileNumber": "must be 10 digits"}
        session.request.return_value = make_response(400, errors)

        result = client.create(UserDraft(age=5, salary=1000, mobile_number="555"))

        assert result == ValidationFailure(errors)

    def test_400_non_string_messages_are_stringified(self, client, session):
        session.request.return_value = make_response(400, {"age": ["must be >= 0"]})
        result = client.create(UserDraft(age=-1))
        assert result == ValidationFailure({"age": "['must be >= 0']"})

    def test_400_without_field_map(self, client, session):
        session.request.return_value = make_response(400, raw="Bad Request")
        assert isinstance(client.create(UserDraft()), TransportFailure)

    def test_network_failure_never_raises(self, client, session):
        session.request.side_effect = requests.ConnectionError("down")
        assert isinstance(client.create(UserDraft()), TransportFailure)


class TestReplace:
    @pytest.mark.parametrize("status", [200, 204])
    def test_success_statuses(self, client, session, status):
        session.request.return_value = make_response(status, ADA if status == 200 else None)
        result = client.replace(7, UserDraft(id=7, name="Ada"))
        assert isinstance(result, Success)
        method, url, kwargs = sent(session)
        assert (method, url) == ("PUT", f"{BASE}/users/7")
        assert kwargs["json"]["id"] == 7

    def test_validation(self, client, session):
        session.request.return_value = make_response(400, {"age": "must be ≥0"})
        assert client.replace(7, UserDraft(id=7)) == ValidationFailure({"age": "must be ≥0"})

    def test_201_is_unexpected(self, client, session):
        session.request.return_value = make_response(201, ADA)
        assert isinstance(client.replace(7, UserDraft(id=7)), TransportFailure)

    def test_success_body_that_is_not_a_user(self, client, session):
        session.request.return_value = make_response(200, {"message": "updated"})
        assert client.replace(7, UserDraft(id=7)) == Success(None)


class TestPatch:
    def test_sends_only_given_fields(self, client, session):
        session.request.return_value = make_response(204)
        result = client.patch(7, {"salary": 6000})
        assert result == Success(None)
        method, url, kwargs = sent(session)
        assert (method, url) == ("PATCH", f"{BASE}/users/7")
        assert kwargs["json"] == {"salary": 6000}

    def test_accepts_a_draft(self, client, session):
        session.request.return_value = make_response(200, ADA)
        client.patch(7, UserDraft(id=7, name="Ada"))
        assert sent(session)[2]["json"]["name"] == "Ada"

    def test_validation(self, client, session):
        session.request.return_value = make_response(400, {"salary": "must be ≥0"})
        assert client.patch(7, {"salary": -1}) == ValidationFailure({"salary": "must be ≥0"})


# ===========================================================================
# remove
# ===========================================================================


class TestRemove:
    @pytest.mark.parametrize("status", [200, 204])
    def test_success(self, client, session, status):
        session.request.return_value = make_response(status)
        assert client.remove(7) == Success(None)
        assert sent(session)[:2] == ("DELETE", f"{BASE}/users/7")

    def test_400_has_no_validation_path(self, client, session):
        session.request.return_value = make_response(400, {"id": "in use"})
        assert isinstance(client.remove(7), TransportFailure)

    def test_server_error(self, client, session):
        session.request.return_value = make_response(503, raw="unavailable")
        assert isinstance(client.remove(7), TransportFailure)

    def test_no_retry(self, client, session):
        session.request.side_effect = requests.ConnectionError("down")
        client.remove(7)
        assert session.request.call_count == 1
