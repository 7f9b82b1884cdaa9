import os
import sys

import pytest

ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from usermgmt.models.draft import UserDraft
from usermgmt.models.schemas import UserSchema


def make_user(**overrides):
    data = {"id": 7, "name": "Ada", "age": 36, "salary": 5000, "mobileNumber": "5550100"}
    data.update(overrides)
    return UserSchema.model_validate(data)


def test_user_schema_reads_wire_names():
    user = make_user()
    assert user.mobile_number == "5550100"
    assert user.salary == 5000.0


def test_user_schema_round_trips_to_wire_names():
    assert make_user().to_payload() == {
        "id": 7,
        "name": "Ada",
        "age": 36,
        "salary": 5000.0,
        "mobileNumber": "5550100",
    }


def test_user_schema_requires_id():
    with pytest.raises(ValueError):
        UserSchema.model_validate({"name": "Ada", "age": 1, "salary": 1, "mobileNumber": "1"})


def test_user_schema_rejects_negative_age():
    with pytest.raises(ValueError):
        make_user(age=-1)


def test_user_schema_is_immutable():
    user = make_user()
    with pytest.raises(ValueError):
        user.name = "Grace"


def test_empty_draft_has_no_id_and_omits_it_from_payload():
    draft = UserDraft()
    assert draft.id is None
    assert "id" not in draft.to_payload()
    assert draft.to_payload() == {"name": "", "age": 0, "salary": 0, "mobileNumber": ""}


def test_draft_from_user_keeps_id():
    draft = UserDraft.from_user(make_user())
    assert draft.id == 7
    assert draft.to_payload()["id"] == 7
    assert draft.get("mobileNumber") == "5550100"


def test_with_field_returns_new_value():
    draft = UserDraft()
    changed = draft.with_field("mobileNumber", "555")
    assert changed.mobile_number == "555"
    assert draft.mobile_number == ""
    assert changed is not draft


def test_with_field_keeps_raw_input():
    assert UserDraft().with_field("age", "abc").age == "abc"


def test_with_field_unknown_name():
    with pytest.raises(KeyError):
        UserDraft().with_field("email", "x")
