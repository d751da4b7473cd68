# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for the Session entity."""

import time
from datetime import UTC, datetime, timedelta

import pytest
from pydantic import BaseModel

from sessionkit.session.cookie import derive_id
from sessionkit.session.exceptions import SessionSerializationError
from sessionkit.session.session import Session, SessionRecord


class Profile(BaseModel):
    name: str
    age: int


class TestSessionCreation:
    def test_new_session_defaults(self):
        session = Session()
        assert session.expiry is None
        assert session.is_empty()
        assert len(session) == 0
        assert session.data_changed is False
        assert session.is_destroyed is False

    def test_id_derived_from_cookie_value(self):
        session = Session()
        cookie_value = session.take_cookie_value()
        assert cookie_value is not None
        assert session.id == derive_id(cookie_value)
        assert Session.id_from_cookie_value(cookie_value) == session.id

    def test_new_alias(self):
        assert Session.new().take_cookie_value() is not None

    def test_from_parts_has_no_cookie_value(self):
        expiry = datetime.now(UTC) + timedelta(hours=1)
        session = Session.from_parts("some-id", {"a": 1}, expiry)
        assert session.id == "some-id"
        assert session.get("a", int) == 1
        assert session.expiry == expiry
        assert session.take_cookie_value() is None
        assert session.data_changed is False

    def test_ids_do_not_collide(self):
        ids = {Session().id for _ in range(10_000)}
        assert len(ids) == 10_000


class TestSessionEquality:
    def test_equality_is_by_id(self):
        a = Session.from_parts("same", {"x": 1})
        b = Session.from_parts("same", {"x": 2})
        assert a == b
        assert hash(a) == hash(b)

    def test_different_ids_not_equal(self):
        assert Session() != Session()

    def test_repr_hides_cookie_value(self):
        session = Session()
        secret = session.copy().take_cookie_value()
        assert secret not in repr(session)


class TestSessionData:
    def test_insert_and_get(self):
        session = Session()
        session.insert("user_id", 1)
        assert session.get("user_id", int) == 1
        assert session.get_value("user_id") == 1
        assert session.data_changed is True

    def test_get_without_type_returns_raw_value(self):
        session = Session()
        session.insert("tags", ["a", "b"])
        assert session.get("tags") == ["a", "b"]

    def test_get_missing_returns_none(self):
        assert Session().get("missing", str) is None
        assert Session().get_value("missing") is None

    def test_get_wrong_shape_returns_none(self):
        session = Session()
        session.insert("name", "alice")
        assert session.get("name", int) is None

    def test_insert_model_and_read_back(self):
        session = Session()
        session.insert("profile", Profile(name="Ada", age=36))
        assert session.get_value("profile") == {"name": "Ada", "age": 36}
        assert session.get("profile", Profile) == Profile(name="Ada", age=36)

    def test_insert_unserializable_raises(self):
        session = Session()
        with pytest.raises(SessionSerializationError) as exc_info:
            session.insert("bad", object())
        assert exc_info.value.key == "bad"
        assert "bad" not in session
        assert session.data_changed is False

    def test_insert_same_value_is_noop(self):
        session = Session()
        session.insert_value("k", "v")
        session.reset_data_changed()
        session.insert_value("k", "v")
        assert session.data_changed is False

    def test_insert_different_value_marks_changed(self):
        session = Session.from_parts("id", {"k": "v"})
        session.insert_value("k", "w")
        assert session.data_changed is True

    def test_insert_bool_over_int_marks_changed(self):
        session = Session.from_parts("id", {"k": 1})
        session.insert_value("k", True)
        assert session.data_changed is True
        assert session.get_value("k") is True

    def test_insert_none_into_missing_key_marks_changed(self):
        session = Session()
        session.insert_value("k", None)
        assert session.data_changed is True
        assert "k" in session

    def test_remove_present_key_marks_changed(self):
        session = Session.from_parts("id", {"k": 1})
        session.remove("k")
        assert session.data_changed is True
        assert "k" not in session

    def test_remove_absent_key_does_not_mark_changed(self):
        session = Session()
        session.remove("missing")
        assert session.data_changed is False

    def test_take_value(self):
        session = Session.from_parts("id", {"k": [1, 2]})
        assert session.take_value("k") == [1, 2]
        assert session.take_value("k") is None
        assert session.data_changed is True

    def test_data_is_a_copy(self):
        session = Session.from_parts("id", {"k": {"nested": 1}})
        session.data["k"]["nested"] = 2
        session.get_value("k")["nested"] = 3
        assert session.get_value("k") == {"nested": 1}

    def test_reset_data_changed(self):
        session = Session()
        session.insert("k", 1)
        session.reset_data_changed()
        assert session.data_changed is False


class TestSessionCookieValue:
    def test_take_cookie_value_only_once(self):
        session = Session()
        assert session.take_cookie_value() is not None
        assert session.take_cookie_value() is None

    def test_into_cookie_value(self):
        session = Session()
        assert session.into_cookie_value() is not None
        assert session.into_cookie_value() is None

    def test_set_cookie_value(self):
        session = Session.from_parts("id")
        session.set_cookie_value("abc")
        assert session.take_cookie_value() == "abc"

    def test_regenerate_rotates_identity_and_keeps_data(self):
        session = Session()
        session.insert("k", "v")
        old_id = session.id
        old_cookie = session.take_cookie_value()

        session.regenerate()

        new_cookie = session.take_cookie_value()
        assert session.id != old_id
        assert new_cookie is not None and new_cookie != old_cookie
        assert session.id == derive_id(new_cookie)
        assert session.get("k", str) == "v"


class TestSessionExpiry:
    def test_no_expiry_never_expires(self):
        session = Session()
        assert session.is_expired() is False
        assert session.expires_in is None
        assert session.validate() is session

    def test_expire_in_future(self):
        session = Session()
        session.expire_in(timedelta(minutes=5))
        assert session.is_expired() is False
        assert timedelta(minutes=4) < session.expires_in <= timedelta(minutes=5)

    def test_expire_in_accepts_seconds(self):
        session = Session()
        session.expire_in(60)
        assert session.expires_in > timedelta(seconds=50)

    def test_expired_session(self):
        session = Session()
        session.expire_in(timedelta(milliseconds=10))
        time.sleep(0.05)
        assert session.is_expired() is True
        assert session.expires_in is None
        assert session.validate() is None

    def test_set_expiry_in_past(self):
        session = Session()
        session.set_expiry(datetime.now(UTC) - timedelta(seconds=1))
        assert session.is_expired() is True

    def test_set_expiry_naive_is_utc(self):
        session = Session()
        session.set_expiry(datetime(2000, 1, 1))
        assert session.expiry.tzinfo is UTC
        assert session.is_expired() is True


class TestSessionDestroy:
    def test_destroy_only_sets_flag(self):
        session = Session()
        session.insert("k", "v")
        session.destroy()
        assert session.is_destroyed is True
        assert session.get("k", str) == "v"


class TestSessionRecord:
    def test_record_has_only_durable_fields(self):
        session = Session()
        session.insert("k", "v")
        session.destroy()
        dumped = session.to_record().model_dump()
        assert set(dumped) == {"id", "expiry", "data"}

    def test_round_trip_through_record(self):
        session = Session()
        session.expire_in(timedelta(hours=1))
        session.insert("k", {"a": [1, 2]})
        json_text = session.to_record().model_dump_json()

        restored = Session.from_record(SessionRecord.model_validate_json(json_text))

        assert restored == session
        assert restored.expiry == session.expiry
        assert restored.data == session.data
        assert restored.data_changed is False
        assert restored.take_cookie_value() is None


class TestSessionCopy:
    def test_copy_is_independent(self):
        session = Session()
        session.insert("k", {"a": 1})
        clone = session.copy()

        clone.insert("k", {"a": 2})

        assert session.get_value("k") == {"a": 1}
        assert clone == session
        assert clone.take_cookie_value() == session.take_cookie_value()


class TestSessionTruthiness:
    def test_empty_session_is_truthy(self):
        session = Session()
        assert len(session) == 0
        assert session


class TestSessionTimezoneHandling:
    def test_from_parts_naive_expiry_is_utc(self):
        naive = datetime.now(UTC).replace(tzinfo=None) + timedelta(hours=1)
        session = Session.from_parts("abc", {}, naive)
        assert session.expiry.tzinfo is UTC
        assert session.is_expired() is False

    def test_from_parts_naive_past_expiry_is_expired(self):
        session = Session.from_parts("abc", {}, datetime(2020, 1, 1))
        assert session.is_expired() is True
        assert session.validate() is None

    def test_record_with_naive_expiry(self):
        record = SessionRecord.model_validate_json('{"id": "x", "expiry": "2020-01-01T00:00:00", "data": {}}')
        assert Session.from_record(record).is_expired() is True


class TestSessionTypedGetIsStrict:
    def test_string_is_not_an_int(self):
        session = Session()
        session.insert("a", "1")
        assert session.get("a", int) is None
        assert session.get("a", str) == "1"

    def test_bool_is_not_an_int(self):
        session = Session()
        session.insert("a", True)
        assert session.get("a", int) is None
        assert session.get("a", bool) is True

    def test_int_is_not_a_string(self):
        session = Session()
        session.insert("a", 1)
        assert session.get("a", str) is None

    def test_datetime_round_trips(self):
        moment = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
        session = Session()
        session.insert("at", moment)
        assert session.get("at", datetime) == moment

    def test_list_of_ints(self):
        session = Session()
        session.insert("ids", [1, 2, 3])
        assert session.get("ids", list[int]) == [1, 2, 3]
        assert session.get("ids", list[str]) is None

    def test_non_json_value_reads_as_none(self):
        session = Session()
        session.insert_value("raw", object())
        assert session.get("raw", str) is None


class TestSessionChangeTrackingCopies:
    def test_mutating_inserted_object_is_detected(self):
        items = [1]
        session = Session()
        session.insert_value("k", items)
        session.reset_data_changed()

        items.append(2)
        session.insert_value("k", items)

        assert session.data_changed is True
        assert session.get_value("k") == [1, 2]

    def test_stored_value_is_not_the_callers_object(self):
        payload = {"a": 1}
        session = Session()
        session.insert_value("k", payload)
        payload["a"] = 2
        assert session.get_value("k") == {"a": 1}

    def test_nested_bool_over_int_marks_changed(self):
        session = Session.from_parts("id", {"k": {"a": 1}})
        session.insert_value("k", {"a": True})
        assert session.data_changed is True

    def test_nested_list_bool_over_int_marks_changed(self):
        session = Session.from_parts("id", {"k": [0, 1]})
        session.insert_value("k", [0, True])
        assert session.data_changed is True

    def test_equal_nested_value_is_noop(self):
        session = Session.from_parts("id", {"k": {"a": [1, {"b": None}]}})
        session.insert_value("k", {"a": [1, {"b": None}]})
        assert session.data_changed is False
