"""Tests for the JSON pin store."""

import json
from uuid import uuid4

import pytest

from abroad.models import AppSession, Pin, TransportEntry
from abroad.storage import PinStore, PinStoreError


class TestPinStore:
    """Tests for PinStore."""

    def test_missing_file_is_empty(self, tmp_path):
        """Test that a fresh data directory has no pins."""
        store = PinStore(tmp_path / "data")
        assert store.get_all() == []
        assert (tmp_path / "data").is_dir()

    def test_append_and_reload(self, tmp_path):
        """Test that saved pins come back in order with their fields."""
        store = PinStore(tmp_path)
        first = Pin(
            title="Paris",
            latitude=48.85,
            longitude=2.35,
            trip_budget=1200,
            transport_entries=[TransportEntry(mode="Train", distance="450")],
        )
        second = Pin(title="Kyoto")
        store.append(first)
        store.append(second)

        pins = PinStore(tmp_path).get_all()
        assert [p.title for p in pins] == ["Paris", "Kyoto"]
        assert pins[0].transport_entries[0].distance == "450"
        assert pins[0].model_dump() == first.model_dump()

    def test_file_uses_camel_case(self, tmp_path):
        """Test the on-disk keys."""
        store = PinStore(tmp_path)
        store.append(Pin(title="Paris", trip_budget=10))
        records = json.loads(store.pins_path.read_text(encoding="utf-8"))
        assert records[0]["tripBudget"] == 10
        assert "transportEntries" in records[0]

    def test_invalid_record_skipped(self, tmp_path):
        """Test that one broken record does not hide the others."""
        store = PinStore(tmp_path)
        good = Pin(title="Paris").to_storage()
        bad = dict(good, id=str(uuid4()), latitude=500)
        store.pins_path.write_text(json.dumps([bad, good]), encoding="utf-8")
        assert [p.title for p in store.get_all()] == ["Paris"]

    def test_corrupt_file(self, tmp_path):
        """Test that unreadable JSON loads as no pins."""
        store = PinStore(tmp_path)
        store.pins_path.write_text("{not json", encoding="utf-8")
        assert store.get_all() == []

    def test_non_list_file(self, tmp_path):
        """Test that a JSON object instead of a list loads as no pins."""
        store = PinStore(tmp_path)
        store.pins_path.write_text('{"title": "Paris"}', encoding="utf-8")
        assert store.get_all() == []

    def test_get_and_remove(self, tmp_path):
        """Test lookup by id and removal."""
        store = PinStore(tmp_path)
        pin = Pin(title="Paris")
        store.append(pin)
        assert store.get(pin.id).title == "Paris"
        assert store.remove(pin.id) is True
        assert store.remove(pin.id) is False
        assert store.get(pin.id) is None

    def test_update(self, tmp_path):
        """Test that update saves the mutated pin."""
        store = PinStore(tmp_path)
        pin = Pin(title="Paris")
        store.append(pin)

        saved = store.update(pin.id, lambda p: p.add_transport_entry("Bus", "30"))

        assert saved.transport_entries[0].mode == "Bus"
        assert store.get(pin.id).transport_entries[0].distance == "30"
        assert pin.transport_entries == []

    def test_update_unknown_id(self, tmp_path):
        """Test that updating a missing pin changes nothing."""
        store = PinStore(tmp_path)
        assert store.update(uuid4(), lambda p: None) is None
        assert not store.pins_path.exists()

    def test_replace_all(self, tmp_path):
        """Test replacing the whole collection."""
        store = PinStore(tmp_path)
        store.append(Pin(title="Paris"))
        store.replace_all([Pin(title="Rome"), Pin(title="Oslo")])
        assert [p.title for p in store.get_all()] == ["Rome", "Oslo"]


class TestWritesKeepStoredData:
    """Tests that writes never drop records the store could not load."""

    def setup_method(self):
        """Set up test fixtures."""
        self.good = Pin(title="Paris").to_storage()
        self.bad = dict(Pin(title="Lima").to_storage(), latitude=500)

    def read_titles(self, store):
        records = json.loads(store.pins_path.read_text(encoding="utf-8"))
        return [record["title"] for record in records]

    def test_append_keeps_invalid_record(self, tmp_path):
        """Test that an invalid record survives an append unchanged."""
        store = PinStore(tmp_path)
        store.pins_path.write_text(json.dumps([self.bad, self.good]), encoding="utf-8")

        store.append(Pin(title="Kyoto"))

        records = json.loads(store.pins_path.read_text(encoding="utf-8"))
        assert [r["title"] for r in records] == ["Lima", "Paris", "Kyoto"]
        assert records[0] == self.bad
        assert [p.title for p in store.get_all()] == ["Paris", "Kyoto"]

    def test_update_and_remove_keep_invalid_record(self, tmp_path):
        """Test that update and remove leave invalid records in place."""
        store = PinStore(tmp_path)
        store.pins_path.write_text(json.dumps([self.good, self.bad]), encoding="utf-8")
        paris_id = store.get_all()[0].id

        store.update(paris_id, lambda p: setattr(p, "trip_rating", 5))
        assert self.read_titles(store) == ["Paris", "Lima"]

        assert store.remove(paris_id) is True
        assert self.read_titles(store) == ["Lima"]

    def test_truncated_file_is_not_overwritten(self, tmp_path):
        """Test that a write refuses to replace a file it cannot parse."""
        store = PinStore(tmp_path)
        store.append(Pin(title="Paris"))
        truncated = store.pins_path.read_bytes()[:-3]
        store.pins_path.write_bytes(truncated)

        with pytest.raises(PinStoreError):
            store.append(Pin(title="Kyoto"))

        assert store.pins_path.read_bytes() == truncated
        assert b"Paris" in truncated

    def test_non_list_file_is_not_overwritten(self, tmp_path):
        """Test that a write refuses to replace a file that is not a list."""
        store = PinStore(tmp_path)
        store.pins_path.write_text('{"title": "Paris"}', encoding="utf-8")

        with pytest.raises(PinStoreError):
            store.remove(uuid4())

        assert json.loads(store.pins_path.read_text(encoding="utf-8")) == {"title": "Paris"}

    def test_no_temp_files_left(self, tmp_path):
        """Test that writes leave only the pins and session files behind."""
        store = PinStore(tmp_path)
        store.append(Pin(title="Paris"))
        store.save_session(AppSession())
        assert sorted(p.name for p in tmp_path.iterdir()) == ["pins.json", "session.json"]


class TestSessionPersistence:
    """Tests for saving and loading the app session."""

    def test_default_when_missing(self, tmp_path):
        """Test that no session file gives a fresh session."""
        session = PinStore(tmp_path).load_session()
        assert session.has_seen_welcome_popup is False
        assert session.user_carbon_goal == 5000

    def test_round_trip(self, tmp_path):
        """Test that saved flags come back."""
        store = PinStore(tmp_path)
        store.save_session(
            AppSession(has_seen_welcome_popup=True, has_shown_analysis_notification=True, user_carbon_goal=1200)
        )
        session = store.load_session()
        assert session.has_seen_welcome_popup is True
        assert session.has_shown_analysis_notification is True
        assert session.user_carbon_goal == 1200

    def test_corrupt_session(self, tmp_path):
        """Test that a broken session file falls back to defaults."""
        store = PinStore(tmp_path)
        store.session_path.write_text("[]", encoding="utf-8")
        assert store.load_session().has_seen_welcome_popup is False
