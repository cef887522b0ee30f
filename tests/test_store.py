"""Tests for the record store.

Invariants:
1. create validates every field and names the offending one
2. create then get returns the draft plus id and created_at
3. update applies only present fields; empty payload is a no-op failure
4. get/update/delete on unknown ids raise NotFound
5. list_all is newest first
"""

import threading
from datetime import date, datetime, timezone

import pytest

from ranklog.core.calendar import reference_day
from ranklog.core.errors import (
    InvalidRole,
    NoOpUpdate,
    NotFound,
    StoreUnavailable,
    ValidationError,
)
from ranklog.db.session import Database, create_db_engine
from ranklog.models.domain import AdcLineup, TopLineup
from ranklog.records.store import RecordStore


class TestCreate:
    """Tests for RecordStore.create."""

    def test_create_then_get_round_trips(self, store, make_draft):
        """get returns the draft plus assigned id and created_at."""
        draft = make_draft(occurred_on=date(2026, 10, 3), video_url="https://youtu.be/abc")
        before = datetime.now(timezone.utc)

        record_id = store.create(draft)
        record = store.get(record_id)

        assert record.record_id == record_id
        assert record.lineup == AdcLineup("Jinx", "Thresh", "Caitlyn", "Lux")
        assert (record.kills, record.deaths, record.assists) == (5, 2, 10)
        assert record.kill_participation == 60.0
        assert record.cs_per_min == 7.5
        assert record.win is True
        assert record.match_category == "solo_queue"
        assert record.occurred_on == date(2026, 10, 3)
        assert record.video_url == "https://youtu.be/abc"
        assert record.notes is None
        assert record.ai_summary is None
        assert record.created_at >= before.replace(microsecond=0)
        assert record.created_at.tzinfo is not None

    def test_assigns_increasing_ids(self, store, make_draft):
        """Each create gets a new id."""
        first = store.create(make_draft())
        second = store.create(make_draft())
        assert second > first

    def test_occurred_on_defaults_to_reference_day(self, store, make_draft):
        """Missing occurred_on uses the entry time's reference-timezone day."""
        record = store.get(store.create(make_draft()))
        assert record.occurred_on == reference_day(record.created_at)

    def test_ignores_slots_of_other_roles(self, store, make_draft):
        """Slots outside the role are dropped, not stored."""
        slots = {
            "my_top": "Ornn",
            "my_jungle": "Sejuani",
            "enemy_top": "Darius",
            "enemy_jungle": "Graves",
            "my_adc": "Jinx",
        }
        record = store.get(store.create(make_draft(role="top", slots=slots)))
        assert record.lineup == TopLineup("Ornn", "Sejuani", "Darius", "Graves")

    def test_ai_summary_derived_from_notes(self, store, make_draft):
        """Notes without a summary get one at creation."""
        record = store.get(store.create(make_draft(notes="Played well in lane")))
        assert record.ai_summary == "Strengths: Played well in lane"

    def test_supplied_ai_summary_kept(self, store, make_draft):
        """A supplied summary is stored as-is."""
        record = store.get(
            store.create(make_draft(notes="Played well", ai_summary="Custom summary"))
        )
        assert record.ai_summary == "Custom summary"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("kills", None),
            ("deaths", -1),
            ("assists", 2.5),
            ("kills", True),
            ("kill_participation", 100.5),
            ("kill_participation", -0.1),
            ("kill_participation", None),
            ("cs_per_min", -1.0),
            ("cs_per_min", float("nan")),
            ("match_category", "ranked"),
            ("video_url", "not a url"),
            ("win", "yes"),
        ],
    )
    def test_invalid_field_named(self, store, make_draft, field, value):
        """Invalid values raise ValidationError naming the field."""
        with pytest.raises(ValidationError) as exc_info:
            store.create(make_draft(**{field: value}))
        assert exc_info.value.field == field
        assert store.list_all() == []

    def test_kill_participation_bounds_inclusive(self, store, make_draft):
        """0 and 100 are both valid kill participation values."""
        store.create(make_draft(kill_participation=0))
        store.create(make_draft(kill_participation=100))
        assert len(store.list_all()) == 2

    def test_missing_active_slot_named(self, store, make_draft):
        """Missing active slot is named in the error."""
        slots = {"my_adc": "Jinx", "enemy_adc": "Caitlyn", "enemy_support": "Lux"}
        with pytest.raises(ValidationError) as exc_info:
            store.create(make_draft(slots=slots))
        assert exc_info.value.field == "my_support"

    def test_unknown_role(self, store, make_draft):
        """Unknown role raises InvalidRole."""
        with pytest.raises(InvalidRole):
            store.create(make_draft(role="bot", slots={}))


class TestGetAndDelete:
    """Tests for get and delete."""

    def test_get_unknown_raises_not_found(self, store):
        """get on unknown id raises NotFound."""
        with pytest.raises(NotFound):
            store.get(999)

    def test_delete_removes_record(self, store, make_draft):
        """Deleted records are gone."""
        record_id = store.create(make_draft())
        store.delete(record_id)
        with pytest.raises(NotFound):
            store.get(record_id)

    def test_delete_twice_raises_not_found(self, store, make_draft):
        """Deleting a missing id raises NotFound."""
        record_id = store.create(make_draft())
        store.delete(record_id)
        with pytest.raises(NotFound):
            store.delete(record_id)


class TestUpdate:
    """Tests for RecordStore.update."""

    def test_update_unknown_id_raises_not_found(self, store):
        """update(999, notes) on a missing id is NotFound, not silent success."""
        with pytest.raises(NotFound):
            store.update(999, {"notes": "x"})

    def test_empty_payload_raises_noop(self, store, make_draft):
        """Empty payload raises NoOpUpdate."""
        record_id = store.create(make_draft())
        with pytest.raises(NoOpUpdate):
            store.update(record_id, {})

    def test_only_present_fields_change(self, store, make_draft):
        """Unset fields keep their values."""
        record_id = store.create(make_draft(video_url="https://youtu.be/abc"))
        updated = store.update(record_id, {"notes": "Need to ward more"})

        assert updated.notes == "Need to ward more"
        assert updated.video_url == "https://youtu.be/abc"
        assert updated.kills == 5
        assert store.get(record_id) == updated

    def test_ai_summary_not_recomputed(self, store, make_draft):
        """Editing notes leaves the creation-time summary alone."""
        record_id = store.create(make_draft(notes="Played well"))
        original = store.get(record_id).ai_summary
        updated = store.update(record_id, {"notes": "Died too often"})
        assert updated.ai_summary == original

    def test_blank_notes_clear_field(self, store, make_draft):
        """Empty string clears notes."""
        record_id = store.create(make_draft(notes="something"))
        assert store.update(record_id, {"notes": ""}).notes is None

    def test_full_edit_with_role_change(self, store, make_draft):
        """Changing role requires and stores the new role's slots."""
        record_id = store.create(make_draft())
        updated = store.update(
            record_id,
            {
                "role": "top",
                "my_top": "Ornn",
                "my_jungle": "Sejuani",
                "enemy_top": "Darius",
                "enemy_jungle": "Graves",
                "kills": 1,
            },
        )
        assert updated.lineup == TopLineup("Ornn", "Sejuani", "Darius", "Graves")
        assert store.get(record_id).kills == 1

    def test_role_change_without_slots_rejected(self, store, make_draft):
        """Role change missing new slots fails and leaves the record intact."""
        record_id = store.create(make_draft())
        with pytest.raises(ValidationError) as exc_info:
            store.update(record_id, {"role": "mid"})
        assert exc_info.value.field == "my_mid"
        assert store.get(record_id).role == "adc"

    def test_invalid_value_rejected(self, store, make_draft):
        """Updated values go through create validation."""
        record_id = store.create(make_draft())
        with pytest.raises(ValidationError) as exc_info:
            store.update(record_id, {"kill_participation": 150})
        assert exc_info.value.field == "kill_participation"

    @pytest.mark.parametrize("field", ["id", "created_at", "ai_summary", "champion"])
    def test_non_editable_field_rejected(self, store, make_draft, field):
        """Immutable or unknown fields cannot be updated."""
        record_id = store.create(make_draft())
        with pytest.raises(ValidationError) as exc_info:
            store.update(record_id, {field: "x"})
        assert exc_info.value.field == field

    @pytest.mark.parametrize(
        "field",
        ["win", "match_category", "role", "kills", "cs_per_min", "occurred_on"],
    )
    def test_null_for_required_field_rejected(self, store, make_draft, field):
        """Explicit null cannot reset a required field to its default."""
        record_id = store.create(make_draft(win=True, match_category="scrim"))
        with pytest.raises(ValidationError) as exc_info:
            store.update(record_id, {field: None})
        assert exc_info.value.field == field

        record = store.get(record_id)
        assert record.win is True
        assert record.match_category == "scrim"

    def test_null_clears_optional_text(self, store, make_draft):
        """notes and video_url accept null."""
        record_id = store.create(
            make_draft(notes="ok", video_url="https://example.com/vod")
        )
        updated = store.update(record_id, {"notes": None, "video_url": None})
        assert updated.notes is None
        assert updated.video_url is None

    def test_created_at_unchanged(self, store, make_draft):
        """Updates never touch created_at."""
        record_id = store.create(make_draft())
        created_at = store.get(record_id).created_at
        store.update(record_id, {"win": False})
        assert store.get(record_id).created_at == created_at

    def test_concurrent_updates_last_write_wins(self, store, make_draft):
        """Concurrent whole-call updates leave one complete write."""
        record_id = store.create(make_draft())
        payloads = [{"notes": f"note {i}", "kills": i} for i in range(8)]

        threads = [threading.Thread(target=store.update, args=(record_id, p)) for p in payloads]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        final = store.get(record_id)
        assert final.notes == f"note {final.kills}"


class TestListAll:
    """Tests for list_all ordering."""

    def test_newest_first(self, store, make_draft):
        """Most recently created records come first."""
        ids = [store.create(make_draft()) for _ in range(3)]
        assert [r.record_id for r in store.list_all()] == list(reversed(ids))

    def test_empty(self, store):
        """Empty store lists nothing."""
        assert store.list_all() == []


class TestStoreUnavailable:
    """Persistence failures are distinct from missing records."""

    def test_missing_schema_is_store_unavailable(self):
        """Unreachable tables raise StoreUnavailable, not NotFound."""
        database = Database(create_db_engine("sqlite:///:memory:"))
        store = RecordStore(database)
        with pytest.raises(StoreUnavailable):
            store.get(1)
        with pytest.raises(StoreUnavailable):
            store.list_all()
        database.close()


class TestConcurrentAccess:
    """Reads and writes from many threads share one database handle."""

    @pytest.mark.parametrize("url", ["sqlite:///:memory:", "file"])
    def test_creates_interleaved_with_reads(self, tmp_path, make_draft, url):
        """Concurrent creates and list_all calls all succeed."""
        if url == "file":
            url = f"sqlite:///{tmp_path / 'ranklog.db'}"
        database = Database.open(url)
        store = RecordStore(database)
        errors = []
        writers_done = threading.Event()

        def write():
            try:
                for _ in range(25):
                    store.create(make_draft())
            except Exception as e:  # collected for the assertion below
                errors.append(("create", repr(e)))

        def read():
            try:
                while not writers_done.is_set():
                    store.list_all()
            except Exception as e:  # collected for the assertion below
                errors.append(("list", repr(e)))

        writers = [threading.Thread(target=write) for _ in range(4)]
        readers = [threading.Thread(target=read) for _ in range(4)]
        for t in readers + writers:
            t.start()
        for t in writers:
            t.join()
        writers_done.set()
        for t in readers:
            t.join()

        assert errors == []
        assert len(store.list_all()) == 100
        database.close()
