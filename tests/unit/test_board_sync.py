"""Tests for the change-event reducer and sync states."""
from careertrail.board.sync import EntitySync, SyncStatus, apply_event
from careertrail.schemas import ChangeEvent, JobRead
from tests.fixtures.jobs import job_record


def _event(event_type, record, table="jobs"):
    return ChangeEvent(table=table, event_type=event_type, record=record)


class TestApplyEvent:

    def test_insert_appends(self):
        state = [{"id": "a"}]
        assert apply_event(state, _event("insert", {"id": "b"})) == [{"id": "a"}, {"id": "b"}]

    def test_insert_of_existing_id_replaces_in_place(self):
        state = [{"id": "a", "v": 1}, {"id": "b"}]
        out = apply_event(state, _event("insert", {"id": "a", "v": 2}))
        assert out == [{"id": "a", "v": 2}, {"id": "b"}]

    def test_update_replaces_by_id(self):
        state = [{"id": "a", "v": 1}, {"id": "b", "v": 1}]
        out = apply_event(state, _event("update", {"id": "b", "v": 2}))
        assert out == [{"id": "a", "v": 1}, {"id": "b", "v": 2}]

    def test_update_of_unknown_id_inserts(self):
        assert apply_event([], _event("update", {"id": "x"})) == [{"id": "x"}]

    def test_delete_removes(self):
        state = [{"id": "a"}, {"id": "b"}]
        assert apply_event(state, _event("delete", {"id": "a"})) == [{"id": "b"}]

    def test_delete_of_unknown_id_is_a_no_op(self):
        state = [{"id": "a"}]
        assert apply_event(state, _event("delete", {"id": "zzz"})) == [{"id": "a"}]

    def test_input_is_not_mutated(self):
        state = [{"id": "a", "v": 1}]
        apply_event(state, _event("update", {"id": "a", "v": 2}))
        apply_event(state, _event("delete", {"id": "a"}))
        assert state == [{"id": "a", "v": 1}]

    def test_accepts_dict_events_and_validates_into_model(self):
        out = apply_event([], {"table": "jobs", "event_type": "insert", "record": job_record("j1", "offer")}, model=JobRead)
        assert isinstance(out[0], JobRead)
        assert out[0].status == "offer"


class TestEntitySync:

    def test_default_is_synced(self):
        assert EntitySync().status is SyncStatus.SYNCED
        assert not EntitySync().is_pending

    def test_pending_and_error_carry_local_value(self):
        pending = EntitySync.pending("offer", seq=3)
        assert pending.is_pending
        assert (pending.local_value, pending.seq) == ("offer", 3)

        error = EntitySync.error("offer", "boom", seq=3)
        assert error.status is SyncStatus.ERROR
        assert error.reason == "boom"
