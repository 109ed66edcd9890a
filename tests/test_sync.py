"""
Replaying locally saved submissions against the server.
"""

from __future__ import annotations

from client.fallback import LocalFallbackStore
from client.sync import replay_fallback
from conftest import FakeApi, FakeClock
from utils.errors import SubmissionRejected, TransportError


class FlakyApi(FakeApi):
    """Confirms the first `ok` submissions, then goes offline."""

    def __init__(self, ok):
        super().__init__()
        self.ok = ok

    def submit(self, kind, payload):
        self.calls.append((kind, dict(payload)))
        if len(self.calls) > self.ok:
            raise TransportError("offline again")
        return {"success": True}


class PickyApi(FakeApi):
    """Refuses submissions from the given names with a 400."""

    def __init__(self, refused_names):
        super().__init__()
        self.refused_names = set(refused_names)

    def submit(self, kind, payload):
        self.calls.append((kind, dict(payload)))
        if payload["name"] in self.refused_names:
            raise SubmissionRejected("HTTP error! status: 400 Validation failed", status_code=400)
        return {"success": True}


def _store(tmp_path, kind, drafts):
    store = LocalFallbackStore(str(tmp_path / "local_storage.json"), clock=FakeClock(50.0))
    for draft in drafts:
        store.append(kind, draft)
    return store


def test_replay_sends_everything_and_empties_the_key(tmp_path, valid_contact):
    store = _store(tmp_path, "contact", [valid_contact, dict(valid_contact, name="Second")])
    api = FakeApi()

    report = replay_fallback(api, store, "contact")
    assert report.sent == 2
    assert report.rejected == 0
    assert report.remaining == 0
    assert store.entries("contact") == []
    # Only the submission fields travel, never the local id or approval flag
    assert api.calls[0] == ("contact", valid_contact)


def test_replay_stops_at_first_failure(tmp_path, valid_testimonial):
    drafts = [dict(valid_testimonial, name=f"Person {i}") for i in range(3)]
    store = _store(tmp_path, "testimonial", drafts)
    api = FlakyApi(ok=1)

    report = replay_fallback(api, store, "testimonial")
    assert report == (1, 0, 2)
    assert len(api.calls) == 2
    assert [r["name"] for r in store.entries("testimonial")] == ["Person 1", "Person 2"]
    assert store.rejected("testimonial") == []


def test_refused_record_does_not_block_the_queue(tmp_path, valid_testimonial):
    drafts = [dict(valid_testimonial, name=f"Person {i}") for i in range(3)]
    store = _store(tmp_path, "testimonial", drafts)
    api = PickyApi(refused_names={"Person 0"})

    report = replay_fallback(api, store, "testimonial")
    assert report == (2, 1, 0)
    assert len(api.calls) == 3
    assert store.entries("testimonial") == []

    rejected = store.rejected("testimonial")
    assert [r["name"] for r in rejected] == ["Person 0"]
    assert "400" in rejected[0]["rejected_reason"]

    # Nothing is sent again on the next replay
    assert replay_fallback(api, store, "testimonial") == (0, 0, 0)
    assert len(api.calls) == 3


def test_refused_then_offline(tmp_path, valid_contact):
    drafts = [dict(valid_contact, name=name) for name in ("Refused", "Good", "Later")]
    store = _store(tmp_path, "contact", drafts)

    class RefuseThenDrop(PickyApi):
        def submit(self, kind, payload):
            if payload["name"] == "Later":
                self.calls.append((kind, dict(payload)))
                raise TransportError("connection reset")
            return super().submit(kind, payload)

    report = replay_fallback(RefuseThenDrop({"Refused"}), store, "contact")
    assert report == (1, 1, 1)
    assert [r["name"] for r in store.entries("contact")] == ["Later"]
    assert [r["name"] for r in store.rejected("contact")] == ["Refused"]


def test_replay_with_nothing_saved(tmp_path):
    store = LocalFallbackStore(str(tmp_path / "local_storage.json"))
    report = replay_fallback(FakeApi(), store, "testimonial")
    assert report == (0, 0, 0)
    assert not (tmp_path / "local_storage.json").exists()
