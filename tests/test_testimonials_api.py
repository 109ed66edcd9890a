"""
Testimonial endpoints: submission always lands unapproved, only approved
ones are published.
"""

from __future__ import annotations

from models import Testimonial
from utils.submissions import TESTIMONIAL_SUCCESS_MESSAGE


def test_testimonial_is_stored_unapproved(client, valid_testimonial):
    r = client.post("/api/testimonials", json=valid_testimonial)
    assert r.status_code == 200
    assert r.get_json() == {"success": True, "message": TESTIMONIAL_SUCCESS_MESSAGE}

    row = Testimonial.query.one()
    assert row.name == "Jane Smith"
    assert row.is_approved is False
    assert row.date_created is not None


def test_approval_in_payload_is_ignored(client, valid_testimonial):
    for flag in (True, "true", 1):
        r = client.post("/api/testimonials", json=dict(valid_testimonial, is_approved=flag))
        assert r.status_code == 200
    assert Testimonial.query.count() == 3
    assert all(row.is_approved is False for row in Testimonial.query.all())


def test_short_testimonial_is_rejected(client, valid_testimonial):
    r = client.post("/api/testimonials", json=dict(valid_testimonial, message="Too short"))
    assert r.status_code == 400
    assert r.get_json()["errors"] == [
        {"field": "message", "message": "Testimonial must be at least 20 characters"}
    ]
    assert Testimonial.query.count() == 0


def test_testimonial_name_needs_two_characters(client, valid_testimonial):
    r = client.post("/api/testimonials", json=dict(valid_testimonial, name="J", email="nope"))
    assert r.status_code == 400
    fields = [e["field"] for e in r.get_json()["errors"]]
    assert fields == ["name", "email"]


def test_public_list_shows_only_approved(client, store, valid_testimonial):
    client.post("/api/testimonials", json=valid_testimonial)
    client.post("/api/testimonials", json=dict(valid_testimonial, name="Bob Johnson"))
    bob = Testimonial.query.filter_by(name="Bob Johnson").one()
    store.set_testimonial_approval(bob.id, True)

    r = client.get("/api/testimonials")
    assert r.status_code == 200
    rows = r.get_json()
    assert [row["name"] for row in rows] == ["Bob Johnson"]
    assert rows[0]["is_approved"] is True
    assert "date_created" in rows[0]


def test_public_list_empty(client):
    r = client.get("/api/testimonials")
    assert r.status_code == 200
    assert r.get_json() == []


def test_store_failure_returns_generic_error(client, broken_store, valid_testimonial):
    r = client.post("/api/testimonials", json=valid_testimonial)
    assert r.status_code == 500
    assert r.get_json() == {
        "success": False,
        "message": "Sorry, there was an error submitting your testimonial. Please try again.",
    }
