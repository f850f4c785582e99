# Copyright 2026 Google LLC
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

"""Tests for Narrative API routes using FastAPI TestClient."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from survival_narrative.api.narrative_routes import (
    get_engine,
    narrative_router,
    set_engine,
)
from survival_narrative.world.narrative_engine import NarrativeEngine

PREFIX = "/api/narrative"
# Sleeping suppresses random events, so only intentional triggers fire
QUIET_STEP = {"activity": "sleeping", "at_camp": False}


@pytest.fixture()
def client():
    """Create a test client with a fresh NarrativeEngine."""
    app = FastAPI()
    app.include_router(narrative_router, prefix=PREFIX)
    set_engine(NarrativeEngine(seed=5, apply_decay=False))
    yield TestClient(app)
    set_engine(None)


def _create_stalked(client, severity: float = 0.3):
    return client.post(
        f"{PREFIX}/tensions",
        json={"type_key": "Stalked", "severity": severity, "animal_type": "wolf"},
    )


class TestEngineHolder:
    def test_uninitialized_engine_raises(self):
        set_engine(None)
        with pytest.raises(RuntimeError):
            get_engine()


class TestStepEndpoints:
    def test_quiet_step(self, client):
        resp = client.post(f"{PREFIX}/step", json={**QUIET_STEP, "tick": 1})
        assert resp.status_code == 200
        data = resp.json()
        assert data["tick"] == 1
        assert data["event"] is None
        assert data["stage_changes"] == []

    def test_tension_creation_offers_event(self, client):
        _create_stalked(client)
        resp = client.post(f"{PREFIX}/step", json={**QUIET_STEP, "tick": 1})
        assert resp.status_code == 200
        data = resp.json()
        assert data["event"]["event_id"] == "tension.stalked.created"
        assert data["event"]["source"] == "tension"
        assert data["event"]["choices"][0]["index"] == 0
        assert data["stage_changes"] == [
            {"type_key": "Stalked", "previous": None, "current": "BUILDING"}
        ]

        pending = client.get(f"{PREFIX}/pending")
        assert pending.status_code == 200
        assert pending.json()["event_id"] == "tension.stalked.created"

    def test_step_while_pending_conflicts(self, client):
        _create_stalked(client)
        client.post(f"{PREFIX}/step", json=QUIET_STEP)
        resp = client.post(f"{PREFIX}/step", json=QUIET_STEP)
        assert resp.status_code == 409

    def test_invalid_snapshot_rejected(self, client):
        resp = client.post(f"{PREFIX}/step", json={"activity": "flying"})
        assert resp.status_code == 422
        resp = client.post(f"{PREFIX}/step", json={"survival": {"calories": 1.5}})
        assert resp.status_code == 422


class TestChooseEndpoints:
    def test_choose_resolves_pending(self, client):
        _create_stalked(client)
        client.post(f"{PREFIX}/step", json=QUIET_STEP)

        resp = client.post(f"{PREFIX}/choose", json={"index": 0})
        assert resp.status_code == 200
        data = resp.json()
        assert data["event_id"] == "tension.stalked.created"
        assert data["choice_label"] == "Stay Alert"
        assert data["time_cost_minutes"] == 2
        assert data["next_event"] is None

        assert client.get(f"{PREFIX}/pending").status_code == 404

        effects = client.get(f"{PREFIX}/effects").json()
        assert effects["calls"] == ["apply_status_effect"]
        assert effects["status_effects"][0]["kind"] == "Paranoid"

    def test_choose_without_pending_conflicts(self, client):
        resp = client.post(f"{PREFIX}/choose", json={"index": 0})
        assert resp.status_code == 409

    def test_choose_out_of_range(self, client):
        _create_stalked(client)
        client.post(f"{PREFIX}/step", json=QUIET_STEP)
        resp = client.post(f"{PREFIX}/choose", json={"index": 4})
        assert resp.status_code == 400


class TestTensionEndpoints:
    def test_create_and_list(self, client):
        resp = _create_stalked(client, 0.5)
        assert resp.status_code == 201
        data = resp.json()
        assert data["stage"] == "ESCALATING"
        assert data["animal_type"] == "wolf"

        listing = client.get(f"{PREFIX}/tensions").json()
        assert [t["type_key"] for t in listing] == ["Stalked"]

    def test_create_validates_severity(self, client):
        resp = client.post(
            f"{PREFIX}/tensions", json={"type_key": "Stalked", "severity": 2.0}
        )
        assert resp.status_code == 422
        resp = client.post(
            f"{PREFIX}/tensions", json={"type_key": "Stalked", "severity": 0.0}
        )
        assert resp.status_code == 422
        assert client.get(f"{PREFIX}/tensions").json() == []

    def test_escalate(self, client):
        _create_stalked(client, 0.3)
        resp = client.post(f"{PREFIX}/tensions/Stalked/escalate", json={"delta": 0.5})
        assert resp.status_code == 200
        assert resp.json()["stage"] == "CRITICAL"

    def test_escalate_to_zero_resolves(self, client):
        _create_stalked(client, 0.3)
        resp = client.post(f"{PREFIX}/tensions/Stalked/escalate", json={"delta": -0.5})
        assert resp.status_code == 410
        assert client.get(f"{PREFIX}/tensions").json() == []

    def test_escalate_absent(self, client):
        resp = client.post(f"{PREFIX}/tensions/Hunted/escalate", json={"delta": 0.1})
        assert resp.status_code == 404

    def test_resolve(self, client):
        _create_stalked(client)
        resp = client.delete(f"{PREFIX}/tensions/Stalked")
        assert resp.status_code == 200
        assert resp.json()["status"] == "resolved"
        assert client.delete(f"{PREFIX}/tensions/Stalked").status_code == 404

    def test_decay(self, client):
        _create_stalked(client, 0.01)
        client.post(
            f"{PREFIX}/tensions", json={"type_key": "DeadlyCold", "severity": 0.5}
        )
        resp = client.post(
            f"{PREFIX}/tensions/decay", json={"minutes": 60, "at_camp": False}
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["resolved"] == ["Stalked"]
        assert [t["type_key"] for t in data["tensions"]] == ["DeadlyCold"]


class TestCatalogEndpoints:
    def test_list_events(self, client):
        resp = client.get(f"{PREFIX}/events")
        assert resp.status_code == 200
        ids = {e["event_id"] for e in resp.json()}
        assert "threat.tracks" in ids
        assert "weather.whiteout" in ids

    def test_effects_start_empty(self, client):
        data = client.get(f"{PREFIX}/effects").json()
        assert data["calls"] == []
        assert data["aborts"] == 0
