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

"""Narrative API routes for game client communication.

Provides REST endpoints for stepping the narrative, answering pending
events, inspecting and editing tensions, and reading the effect log.
"""

from __future__ import annotations

import dataclasses
import logging

from fastapi import APIRouter, HTTPException

from survival_narrative.events.effects import InMemoryEffectSink
from survival_narrative.models.tensions import ActiveTension, StageChange
from survival_narrative.world.narrative_engine import NarrativeEngine, PendingEvent

from .schemas import (
    ChoiceResponse,
    ChooseRequest,
    ChooseResponse,
    CreateTensionRequest,
    DecayRequest,
    DecayResponse,
    EffectsResponse,
    EscalateTensionRequest,
    EventSummaryResponse,
    PendingEventResponse,
    StageChangeResponse,
    StepRequest,
    StepResponse,
    TensionResponse,
)

logger = logging.getLogger(__name__)

# Module-level engine singleton (set during app startup)
_engine: NarrativeEngine | None = None


def get_engine() -> NarrativeEngine:
    """Get the narrative engine singleton.

    Raises:
        RuntimeError: If the engine is not initialized.
    """
    if _engine is None:
        raise RuntimeError("Narrative engine not initialized.")
    return _engine


def set_engine(engine: NarrativeEngine | None) -> None:
    """Set the narrative engine singleton."""
    global _engine
    _engine = engine


narrative_router = APIRouter(tags=["narrative"])


def _pending_to_response(pending: PendingEvent | None) -> PendingEventResponse | None:
    if pending is None:
        return None
    return PendingEventResponse(
        event_id=pending.event.event_id,
        title=pending.event.title,
        text=pending.event.text,
        source=pending.source,
        chain_depth=pending.chain_depth,
        choices=[
            ChoiceResponse(index=i, label=c.label, text=c.text)
            for i, c in enumerate(pending.choices)
        ],
    )


def _stage_name(stage) -> str | None:
    return stage.name if stage is not None else None


def _change_to_response(change: StageChange) -> StageChangeResponse:
    return StageChangeResponse(
        type_key=change.type_key,
        previous=_stage_name(change.previous),
        current=_stage_name(change.current),
    )


def _tension_to_response(tension: ActiveTension) -> TensionResponse:
    return TensionResponse(
        type_key=tension.type_key,
        severity=tension.severity,
        stage=tension.stage.name,
        animal_type=tension.animal_type,
        source_location=tension.source_location,
        description=tension.description,
        created_tick=tension.created_tick,
    )


# --- Narrative loop ---


@narrative_router.post("/step", response_model=StepResponse)
def step(req: StepRequest) -> StepResponse:
    """Advance the narrative by one step."""
    engine = get_engine()
    if engine.pending is not None:
        raise HTTPException(
            status_code=409,
            detail=f"Event {engine.pending.event.event_id} is awaiting a choice.",
        )
    result = engine.step(req.to_snapshot(), minutes=req.minutes)
    # An event without available choices is reported but not left pending
    return StepResponse(
        tick=result.tick,
        event=_pending_to_response(result.pending),
        stage_changes=[_change_to_response(c) for c in result.stage_changes],
        decayed=result.decayed,
        deferred=result.deferred,
    )


@narrative_router.post("/choose", response_model=ChooseResponse)
def choose(req: ChooseRequest) -> ChooseResponse:
    """Resolve the pending event with the given choice."""
    engine = get_engine()
    if engine.pending is None:
        raise HTTPException(status_code=409, detail="No event is awaiting a choice.")
    try:
        outcome = engine.choose(req.index)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    resolution = outcome.resolution
    return ChooseResponse(
        event_id=resolution.event_id,
        choice_label=resolution.choice_label,
        text=resolution.text,
        time_cost_minutes=resolution.time_cost_minutes,
        resource_outcome=(
            resolution.resource_outcome.value if resolution.resource_outcome else None
        ),
        aborted=resolution.aborted,
        next_event=_pending_to_response(outcome.next_event),
        chain_dropped=outcome.chain_dropped,
    )


@narrative_router.get("/pending", response_model=PendingEventResponse)
def get_pending() -> PendingEventResponse:
    """Get the event awaiting a choice."""
    pending = get_engine().pending
    if pending is None:
        raise HTTPException(status_code=404, detail="No event is awaiting a choice.")
    return _pending_to_response(pending)


# --- Tension Endpoints ---


@narrative_router.get("/tensions", response_model=list[TensionResponse])
def list_tensions() -> list[TensionResponse]:
    """List active tensions."""
    return [_tension_to_response(t) for t in get_engine().tensions.all()]


@narrative_router.post("/tensions", response_model=TensionResponse, status_code=201)
def create_tension(req: CreateTensionRequest) -> TensionResponse:
    """Create a tension, or merge into the active one of the same type."""
    engine = get_engine()
    tension = engine.tensions.create(
        req.type_key,
        req.severity,
        animal_type=req.animal_type,
        source_location=req.source_location,
        description=req.description,
        tick=engine.tick,
    )
    return _tension_to_response(tension)


@narrative_router.post("/tensions/{type_key}/escalate", response_model=TensionResponse)
def escalate_tension(type_key: str, req: EscalateTensionRequest) -> TensionResponse:
    """Shift a tension's severity; 0 resolves it."""
    tensions = get_engine().tensions
    if not tensions.has(type_key):
        raise HTTPException(status_code=404, detail=f"Tension {type_key} not active")
    tension = tensions.escalate(type_key, req.delta)
    if tension is None:
        raise HTTPException(status_code=410, detail=f"Tension {type_key} resolved")
    return _tension_to_response(tension)


@narrative_router.delete("/tensions/{type_key}")
def resolve_tension(type_key: str) -> dict[str, str]:
    """Resolve (remove) a tension."""
    if not get_engine().tensions.resolve(type_key):
        raise HTTPException(status_code=404, detail=f"Tension {type_key} not active")
    return {"status": "resolved", "type_key": type_key}


@narrative_router.post("/tensions/decay", response_model=DecayResponse)
def decay_tensions(req: DecayRequest) -> DecayResponse:
    """Apply passive decay for the given simulated minutes.

    This is a manual decay on top of the one /step applies. It runs even
    when the engine was built without per-step decay.
    """
    engine = get_engine()
    tensions = engine.tensions
    resolved = engine.decay(req.minutes, req.at_camp)
    return DecayResponse(
        resolved=resolved,
        tensions=[_tension_to_response(t) for t in tensions.all()],
    )


# --- Catalog / effects ---


@narrative_router.get("/events", response_model=list[EventSummaryResponse])
def list_events() -> list[EventSummaryResponse]:
    """List registered event templates with their cooldown state."""
    engine = get_engine()
    return [
        EventSummaryResponse(
            event_id=t.event_id,
            title=t.title,
            base_weight=t.base_weight,
            cooldown_ticks=t.cooldown_ticks,
            last_fired=engine.cooldowns.last_fired(t.event_id),
        )
        for t in engine.catalog.templates()
    ]


@narrative_router.get("/effects", response_model=EffectsResponse)
def get_effects() -> EffectsResponse:
    """Get the calls recorded by the in-memory effect sink."""
    sink = get_engine().sink
    if not isinstance(sink, InMemoryEffectSink):
        raise HTTPException(status_code=404, detail="Effect log not available")
    return EffectsResponse(
        calls=list(sink.calls),
        damage=[dataclasses.asdict(d) for d in sink.damage],
        status_effects=[dataclasses.asdict(e) for e in sink.status_effects],
        consumed=[
            {"resource": key, "requested": requested, "consumed": taken}
            for key, requested, taken in sink.consumed
        ],
        rewards=[dataclasses.asdict(r) for r in sink.rewards],
        encounters=[dataclasses.asdict(e) for e in sink.encounters],
        aborts=sink.aborts,
        resources=dict(sink.resources),
    )
