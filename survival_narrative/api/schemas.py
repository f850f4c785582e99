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

"""Pydantic request/response schemas for the Narrative API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from survival_narrative.models.snapshot import (
    ActivityType,
    BodyView,
    InventoryView,
    LocationView,
    StateSnapshot,
    SurvivalStats,
    WeatherCondition,
    WeatherFront,
)


class LocationModel(BaseModel):
    name: str = "camp"
    tags: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    visibility: float = Field(default=0.5, ge=0.0, le=1.0)
    terrain_hazard: float = Field(default=0.0, ge=0.0, le=1.0)
    distance_from_camp: int = Field(default=0, ge=0)


class SurvivalModel(BaseModel):
    """Survival stats as fractions of their maximum."""

    energy: float = Field(default=1.0, ge=0.0, le=1.0)
    calories: float = Field(default=1.0, ge=0.0, le=1.0)
    hydration: float = Field(default=1.0, ge=0.0, le=1.0)
    body_temperature_c: float = 37.0


class InventoryModel(BaseModel):
    resources: dict[str, float] = Field(default_factory=dict)
    has_weapon: bool = False
    has_firestarter: bool = False
    waterproofing: float = Field(default=0.0, ge=0.0, le=1.0)


class BodyModel(BaseModel):
    blood: float = Field(default=1.0, ge=0.0, le=1.0)
    capacities: dict[str, float] = Field(
        default_factory=dict,
        description="Capacity name -> level; missing capacities count as 1.0.",
    )
    effects: dict[str, float] = Field(
        default_factory=dict,
        description="Active effect name -> severity (0-1).",
    )
    injured: bool = False
    wetness: float = Field(default=0.0, ge=0.0, le=1.0)


class StepRequest(BaseModel):
    """Request to advance the narrative by one step."""

    tick: int = Field(default=0, ge=0)
    minutes: int = Field(default=1, gt=0, description="Simulated minutes covered.")
    location: LocationModel = Field(default_factory=LocationModel)
    activity: ActivityType = ActivityType.IDLE
    weather: WeatherCondition = WeatherCondition.CLEAR
    weather_front: WeatherFront = WeatherFront.NONE
    front_phase: int = Field(default=0, ge=0)
    air_temperature_c: float = -5.0
    wind: float = Field(default=0.0, ge=0.0, le=1.0)
    is_daytime: bool = True
    at_camp: bool = True
    survival: SurvivalModel = Field(default_factory=SurvivalModel)
    inventory: InventoryModel = Field(default_factory=InventoryModel)
    body: BodyModel = Field(default_factory=BodyModel)

    def to_snapshot(self) -> StateSnapshot:
        """Build the engine snapshot; the engine supplies the tensions."""
        return StateSnapshot(
            tick=self.tick,
            location=LocationView(
                name=self.location.name,
                tags=frozenset(self.location.tags),
                features=frozenset(self.location.features),
                visibility=self.location.visibility,
                terrain_hazard=self.location.terrain_hazard,
                distance_from_camp=self.location.distance_from_camp,
            ),
            activity=self.activity,
            weather=self.weather,
            weather_front=self.weather_front,
            front_phase=self.front_phase,
            air_temperature_c=self.air_temperature_c,
            wind=self.wind,
            is_daytime=self.is_daytime,
            at_camp=self.at_camp,
            survival=SurvivalStats(**self.survival.model_dump()),
            inventory=InventoryView(**self.inventory.model_dump()),
            body=BodyView(**self.body.model_dump()),
        )


class ChoiceResponse(BaseModel):
    index: int
    label: str
    text: str


class PendingEventResponse(BaseModel):
    """An event awaiting the player's choice."""

    event_id: str
    title: str
    text: str
    source: str
    chain_depth: int
    choices: list[ChoiceResponse]


class StageChangeResponse(BaseModel):
    type_key: str
    previous: str | None
    current: str | None


class StepResponse(BaseModel):
    """Response after a narrative step."""

    tick: int
    event: PendingEventResponse | None = None
    stage_changes: list[StageChangeResponse] = Field(default_factory=list)
    decayed: list[str] = Field(default_factory=list)
    deferred: int = 0


class ChooseRequest(BaseModel):
    index: int = Field(ge=0, description="Index into the pending event's choices.")


class ChooseResponse(BaseModel):
    """Outcome of resolving a choice."""

    event_id: str
    choice_label: str
    text: str
    time_cost_minutes: int
    resource_outcome: str | None = None
    aborted: bool = False
    next_event: PendingEventResponse | None = None
    chain_dropped: bool = False


class TensionResponse(BaseModel):
    type_key: str
    severity: float
    stage: str
    animal_type: str | None = None
    source_location: str | None = None
    description: str | None = None
    created_tick: int = 0


class CreateTensionRequest(BaseModel):
    """Request to create (or merge into) a tension."""

    type_key: str = Field(min_length=1)
    severity: float = Field(gt=0.0, le=1.0)
    animal_type: str | None = None
    source_location: str | None = None
    description: str | None = None


class EscalateTensionRequest(BaseModel):
    delta: float = Field(ge=-1.0, le=1.0, description="Severity change.")


class DecayRequest(BaseModel):
    minutes: float = Field(gt=0.0, description="Simulated minutes to decay.")
    at_camp: bool = False


class DecayResponse(BaseModel):
    resolved: list[str]
    tensions: list[TensionResponse]


class EventSummaryResponse(BaseModel):
    event_id: str
    title: str
    base_weight: float
    cooldown_ticks: int | None = None
    last_fired: int | None = None


class EffectsResponse(BaseModel):
    """Calls recorded by the in-memory effect sink."""

    calls: list[str]
    damage: list[dict]
    status_effects: list[dict]
    consumed: list[dict]
    rewards: list[dict]
    encounters: list[dict]
    aborts: int
    resources: dict[str, float]
