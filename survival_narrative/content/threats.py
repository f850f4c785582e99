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

"""Predator and body-pressure events drawn by the random selector.

The stalker arc runs Something Watching -> Stalker Circling -> The
Predator Revealed -> Ambush, gated by the Stalked tension stage.
"""

from __future__ import annotations

from survival_narrative.conditions.situations import SituationName as S
from survival_narrative.models.conditions import Condition as C
from survival_narrative.models.events import (
    Choice,
    DamageSpec,
    DamageType,
    EncounterSpec,
    EventTemplate,
    ResourceCost,
    ResourceType,
    Result,
    RewardGrant,
    SituationFactor,
    StatusEffectSpec,
    TensionOperation,
)
from survival_narrative.models.tensions import TensionType as T

SHAKEN = StatusEffectSpec("Shaken", 0.2, 60)
PARANOID = StatusEffectSpec("Paranoid", 0.15, 120)

FRESH_CARCASS = EventTemplate(
    event_id="threat.fresh_carcass",
    title="Fresh Carcass",
    text="A half-eaten carcass, still steaming. Whatever killed it is not far.",
    base_weight=0.8,
    required_conditions=frozenset({C.WORKING, C.IN_ANIMAL_TERRITORY}),
    condition_weight_factors={C.HAS_PREDATORS: 2.0},
    cooldown_ticks=240,
    choices=(
        Choice(
            "Scavenge Quickly",
            "Grab what you can and get out before its owner returns.",
            results=(
                Result(
                    "You cut away some meat and leave.",
                    weight=0.7,
                    time_cost_minutes=8,
                    reward=RewardGrant("scavenged_meat", 0.5),
                ),
                Result(
                    "A low growl. You grab what you can and run.",
                    weight=0.3,
                    time_cost_minutes=5,
                    reward=RewardGrant("scavenged_meat", 0.25),
                    tension_ops=(TensionOperation.create(T.STALKED, 0.3, "wolf"),),
                ),
            ),
        ),
        Choice(
            "Butcher Thoroughly",
            "Take your time and do it properly.",
            results=(
                Result(
                    "You work quickly but thoroughly. A good haul.",
                    weight=0.5,
                    time_cost_minutes=25,
                    reward=RewardGrant("scavenged_meat", 1.0),
                    tension_ops=(TensionOperation.create(T.FOOD_SCENT_STRONG, 0.4),),
                ),
                Result(
                    "Something crashes through the brush. You flee.",
                    weight=0.35,
                    time_cost_minutes=20,
                    reward=RewardGrant("scavenged_meat", 0.5),
                    aborts_activity=True,
                ),
                Result(
                    "It comes back. You barely escape with your life.",
                    weight=0.15,
                    time_cost_minutes=15,
                    damage=DamageSpec(0.2, DamageType.SHARP, "arm"),
                    encounter=EncounterSpec("wolf", 10.0, 0.8),
                ),
            ),
        ),
        Choice("Leave It", "Not worth the risk.", results=(Result("You leave it."),)),
    ),
)

TRACKS = EventTemplate(
    event_id="threat.tracks",
    title="Tracks",
    text="Fresh tracks cross your path, pressed deep into the snow.",
    base_weight=1.0,
    required_conditions=frozenset({C.IS_EXPEDITION, C.IN_ANIMAL_TERRITORY}),
    condition_weight_factors={C.HIGH_VISIBILITY: 1.5},
    situation_weight_factors={S.FOLLOWING_ANIMAL_SIGNS: SituationFactor(2.0)},
    cooldown_ticks=120,
    choices=(
        Choice(
            "Follow Them",
            "See where they lead.",
            results=(
                Result(
                    "The tracks lead nowhere. You lose the trail.",
                    weight=0.35,
                    time_cost_minutes=20,
                    tension_ops=(
                        TensionOperation.create(
                            T.FRESH_TRAIL, 0.1, description="faint sign of game"
                        ),
                    ),
                ),
                Result(
                    "You find a game trail. Good hunting ground.",
                    weight=0.5,
                    time_cost_minutes=30,
                    tension_ops=(
                        TensionOperation.create(
                            T.FRESH_TRAIL, 0.4, description="game trail"
                        ),
                    ),
                ),
                Result(
                    "You were so focused on the tracks you missed what was "
                    "tracking you. It lunges.",
                    weight=0.15,
                    time_cost_minutes=15,
                    encounter=EncounterSpec("wolf", 5.0, 0.7),
                    aborts_activity=True,
                ),
            ),
        ),
        Choice(
            "Avoid the Area",
            "Detour around.",
            results=(Result("Slower but safer.", time_cost_minutes=10),),
        ),
    ),
)

SOMETHING_WATCHING = EventTemplate(
    event_id="threat.something_watching",
    title="Something Watching",
    text="The back of your neck prickles. You are being watched.",
    base_weight=1.0,
    required_conditions=frozenset({C.WORKING, C.HAS_PREDATORS}),
    excluded_conditions=frozenset({C.STALKED}),
    condition_weight_factors={C.LOW_VISIBILITY: 1.5, C.FAR_FROM_CAMP: 1.5},
    situation_weight_factors={
        S.ATTRACTIVE_TO_PREDATORS: SituationFactor(3.0, scaled=True),
        S.VULNERABLE: SituationFactor(2.0),
        S.FOLLOWING_ANIMAL_SIGNS: SituationFactor(2.5),
    },
    cooldown_ticks=180,
    choices=(
        Choice(
            "Make Noise",
            "Shout, bang things together. Show you are not prey.",
            results=(
                Result(
                    "Whatever it was slinks away. You're not worth the trouble.",
                    weight=0.5,
                    time_cost_minutes=5,
                ),
                Result(
                    "It doesn't retreat. It's testing you.",
                    weight=0.3,
                    time_cost_minutes=10,
                    tension_ops=(
                        TensionOperation.create(T.STALKED, 0.3, "wolf"),
                    ),
                ),
                Result(
                    "Your noise provokes it. It attacks.",
                    weight=0.15,
                    time_cost_minutes=5,
                    encounter=EncounterSpec("wolf", 8.0, 0.8),
                    aborts_activity=True,
                ),
                Result(
                    "Nothing there. Just paranoia.",
                    weight=0.05,
                    time_cost_minutes=3,
                    status_effects=(PARANOID,),
                ),
            ),
        ),
        Choice(
            "Finish and Leave",
            "Wrap up and get moving.",
            results=(
                Result(
                    "You gather what you have and leave quickly.",
                    time_cost_minutes=3,
                    aborts_activity=True,
                    tension_ops=(
                        TensionOperation.create(T.STALKED, 0.2, "wolf"),
                    ),
                ),
            ),
        ),
    ),
)

STALKER_CIRCLING = EventTemplate(
    event_id="threat.stalker_circling",
    title="Stalker Circling",
    text="It is still out there, pacing you just beyond sight.",
    base_weight=1.5,
    required_conditions=frozenset({C.STALKED, C.IS_EXPEDITION}),
    situation_weight_factors={S.IN_DARKNESS: SituationFactor(1.5)},
    cooldown_ticks=60,
    choices=(
        Choice(
            "Try to Lose It",
            "Double back, cross water, break your trail.",
            results=(
                Result(
                    "It works. The presence fades.",
                    weight=0.4,
                    time_cost_minutes=25,
                    tension_ops=(TensionOperation.resolve(T.STALKED),),
                ),
                Result(
                    "It stays with you. You've wasted time and energy.",
                    weight=0.45,
                    time_cost_minutes=20,
                    tension_ops=(TensionOperation.escalate(T.STALKED, 0.2),),
                ),
                Result(
                    "You get turned around trying to lose it.",
                    weight=0.15,
                    time_cost_minutes=35,
                ),
            ),
        ),
        Choice(
            "Keep Moving, Stay Alert",
            "Maintain distance and watch your flanks.",
            results=(
                Result("Exhausting but stable.", weight=0.4, time_cost_minutes=10),
                Result(
                    "It's getting bolder.",
                    weight=0.35,
                    time_cost_minutes=8,
                    tension_ops=(TensionOperation.escalate(T.STALKED, 0.15),),
                ),
                Result(
                    "It backs off. Maybe it lost interest.",
                    weight=0.25,
                    time_cost_minutes=5,
                    tension_ops=(TensionOperation.escalate(T.STALKED, -0.1),),
                ),
            ),
        ),
        Choice(
            "Return to Camp",
            "Fire deters most things.",
            results=(
                Result(
                    "You make it back. The fire keeps it at bay.",
                    weight=0.6,
                    aborts_activity=True,
                    tension_ops=(TensionOperation.resolve(T.STALKED),),
                ),
                Result(
                    "It follows to the camp perimeter but won't approach the fire.",
                    weight=0.4,
                    aborts_activity=True,
                    tension_ops=(TensionOperation.escalate(T.STALKED, -0.2),),
                ),
            ),
        ),
    ),
)

PREDATOR_REVEALED = EventTemplate(
    event_id="threat.predator_revealed",
    title="The Predator Revealed",
    text="It steps out of cover. No more pretending.",
    base_weight=2.0,
    required_conditions=frozenset({C.STALKED_HIGH, C.IS_EXPEDITION}),
    excluded_conditions=frozenset({C.STALKED_CRITICAL}),
    situation_weight_factors={S.VULNERABLE: SituationFactor(1.5, scaled=True)},
    cooldown_ticks=60,
    choices=(
        Choice(
            "Stand Your Ground",
            "Face it.",
            results=(
                Result(
                    "You turn to face it. The confrontation is inevitable.",
                    time_cost_minutes=5,
                    encounter=EncounterSpec("wolf", 15.0, 0.6),
                    tension_ops=(TensionOperation.resolve(T.STALKED),),
                ),
            ),
        ),
        Choice(
            "Calculated Retreat",
            "Back away slowly. Don't run.",
            results=(
                Result(
                    "It watches but doesn't follow.",
                    weight=0.5,
                    time_cost_minutes=15,
                    tension_ops=(TensionOperation.escalate(T.STALKED, -0.3),),
                ),
                Result(
                    "It follows at a distance. You're not out of this yet.",
                    weight=0.35,
                    time_cost_minutes=10,
                    tension_ops=(TensionOperation.escalate(T.STALKED, 0.2),),
                ),
                Result(
                    "Your retreat emboldens it. It charges.",
                    weight=0.15,
                    time_cost_minutes=5,
                    encounter=EncounterSpec("wolf", 6.0, 0.9),
                    tension_ops=(TensionOperation.resolve(T.STALKED),),
                    aborts_activity=True,
                ),
            ),
        ),
    ),
)

AMBUSH = EventTemplate(
    event_id="threat.ambush",
    title="Ambush",
    text="It comes out of nowhere.",
    base_weight=3.0,
    required_conditions=frozenset({C.STALKED_CRITICAL, C.IS_EXPEDITION}),
    situation_weight_factors={S.IN_CRISIS: SituationFactor(2.0)},
    choices=(
        Choice(
            "Brace Yourself",
            "No time for anything else.",
            results=(
                Result(
                    "The predator attacks!",
                    time_cost_minutes=3,
                    damage=DamageSpec(0.15, DamageType.SHARP),
                    encounter=EncounterSpec("wolf", 2.0, 1.0),
                    tension_ops=(TensionOperation.resolve(T.STALKED),),
                    aborts_activity=True,
                ),
            ),
        ),
    ),
)

THE_SHAKES = EventTemplate(
    event_id="body.the_shakes",
    title="The Shakes",
    text="Your hands won't stop trembling. Your body is running on empty.",
    base_weight=1.0,
    required_conditions=frozenset({C.LOW_CALORIES, C.AWAKE}),
    condition_weight_factors={C.LOW_TEMPERATURE: 2.0},
    situation_weight_factors={S.CRITICALLY_DEPLETED: SituationFactor(2.0)},
    cooldown_ticks=240,
    choices=(
        Choice(
            "Eat Immediately",
            "Whatever you have.",
            required_conditions=frozenset({C.HAS_FOOD}),
            results=(
                Result(
                    "Warmth spreads through you. The shaking stops.",
                    weight=0.7,
                    time_cost_minutes=5,
                    cost=ResourceCost(ResourceType.FOOD, 1),
                ),
                Result(
                    "You eat too fast. Nauseous.",
                    weight=0.3,
                    time_cost_minutes=8,
                    cost=ResourceCost(ResourceType.FOOD, 1),
                    status_effects=(StatusEffectSpec("Nauseous", 0.2, 30),),
                ),
            ),
        ),
        Choice(
            "Warm Up by Fire",
            "Heat helps.",
            required_conditions=frozenset({C.NEAR_FIRE}),
            results=(
                Result("Heat helps. The shaking subsides.", time_cost_minutes=20),
            ),
        ),
        Choice(
            "Push Through",
            "Mind over matter.",
            results=(
                Result("The shaking fades to background.", weight=0.6),
                Result(
                    "Can't function. Forced rest.",
                    weight=0.4,
                    time_cost_minutes=30,
                    aborts_activity=True,
                ),
            ),
        ),
    ),
)

FROZEN_FINGERS = EventTemplate(
    event_id="cold.frozen_fingers",
    title="Frozen Fingers",
    text="Your fingers are white and stiff. You can barely grip.",
    base_weight=0.8,
    required_conditions=frozenset({C.OUTSIDE, C.AWAKE}),
    required_situations=frozenset({S.EXTREME_COLD_CRISIS}),
    situation_weight_factors={S.EXTREME_COLD_CRISIS: SituationFactor(3.0, scaled=True)},
    excluded_conditions=frozenset({C.DEADLY_COLD}),
    cooldown_ticks=180,
    choices=(
        Choice(
            "Build a Fire",
            "Burn what you have.",
            required_conditions=frozenset({C.HAS_FUEL, C.HAS_FIRESTARTER}),
            results=(
                Result(
                    "Feeling floods back, painfully.",
                    time_cost_minutes=15,
                    cost=ResourceCost(ResourceType.FUEL, 2),
                ),
            ),
        ),
        Choice(
            "Keep Going",
            "Stopping is worse.",
            results=(
                Result(
                    "The cold settles into your bones.",
                    weight=0.6,
                    tension_ops=(TensionOperation.create(T.DEADLY_COLD, 0.3),),
                ),
                Result(
                    "Frostbite takes hold.",
                    weight=0.4,
                    damage=DamageSpec(0.1, DamageType.COLD, "hand"),
                    tension_ops=(TensionOperation.create(T.DEADLY_COLD, 0.4),),
                ),
            ),
        ),
    ),
)

THREAT_EVENTS: tuple[EventTemplate, ...] = (
    FRESH_CARCASS,
    TRACKS,
    SOMETHING_WATCHING,
    STALKER_CIRCLING,
    PREDATOR_REVEALED,
    AMBUSH,
    THE_SHAKES,
    FROZEN_FINGERS,
)
