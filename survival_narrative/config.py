# App Configuration
APP_NAME = "survival_narrative"

# Randomness
DEFAULT_RNG_SEED = None  # None = seeded from OS entropy

# Event Frequency
EVENTS_PER_HOUR = 0.5  # Single knob for overall random event frequency
MINUTES_PER_TICK = 1  # Simulated minutes covered by one engine step

# Activity multipliers applied to the base per-step event chance.
# Activities missing from this table use 1.0.
ACTIVITY_EVENT_MULTIPLIERS = {
    "sleeping": 0.0,
    "fighting": 0.0,
    "encounter": 0.0,
    "idle": 0.5,
    "resting": 0.5,
    "camp_work": 0.8,
    "eating": 0.5,
    "traveling": 1.5,
    "foraging": 1.2,
    "hunting": 1.3,
    "tracking": 1.5,
    "butchering": 1.2,
}

# Chained events
MAX_CHAIN_DEPTH = 5  # Deeper chains are dropped silently

# Tension stages
DEFAULT_ESCALATING_THRESHOLD = 0.4
DEFAULT_CRITICAL_THRESHOLD = 0.7
DEFAULT_TENSION_DECAY_PER_HOUR = 0.05
FEVER_CAMP_DECAY_MULTIPLIER = 3.0  # Rest accelerates fever recovery

# Survival stat threshold bands (fraction of maximum)
THRESHOLD_HEALTHY_ABOVE = 0.5
THRESHOLD_NORMAL_ABOVE = 0.25
THRESHOLD_SEVERE_ABOVE = 0.10
TRACKED_SURVIVAL_STATS = ("energy", "calories", "hydration")

# Condition cut points
LOW_FUEL_COUNT = 1  # 1 or fewer pieces
LOW_FOOD_COUNT = 1
LOW_WATER_LITERS = 0.5
PLENTY_COUNT = 3
EXTREME_COLD_C = -25.0
HIGH_WIND = 0.6
HIGH_VISIBILITY = 0.7
LOW_VISIBILITY = 0.3
HAZARDOUS_TERRAIN = 0.5
FAR_FROM_CAMP_DISTANCE = 3
VERY_FAR_FROM_CAMP_DISTANCE = 6
IMPAIRED_CAPACITY = 0.5
REDUCED_CAPACITY = 0.75  # slow, clumsy, foggy, winded
LOW_SURVIVAL_STAT = 0.25
LOW_BODY_TEMPERATURE_C = 35.0
BLOODY_HIGH = 0.2
WATERPROOFED = 0.15
FULLY_WATERPROOFED = 0.4

# Situation cut points
VULNERABLE_BLOOD = 0.7
CRISIS_BLOOD = 0.5
SOAKED_WETNESS = 0.5
SERIOUS_THREAT_SEVERITY = 0.5
