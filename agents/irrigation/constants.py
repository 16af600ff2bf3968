# agents/irrigation/constants.py
"""
Engine constants and lookup tables.

Loaded once at import and exposed read-only. Thresholds here are part of
the engine's contract and are not configurable per request.
"""
from types import MappingProxyType

# ---------- Crop coefficients (Kc) by growth stage ----------
GROWTH_STAGES = ("initial", "development", "mid", "late")
DEFAULT_GROWTH_STAGE = "mid"
DEFAULT_CROP = "default"

CROP_COEFFICIENTS = MappingProxyType({
    "tomato": MappingProxyType({"initial": 0.6, "development": 0.8, "mid": 1.15, "late": 0.8}),
    "corn": MappingProxyType({"initial": 0.3, "development": 0.7, "mid": 1.2, "late": 0.6}),
    "rice": MappingProxyType({"initial": 1.05, "development": 1.10, "mid": 1.20, "late": 0.90}),
    "wheat": MappingProxyType({"initial": 0.4, "development": 0.7, "mid": 1.15, "late": 0.4}),
    "potato": MappingProxyType({"initial": 0.5, "development": 0.75, "mid": 1.15, "late": 0.75}),
    "cassava": MappingProxyType({"initial": 0.3, "development": 0.6, "mid": 0.8, "late": 0.5}),
    "cotton": MappingProxyType({"initial": 0.35, "development": 0.75, "mid": 1.15, "late": 0.7}),
    DEFAULT_CROP: MappingProxyType({"initial": 0.5, "development": 0.75, "mid": 1.0, "late": 0.7}),
})

# Synonyms and plurals folded onto canonical crop keys
CROP_SYNONYMS = MappingProxyType({
    "tomato": "tomato",
    "tomatoes": "tomato",
    "corn": "corn",
    "maize": "corn",
    "rice": "rice",
    "paddy": "rice",
    "wheat": "wheat",
    "potato": "potato",
    "potatoes": "potato",
    "cassava": "cassava",
    "manioc": "cassava",
    "cotton": "cotton",
    "mixed_crops": DEFAULT_CROP,
    "unknown": DEFAULT_CROP,
})

# ---------- Soil ----------
UNKNOWN_SOIL = "unknown"

# mm of plant-available water per metre of soil depth
SOIL_WATER_CAPACITY = MappingProxyType({
    "sandy": 120,
    "sandy_loam": 160,
    "loam": 200,
    "clay_loam": 220,
    "silt_loam": 240,
    "clay": 250,
    UNKNOWN_SOIL: 180,
})

SOIL_DESCRIPTIONS = MappingProxyType({
    "sandy": "Drains quickly, needs frequent irrigation",
    "sandy_loam": "Good drainage with moderate water retention",
    "loam": "Ideal soil with balanced drainage and retention",
    "clay_loam": "Good water retention, slower drainage",
    "silt_loam": "High retention with moderate drainage",
    "clay": "High water retention, poor drainage",
    UNKNOWN_SOIL: "Texture not known, average retention assumed",
})

ROOT_DEPTH_M = 0.6

# Unverified heuristic: fraction of capacity assumed at the last irrigation
# when no measurement is available.
ASSUMED_START_FRACTION = 0.8
DEFAULT_DAYS_SINCE_IRRIGATION = 7
MAX_RAIN_CREDIT_DAYS = 7

# Moisture assumed for synthesized soil when the soil provider is down
DEGRADED_SOIL_MOISTURE_PCT = 50.0

CRITICAL_FRACTION = 0.30
OPTIMAL_FRACTION = 0.70

# ---------- Decision thresholds ----------
RAIN_LOOKAHEAD_DAYS = 3
URGENT_RAIN_CEILING_MM = 10.0
NEEDED_RAIN_CEILING_MM = 5.0
SKIP_RAIN_FLOOR_MM = 10.0
NEEDED_MOISTURE_PCT = 50

URGENT_REFILL_FRACTION = 0.8
NEEDED_REFILL_FRACTION = 0.7

# Unverified heuristic: converts a mm deficit over a field to litres
LITERS_PER_MM_HECTARE_FACTOR = 10
MAX_FIELD_SIZE_HECTARES = 10_000

# ---------- Advisories ----------
NEXT_ASSESSMENT_HOURS = MappingProxyType({
    "urgent": 6,
    "needed": 24,
    "skip": 72,
})
DEFAULT_NEXT_ASSESSMENT_HOURS = 48

HOT_EVENING_TEMP_C = 30
MORNING_PREFERRED_TEMP_C = 25
WINDY_KMH = 15

WATER_COST_PER_LITER = 0.2   # INR
ENERGY_COST_PER_LITER = 0.02  # INR
COST_CURRENCY = "INR"
CO2_KG_PER_LITER = 0.0003

# ---------- ET proxy ----------
ET_BASE_MM_PER_DAY = 5
ET_TEMP_OFFSET_C = 5
ET_TEMP_SPAN_C = 30
ET_MIN_HUMIDITY_FACTOR = 0.3
ET_MAX_WIND_FACTOR = 2
ET_WIND_SCALE_KMH = 10
ET_RADIATION_REFERENCE = 25
