# rwh/constants.py
"""Default parameters of the rainwater tank model.

Volumes are in litres, areas in m², rainfall in millimetres, prices in
dollars per kilolitre.  1 mm of rain on 1 m² of roof yields 1 L.
"""

# --- site defaults ---
DEFAULT_ROOF_AREA_M2 = 180.0
DEFAULT_DAILY_USAGE_L = 500.0
DEFAULT_RUNOFF_COEFFICIENT = 0.85
DEFAULT_WATER_RATE_PER_KL = 3.50
DEFAULT_SECURITY_CONFIDENCE = 0.95

# --- tank state thresholds (fraction of capacity) ---
STRESS_FRACTION = 0.20
HALF_FULL_FRACTION = 0.5

# --- capacity search domain ---
SEARCH_MIN_L = 1000
SEARCH_MAX_L = 100000
SEARCH_STEP_L = 500
PRACTICAL_SIZE_STEP_L = 1000

# fractions of the recommended size tried in the "what if smaller" sweep
SMALLER_TANK_FRACTIONS = (0.75, 0.5, 0.33, 0.25)

# --- comparative analysis ---
TANK_SIZES_L = (2000, 5000, 10000, 15000, 20000, 25000)
EFFICIENCY_FLOOR = 2.0        # % offset per 1000 L
EFFICIENCY_DROP_RATIO = 0.5   # relative drop vs. previous step

# --- dry spells ---
DRY_DAY_THRESHOLD_MM = 1.0
WORST_SPELL_THRESHOLD_MM_PER_DAY = 2.0

DAYS_PER_YEAR = 365.25
LITRES_PER_KL = 1000.0
