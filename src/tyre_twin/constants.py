APP_NAME = "TyreTwin Analytics"
APP_VERSION = "1.1.0"

# Initial record
INITIAL_WAX_RESERVE = 100.0
INITIAL_TREAD_DEPTH = 8.0  # mm
INITIAL_RUL_DAYS = 1000
MAX_BLOOM_CAPACITY = 100.0

# Thresholds
WARNING_WAX_THRESHOLD = 20.0
WARNING_TREAD_DEPTH = 3.0  # mm
CRITICAL_INTEGRITY_THRESHOLD = 40.0
MIN_TREAD_DEPTH = 1.6  # mm, legal limit in many places
MINT_BLOOM_THRESHOLD = 20.0
ROT_OXIDATION_THRESHOLD = 30.0
ROT_WAX_THRESHOLD = 5.0
POOR_CURING_MINUTES = 12.0

# Diffusion
DIFFUSION_REFERENCE_TEMP = 15.0  # °C
DIFFUSION_TEMP_SCALE = 50.0
DIFFUSION_FLOOR_RATE = 0.05
BLOOM_GAIN = 0.5  # share of diffusion that reaches the surface while parked
WAX_CONSUMPTION = 0.1  # wax spent per unit of bloom gained
BLOOM_SHED_PER_100KMH = 2.0

# Wear
KM_PER_TICK_PER_KMH = 0.01
TREAD_WEAR_PER_KM = 0.005  # mm
THERMAL_SOFTENING_TEMP = 25.0  # °C
THERMAL_SOFTENING_PER_DEG = 0.02
AGGRESSION_SPEED = 80.0  # km/h
AGGRESSION_PER_KMH = 0.01

# Oxidation and integrity
OXIDATION_COEFFICIENT = 0.05
ROT_OXIDATION_SCALE = 1000.0
WAX_DEPLETION_PENALTY = 0.05
POOR_CURING_MULTIPLIER = 1.2
CARCASS_EXPOSURE_PENALTY = 0.1

# Remaining useful life
ASSUMED_DAILY_KM = 40.0
CHEMICAL_RUL_BASE_DAYS = 100.0
CHEMICAL_RUL_DAYS_PER_WAX = 10.0

# Forecast card
FORECAST_KM_PER_MM = 200.0
FORECAST_SMOOTHING_TICKS = 5
FORECAST_CALIBRATION_RANGE = (0.5, 2.0)

# Simulation loop
BASE_TICK_MS = 500.0
MIN_SPEED_MULTIPLIER = 0.1
HISTORY_LIMIT = 50

# Persistence
STORAGE_KEY = "tyreTwinState_v3"

# Vision
GEMINI_MODEL_VISION = "gemini-3-flash-preview"
MOCK_ANALYSIS_DELAY_S = 2.0
VISION_NEW_TREAD_DEPTH = 8.0  # mm, reference depth for wear % estimates
ANALYSIS_FAILED_MESSAGE = "Failed to analyze image. Please check API Key or try again."
