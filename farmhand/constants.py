"""Tunable game constants. Reducers reference these instead of literals."""

from __future__ import annotations

from typing import Any, Literal, get_args

GameState = dict[str, Any]

FieldMode = Literal[
    "observe",
    "plant",
    "harvest",
    "cleanup",
    "water",
    "fertilize",
    "set-scarecrow",
    "set-sprinkler",
    "mine",
]
PlotContentType = Literal["crop", "scarecrow", "sprinkler", "shoveled"]
CropLifeStage = Literal["seed", "growing", "grown"]
FertilizerType = Literal["none", "standard", "rainbow"]
Severity = Literal["info", "success", "warning", "error"]
ToolType = Literal["hoe", "scythe", "shovel", "watering_can"]
ToolLevel = Literal["default", "bronze", "iron", "silver", "gold"]
CowGender = Literal["female", "male"]

FIELD_MODES: tuple[str, ...] = get_args(FieldMode)

# =============================================================================
# FIELD
# =============================================================================
INITIAL_FIELD_WIDTH = 6
INITIAL_FIELD_HEIGHT = 10

# field_id -> (columns, rows, price)
PURCHASEABLE_FIELD_SIZES: dict[int, tuple[int, int, int]] = {
    1: (8, 12, 1000),
    2: (10, 16, 2000),
    3: (12, 18, 3000),
}

FERTILIZER_BONUS = 0.5
INITIAL_SPRINKLER_RANGE = 1
SHOVELED_PLOT_MIN_DAYS = 1
SHOVELED_PLOT_MAX_DAYS = 5

FERTILIZER_ITEM_ID = "fertilizer"
RAINBOW_FERTILIZER_ITEM_ID = "rainbow-fertilizer"
SCARECROW_ITEM_ID = "scarecrow"
SPRINKLER_ITEM_ID = "sprinkler"

# =============================================================================
# WEATHER AND NERFS
# =============================================================================
PRECIPITATION_CHANCE = 0.4
STORM_CHANCE = 0.1
CROW_CHANCE = 0.2

# =============================================================================
# INVENTORY AND SHOP
# =============================================================================
INITIAL_STORAGE_LIMIT = 100
STORAGE_EXPANSION_AMOUNT = 20
STORAGE_EXPANSION_BASE_PRICE = 2000
STORAGE_EXPANSION_SCALE_PREMIUM = 1000
INITIAL_MONEY = 500

# cow_pen_id -> (cows, price)
PURCHASEABLE_COW_PENS: dict[int, tuple[int, int]] = {
    1: (10, 1500),
    2: (20, 2500),
    3: (30, 3500),
}
PURCHASEABLE_COMBINES: dict[int, int] = {1: 500_000}
PURCHASEABLE_SMELTERS: dict[int, int] = {1: 500_000}

# =============================================================================
# PRICES
# =============================================================================
MIN_VALUE_ADJUSTMENT = 0.5
MAX_VALUE_ADJUSTMENT = 1.5
PRICE_EVENT_CHANCE = 0.05
PRICE_EVENT_STANDARD_DURATION_DECREASE = 1

# =============================================================================
# LOANS AND RECORDS
# =============================================================================
LOAN_INTEREST_RATE = 0.03
LOAN_GARNISHMENT_RATE = 0.05
DAILY_FINANCIAL_HISTORY_RECORD_LENGTH = 7
NOTIFICATION_LOG_SIZE = 15

# =============================================================================
# PEERS
# =============================================================================
MAX_LATEST_PEER_MESSAGES = 15
MAX_PENDING_PEER_MESSAGES = 5

# =============================================================================
# COWS
# =============================================================================
COW_FEED_ITEM_ID = "cow-feed"
HUGGING_MACHINE_ITEM_ID = "hugging-machine"
MAX_ANIMAL_NAME_LENGTH = 20

COW_STARTING_WEIGHT_BASE = 1000
COW_STARTING_WEIGHT_VARIANCE = 100
COW_MALE_WEIGHT_BONUS = 1.1
COW_WEIGHT_MULTIPLIER_MINIMUM = 0.5
COW_WEIGHT_MULTIPLIER_MAXIMUM = 1.5
COW_WEIGHT_MULTIPLIER_FEED_BENEFIT = 0.05
COW_PRICE_PER_POUND = 1.5
COW_MINIMUM_VALUE_MULTIPLIER = 0.5
COW_MAXIMUM_VALUE_MULTIPLIER = 1.5
COW_MAXIMUM_VALUE_MATURITY_AGE = 20

COW_HUG_BENEFIT = 0.2
COW_MAXIMUM_HUGS_PER_DAY = 3

COW_MILK_RATE_SLOWEST = 7
COW_MILK_RATE_FASTEST = 3
COW_FERTILIZER_PRODUCTION_RATE_SLOWEST = 10
COW_FERTILIZER_PRODUCTION_RATE_FASTEST = 5
COW_GESTATION_PERIOD_DAYS = 5

COW_COLORS = ("blue", "brown", "green", "orange", "purple", "white", "yellow")
RAINBOW_COW_COLOR = "rainbow"
RAINBOW_COW_CHANCE = 0.01

COW_NAMES = (
    "Annabelle",
    "Bessie",
    "Buttercup",
    "Clover",
    "Daisy",
    "Dottie",
    "Gertie",
    "Hazel",
    "Maggie",
    "Moolissa",
    "Penny",
    "Rosie",
    "Sugar",
    "Tilly",
    "Waffles",
)

# =============================================================================
# TOOLS AND MINING
# =============================================================================
TOOL_LEVELS: tuple[ToolLevel, ...] = ("default", "bronze", "iron", "silver", "gold")
TOOL_TYPES: tuple[ToolType, ...] = ("hoe", "scythe", "shovel", "watering_can")

# Ingots consumed to reach a tool level.
TOOL_UPGRADE_INGREDIENTS: dict[ToolLevel, dict[str, int]] = {
    "bronze": {"bronze-ingot": 5},
    "iron": {"iron-ingot": 5},
    "silver": {"silver-ingot": 5},
    "gold": {"gold-ingot": 5},
}

SCYTHE_BONUS_YIELD: dict[ToolLevel, int] = {
    "default": 0,
    "bronze": 1,
    "iron": 2,
    "silver": 3,
    "gold": 4,
}
HOE_SEED_RETURN_CHANCE: dict[ToolLevel, float] = {
    "default": 0.0,
    "bronze": 0.25,
    "iron": 0.5,
    "silver": 0.75,
    "gold": 1.0,
}
WATERING_CAN_RANGE: dict[ToolLevel, int] = {
    "default": 0,
    "bronze": 1,
    "iron": 1,
    "silver": 2,
    "gold": 2,
}
SHOVEL_ORE_CHANCE: dict[ToolLevel, float] = {
    "default": 0.3,
    "bronze": 0.45,
    "iron": 0.6,
    "silver": 0.75,
    "gold": 0.9,
}

# Relative spawn weights for items dug out of the field.
ORE_SPAWN_WEIGHTS: dict[str, float] = {
    "stone": 0.5,
    "coal": 0.25,
    "bronze-ore": 0.12,
    "iron-ore": 0.08,
    "silver-ore": 0.03,
    "gold-ore": 0.02,
}
