"""Enumerations and numeric constants for the autoregulation engine.

Thresholds are grouped by the component that consumes them.
"""

from enum import IntEnum, auto


class ReadinessBand(IntEnum):
    """Qualitative readiness bucket. These are the only three states."""

    LOW = auto()
    NEUTRAL = auto()
    HIGH = auto()


class ReadinessSource(IntEnum):
    """Where a readiness score came from."""

    THIRD_PARTY = auto()
    BIOMETRIC_MODEL = auto()


# ---------------------------------------------------------------------------
# Score bounds
# ---------------------------------------------------------------------------
READINESS_SCORE_MIN = 0.0
READINESS_SCORE_MAX = 100.0
NEUTRAL_READINESS_SCORE = 50.0  # Score with no computable components

# ---------------------------------------------------------------------------
# Third-party readiness bands
# ---------------------------------------------------------------------------
THIRD_PARTY_LOW_THRESHOLD = 70.0   # score < 70 → LOW
THIRD_PARTY_HIGH_THRESHOLD = 85.0  # score >= 85 → HIGH

# ---------------------------------------------------------------------------
# Biometric model bands (composite is centered on 50)
# ---------------------------------------------------------------------------
BIOMETRIC_LOW_THRESHOLD = 35.0   # score < 35 → LOW
BIOMETRIC_HIGH_THRESHOLD = 70.0  # score > 70 → HIGH

# Trailing baseline window, half-open [day - 14, day)
BASELINE_LOOKBACK_DAYS = 14

# Component slopes: points per unit of deviation from baseline
SLEEP_SLOPE = 15.0          # per hour of sleep
RESTING_HR_SLOPE = 10.0     # per bpm, inverted (lower is better)
HRV_SLOPE = 4.0             # per ms

# ---------------------------------------------------------------------------
# Progression tolerances
# ---------------------------------------------------------------------------
HIT_WEIGHT_TOLERANCE = 0.985    # top set within 1.5% of target counts as hit
UNDERLOADED_TOLERANCE = 0.97    # more than 3% below target counts as a miss

# ---------------------------------------------------------------------------
# Default progression rule
# ---------------------------------------------------------------------------
DEFAULT_WEIGHT_INCREMENT = 2.5
DEFAULT_MISS_THRESHOLD = 2
DEFAULT_DELOAD_PERCENT = 0.05
DEFAULT_LOW_MULTIPLIER = 0.92
DEFAULT_NEUTRAL_MULTIPLIER = 1.00
DEFAULT_HIGH_MULTIPLIER = 1.03

DEFAULT_SET_COUNT = 3
