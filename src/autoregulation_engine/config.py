"""Environment-variable-based configuration for the default progression rule."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from datetime import tzinfo
from typing import TypeVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from autoregulation_engine.exceptions import ConfigurationError
from autoregulation_engine.models.progression import ProgressionRule

_T = TypeVar("_T")

WEIGHT_INCREMENT_VAR = "AUTOREG_WEIGHT_INCREMENT"
MISS_THRESHOLD_VAR = "AUTOREG_MISS_THRESHOLD"
DELOAD_PERCENT_VAR = "AUTOREG_DELOAD_PERCENT"
LOW_MULTIPLIER_VAR = "AUTOREG_LOW_MULTIPLIER"
NEUTRAL_MULTIPLIER_VAR = "AUTOREG_NEUTRAL_MULTIPLIER"
HIGH_MULTIPLIER_VAR = "AUTOREG_HIGH_MULTIPLIER"
TIMEZONE_VAR = "AUTOREG_TIMEZONE"


def load_progression_rule(environ: Mapping[str, str] | None = None) -> ProgressionRule:
    """Build a validated ProgressionRule from the environment.

    Unset or empty variables keep ProgressionRule.default() values.

    Raises:
        ConfigurationError: a variable is set but not a number.
        InvalidProgressionRule: the resulting rule is out of range.
    """
    env = os.environ if environ is None else environ
    default = ProgressionRule.default()
    rule = ProgressionRule(
        weight_increment=_read(env, WEIGHT_INCREMENT_VAR, float, default.weight_increment),
        miss_threshold=_read(env, MISS_THRESHOLD_VAR, int, default.miss_threshold),
        deload_percent=_read(env, DELOAD_PERCENT_VAR, float, default.deload_percent),
        low_multiplier=_read(env, LOW_MULTIPLIER_VAR, float, default.low_multiplier),
        neutral_multiplier=_read(
            env, NEUTRAL_MULTIPLIER_VAR, float, default.neutral_multiplier
        ),
        high_multiplier=_read(env, HIGH_MULTIPLIER_VAR, float, default.high_multiplier),
    )
    return rule.validate()


def load_timezone(environ: Mapping[str, str] | None = None) -> tzinfo | None:
    """Timezone used to floor timestamps to calendar days, or None if unset."""
    env = os.environ if environ is None else environ
    name = env.get(TIMEZONE_VAR, "").strip()
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"{TIMEZONE_VAR}: unknown timezone {name!r}") from exc


def _read(
    env: Mapping[str, str], name: str, parse: Callable[[str], _T], default: _T
) -> _T:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return parse(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name}: cannot parse {raw!r}") from exc
