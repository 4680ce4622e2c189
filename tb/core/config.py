import math
from dataclasses import dataclass
from enum import Enum
from tb.util.misc import format_duration

#region === Constants ===

# Upper bound on grid size.
MAX_DOTS = 300

# Preset totals offered in the form, in seconds.
PRESETS = (
    5 * 60,
    10 * 60,
    15 * 60,
    30 * 60,
    45 * 60,
    60 * 60,
    90 * 60,
    120 * 60,
)

# Presets at or below this get a one-minute interval suggested.
_SHORT_PRESET_MAX = 15 * 60


class TotalUnit(str, Enum):
    MINUTES = "minutes"
    HOURS = "hours"

class IntervalUnit(str, Enum):
    SECONDS = "seconds"
    MINUTES = "minutes"

_TOTAL_UNIT_SECONDS = {TotalUnit.MINUTES: 60, TotalUnit.HOURS: 3600}
_INTERVAL_UNIT_SECONDS = {IntervalUnit.SECONDS: 1, IntervalUnit.MINUTES: 60}

#endregion === Constants ===

#region === Types ===

class ConfigErrorKind(str, Enum):
    INVALID_TOTAL = "invalid_total"
    INVALID_INTERVAL = "invalid_interval"
    INTERVAL_EXCEEDS_TOTAL = "interval_exceeds_total"
    TOO_MANY_INTERVALS = "too_many_intervals"


# Raised by resolve() when a total/interval pair can't make a grid. Carries the kind so callers can branch without
# parsing the message.
class ConfigError(ValueError):
    def __init__(self, kind: ConfigErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


@dataclass(frozen=True)
class TimerConfig:
    total_seconds: int
    interval_seconds: int
    dot_count: int


# The raw form values. preset=None means the custom quantity/unit pair is used for the total.
@dataclass(frozen=True)
class RawInputs:
    preset: int | None = PRESETS[0]
    custom_quantity: int | str | None = 1
    custom_unit: TotalUnit = TotalUnit.MINUTES
    interval_quantity: int | str | None = 60
    interval_unit: IntervalUnit = IntervalUnit.SECONDS


@dataclass(frozen=True)
class Preview:
    total_seconds: int
    interval_seconds: int
    dot_count: int
    summary: str


DEFAULTS = RawInputs()

#endregion === Types ===

#region === Resolving ===

# Quantities from the form may be blank, fractional or junk; anything unusable counts as 0 and then clamps up to 1.
def _quantity(value):
    try:
        qty = float(value or 0)
    except (TypeError, ValueError):
        qty = 0.0
    if not math.isfinite(qty):
        qty = 0.0
    return max(1.0, qty)

# Fractional seconds are truncated, but never below one.
def total_seconds_from_inputs(raw: RawInputs) -> int:
    if raw.preset is not None:
        return int(raw.preset)
    return max(1, int(_quantity(raw.custom_quantity) * _TOTAL_UNIT_SECONDS[TotalUnit(raw.custom_unit)]))

def interval_seconds_from_inputs(raw: RawInputs) -> int:
    return max(1, int(_quantity(raw.interval_quantity) * _INTERVAL_UNIT_SECONDS[IntervalUnit(raw.interval_unit)]))


# Whole seconds for resolve(). Fractions truncate toward zero; anything non-numeric counts as 0 so it fails validation.
def _whole_seconds(value):
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


# Validates a total/interval pair and builds the immutable TimerConfig from it. Both values are truncated to whole
# seconds before any check. Checks run in a fixed order, so the first problem found is the one reported.
def resolve(total_seconds, interval_seconds, max_dots=MAX_DOTS) -> TimerConfig:
    total_seconds = _whole_seconds(total_seconds)
    interval_seconds = _whole_seconds(interval_seconds)
    if total_seconds <= 0:
        raise ConfigError(ConfigErrorKind.INVALID_TOTAL, "Enter a valid total time.")
    if interval_seconds <= 0:
        raise ConfigError(ConfigErrorKind.INVALID_INTERVAL, "Enter a valid interval.")
    if interval_seconds > total_seconds:
        raise ConfigError(ConfigErrorKind.INTERVAL_EXCEEDS_TOTAL,
                          "The interval can't be longer than the total time.")
    dot_count = math.ceil(total_seconds / interval_seconds)
    if dot_count > max_dots:
        raise ConfigError(ConfigErrorKind.TOO_MANY_INTERVALS,
                          f"Too many intervals (>{max_dots}). Use a longer interval.")
    return TimerConfig(
        total_seconds=total_seconds,
        interval_seconds=interval_seconds,
        dot_count=dot_count,
    )

def resolve_inputs(raw: RawInputs) -> TimerConfig:
    return resolve(total_seconds_from_inputs(raw), interval_seconds_from_inputs(raw))


# Non-committing version of resolve_inputs() for the live summary line. Does no validation, so a too-large grid still
# previews with its real dot count.
def preview(raw: RawInputs) -> Preview:
    total = total_seconds_from_inputs(raw)
    step = interval_seconds_from_inputs(raw)
    dots = math.ceil(total / step)
    return Preview(
        total_seconds=total,
        interval_seconds=step,
        dot_count=dots,
        summary=f"{dots} dots of {format_duration(step)} for {format_duration(total)}",
    )

# Interval the form should switch to when a preset is picked, or None to leave the interval alone.
def suggested_interval(preset):
    if preset is not None and preset <= _SHORT_PRESET_MAX:
        return 60, IntervalUnit.SECONDS
    return None

#endregion === Resolving ===
