"""Electra 34-bit command frame."""
import logging
import math
from enum import IntEnum

from homeassistant.components.climate import HVACMode

_LOGGER = logging.getLogger(__name__)

# Frame layout, MSB first:
#   33     power toggle
#   32..30 mode
#   29..28 fan
#   25     swing, 24 ifeel, 18 sleep (never set)
#   22..19 temperature - 15
#   1      always one
#   everything else zero
FRAME_BITS = 34

POWER_SHIFT = 33
MODE_SHIFT = 30
MODE_MASK = 0b111
FAN_SHIFT = 28
FAN_MASK = 0b11
SWING_SHIFT = 25
IFEEL_SHIFT = 24
TEMP_SHIFT = 19
TEMP_MASK = 0b1111
SLEEP_SHIFT = 18
ONES_BIT = 1 << 1

TEMP_MIN = 16  # Celsius
TEMP_MAX = 30  # Celsius
TEMP_OFFSET = 15
DEFAULT_TARGET_TEMP = 24


class ElectraMode(IntEnum):
    """Mode field values."""

    COOL = 0b001
    HEAT = 0b010
    AUTO = 0b011
    DRY = 0b100
    FAN = 0b101
    OFF = 0b111


class ElectraFan(IntEnum):
    """Fan field values."""

    LOW = 0b00
    MEDIUM = 0b01
    HIGH = 0b10
    AUTO = 0b11


# Modes that switch the unit on; anything else is sent as OFF
HVAC_TO_ELECTRA = {
    HVACMode.COOL: ElectraMode.COOL,
    HVACMode.HEAT: ElectraMode.HEAT,
    HVACMode.AUTO: ElectraMode.AUTO,
}


def clamp_temperature(target_temp):
    """Clamp to the supported range and round half up to whole degrees."""
    if target_temp is None:
        target_temp = DEFAULT_TARGET_TEMP
    try:
        temp_val = float(target_temp)
    except (TypeError, ValueError):
        temp_val = DEFAULT_TARGET_TEMP
    if not math.isfinite(temp_val):
        temp_val = DEFAULT_TARGET_TEMP
    temp_val = max(TEMP_MIN, min(TEMP_MAX, temp_val))
    return int(math.floor(temp_val + 0.5))


def encode_temperature(target_temp):
    return clamp_temperature(target_temp) - TEMP_OFFSET


def build_frame(hvac_mode, target_temp, previous_mode):
    """Build the Electra frame for a climate intent.

    The power bit toggles the unit, so it is only raised when switching on
    from OFF. An OFF frame never carries it: the unit shuts down on the OFF
    mode value alone.
    """
    mode = HVAC_TO_ELECTRA.get(hvac_mode, ElectraMode.OFF)
    power = mode != ElectraMode.OFF and previous_mode == HVACMode.OFF

    frame = ONES_BIT
    frame |= ElectraFan.AUTO << FAN_SHIFT
    frame |= mode << MODE_SHIFT
    frame |= int(power) << POWER_SHIFT
    frame |= encode_temperature(target_temp) << TEMP_SHIFT

    _LOGGER.debug(
        f"Electra frame: mode={hvac_mode} (previous={previous_mode}), "
        f"temp={target_temp}, frame=0x{frame:09X}"
    )
    return frame


def frame_fields(frame):
    """Split a frame into its named fields."""
    return {
        "power": (frame >> POWER_SHIFT) & 1,
        "mode": (frame >> MODE_SHIFT) & MODE_MASK,
        "fan": (frame >> FAN_SHIFT) & FAN_MASK,
        "swing": (frame >> SWING_SHIFT) & 1,
        "ifeel": (frame >> IFEEL_SHIFT) & 1,
        "temperature": (frame >> TEMP_SHIFT) & TEMP_MASK,
        "sleep": (frame >> SLEEP_SHIFT) & 1,
    }
