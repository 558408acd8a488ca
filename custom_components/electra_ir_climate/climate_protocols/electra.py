"""Electra Climate IR Protocol."""
import logging

from homeassistant.components.climate import HVACMode

from .base import ClimateIRProtocol
from .electra_frame import TEMP_MAX, TEMP_MIN, build_frame, frame_fields
from .electra_pulses import encode_frame

_LOGGER = logging.getLogger(__name__)


class ToggleStateTracker:
    """Last mode sent to the unit, used to decide on the power toggle."""

    def __init__(self, mode=HVACMode.OFF):
        self._mode = mode

    def read(self):
        return self._mode

    def update(self, mode):
        self._mode = mode


class ElectraProtocol(ClimateIRProtocol):
    """
    Electra A/C IR protocol.

    34-bit frame, sent three times with a 1 ms time unit. The power bit is
    a toggle, so the protocol keeps the previously sent mode.
    """

    TEMP_MIN = TEMP_MIN
    TEMP_MAX = TEMP_MAX
    TEMP_STEP = 1

    def __init__(self, supports_cool=True, supports_heat=True, initial_mode=HVACMode.OFF):
        super().__init__()

        self.supported_hvac_modes = [HVACMode.OFF]
        if supports_cool:
            self.supported_hvac_modes.append(HVACMode.COOL)
        if supports_heat:
            self.supported_hvac_modes.append(HVACMode.HEAT)
        self.supported_hvac_modes.append(HVACMode.AUTO)

        self.tracker = ToggleStateTracker(initial_mode)

        _LOGGER.debug("Electra Protocol initialized")

    def generate_ir_code(self, hvac_mode, target_temp):
        """Generate Electra IR code for climate command."""
        _LOGGER.debug(f"Generating Electra IR code: mode={hvac_mode}, temp={target_temp}")

        frame = build_frame(hvac_mode, target_temp, self.tracker.read())
        self.tracker.update(hvac_mode)

        _LOGGER.debug(f"Electra frame fields: {frame_fields(frame)}")

        return encode_frame(frame)
