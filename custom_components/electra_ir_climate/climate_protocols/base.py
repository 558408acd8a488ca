"""Base climate protocol."""
from abc import ABC, abstractmethod

from homeassistant.components.climate import HVACMode


class ClimateIRProtocol(ABC):
    """Base class for all climate IR protocols."""

    def __init__(self):
        self.supported_hvac_modes = [
            HVACMode.OFF, HVACMode.COOL, HVACMode.HEAT, HVACMode.AUTO
        ]

    @abstractmethod
    def generate_ir_code(self, hvac_mode, target_temp):
        """Generate IR pulse sequence for climate command."""

    @property
    def temperature_min(self):
        return getattr(self, 'TEMP_MIN', 16)

    @property
    def temperature_max(self):
        return getattr(self, 'TEMP_MAX', 30)

    @property
    def temperature_step(self):
        return getattr(self, 'TEMP_STEP', 1)
