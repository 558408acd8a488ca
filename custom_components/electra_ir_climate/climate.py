"""Support for Electra IR Climate Control."""
import logging

from homeassistant.components.climate import (
    ClimateEntity,
    ClimateEntityFeature,
    HVACMode,
    HVACAction,
)
from homeassistant.const import (
    ATTR_TEMPERATURE,
    CONF_DEVICE_ID,
    CONF_NAME,
    STATE_UNAVAILABLE,
    STATE_UNKNOWN,
    UnitOfTemperature,
)
from homeassistant.helpers.entity import DeviceInfo
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.restore_state import RestoreEntity
from homeassistant.core import callback
from homeassistant.helpers import event

from .climate_protocols import get_protocol
from .climate_protocols.electra_frame import DEFAULT_TARGET_TEMP, clamp_temperature
from .const import (
    CLIMATE_BRAND,
    CONF_SUPPORTS_COOL,
    CONF_SUPPORTS_HEAT,
    CONF_TEMPERATURE_SENSOR,
    DEFAULT_FRIENDLY_NAME,
    DOMAIN,
)

_LOGGER = logging.getLogger(__name__)

HVAC_ACTION_MAPPING = {
    HVACMode.OFF: HVACAction.OFF,
    HVACMode.COOL: HVACAction.COOLING,
    HVACMode.HEAT: HVACAction.HEATING,
    HVACMode.AUTO: HVACAction.IDLE,
}


async def async_setup_entry(hass, entry, async_add_entities):
    """Set up platform from config entry."""
    _LOGGER.debug("Setting up entry: %s", entry.data)
    config = entry.data

    transmitter = hass.data[DOMAIN][entry.entry_id]

    climate = ElectraIRClimate(
        hass=hass,
        name=config.get(CONF_NAME, DEFAULT_FRIENDLY_NAME),
        dev_id=config.get(CONF_DEVICE_ID),
        transmitter=transmitter,
        supports_cool=config.get(CONF_SUPPORTS_COOL, True),
        supports_heat=config.get(CONF_SUPPORTS_HEAT, True),
        temperature_sensor=config.get(CONF_TEMPERATURE_SENSOR, ""),
    )

    await climate.async_update()
    async_add_entities([climate])


class ElectraIRClimate(ClimateEntity, RestoreEntity):
    """Electra air conditioner driven through a Tuya IR blaster."""

    _attr_has_entity_name = True
    _attr_temperature_unit = UnitOfTemperature.CELSIUS
    _attr_supported_features = (
        ClimateEntityFeature.TARGET_TEMPERATURE
        | ClimateEntityFeature.TURN_ON
        | ClimateEntityFeature.TURN_OFF
    )

    def __init__(self, hass, name, dev_id, transmitter, supports_cool=True, supports_heat=True, temperature_sensor=""):
        """Initialize the climate device."""
        self.hass = hass
        self._attr_name = name
        self._dev_id = dev_id
        self._transmitter = transmitter
        self._temperature_sensor = temperature_sensor

        self._protocol = get_protocol(
            CLIMATE_BRAND,
            supports_cool=supports_cool,
            supports_heat=supports_heat,
        )

        self._available = False

        # Defaults, used when nothing can be restored
        self._hvac_mode = HVACMode.OFF
        self._last_on_mode = next(
            mode for mode in self._protocol.supported_hvac_modes if mode != HVACMode.OFF
        )
        self._target_temperature = DEFAULT_TARGET_TEMP
        self._current_temperature = None

        self._temp_listener = None

        _LOGGER.debug("Climate entity initialized: %s (ID: %s)", name, dev_id)

    async def async_added_to_hass(self):
        """Run when entity about to be added to hass."""
        await super().async_added_to_hass()

        await self._setup_sensor_listener()
        await self._restore_state()

    async def _setup_sensor_listener(self):
        """Follow the temperature sensor, if one is configured."""
        if not self._temperature_sensor:
            return

        @callback
        def async_temperature_sensor_listener(sensor_event):
            """Handle temperature sensor updates."""
            self._current_temperature = _parse_temperature(sensor_event.data.get("new_state"))
            _LOGGER.debug("Temperature sensor updated: %s°C", self._current_temperature)
            self.async_write_ha_state()

        self._temp_listener = event.async_track_state_change_event(
            self.hass, [self._temperature_sensor], async_temperature_sensor_listener
        )

        self._current_temperature = _parse_temperature(self.hass.states.get(self._temperature_sensor))
        _LOGGER.debug("Initial temperature: %s°C", self._current_temperature)

    async def _restore_state(self):
        """Restore previous mode and target, and seed the toggle tracker."""
        old_state = await self.async_get_last_state()

        if old_state is None:
            _LOGGER.debug("No previous state found for %s, using defaults", self.name)
            if self._current_temperature is not None:
                self._target_temperature = clamp_temperature(self._current_temperature)
        else:
            if old_state.state in self.hvac_modes:
                self._hvac_mode = HVACMode(old_state.state)
                if self._hvac_mode != HVACMode.OFF:
                    self._last_on_mode = self._hvac_mode
                _LOGGER.debug("Restored HVAC mode: %s", self._hvac_mode)

            restored_temp = old_state.attributes.get(ATTR_TEMPERATURE)
            if restored_temp is not None:
                # Bad or out-of-range values come back as 24 or the nearest limit
                self._target_temperature = clamp_temperature(restored_temp)
                _LOGGER.debug(
                    "Restored target temperature: %s (stored %s)",
                    self._target_temperature, restored_temp
                )

        self._protocol.tracker.update(self._hvac_mode)

        _LOGGER.info(
            "Restored state for %s: mode=%s, temp=%s",
            self.name, self._hvac_mode, self._target_temperature
        )

    async def async_will_remove_from_hass(self):
        """Clean up when entity is removed."""
        if self._temp_listener:
            self._temp_listener()
            self._temp_listener = None
        await super().async_will_remove_from_hass()

    @property
    def available(self):
        return self._available

    @property
    def unique_id(self):
        return f"{DOMAIN}_{self._dev_id}"

    @property
    def current_temperature(self):
        return self._current_temperature

    @property
    def target_temperature(self):
        return self._target_temperature

    @property
    def target_temperature_step(self):
        return self._protocol.temperature_step

    @property
    def min_temp(self):
        return self._protocol.temperature_min

    @property
    def max_temp(self):
        return self._protocol.temperature_max

    @property
    def hvac_mode(self):
        return self._hvac_mode

    @property
    def hvac_action(self):
        return HVAC_ACTION_MAPPING.get(self._hvac_mode, HVACAction.OFF)

    @property
    def hvac_modes(self):
        return self._protocol.supported_hvac_modes

    @property
    def extra_state_attributes(self):
        """Return entity specific state attributes."""
        if self._temperature_sensor:
            return {"temperature_sensor": self._temperature_sensor}
        return {}

    @property
    def device_info(self):
        """Return device information."""
        return DeviceInfo(
            identifiers={(DOMAIN, self._dev_id)},
            name=self._attr_name,
            manufacturer="Electra",
            model="IR Climate Controller (Tuya IR blaster)",
        )

    async def async_set_temperature(self, **kwargs):
        """Set new target temperature, and optionally the mode."""
        hvac_mode = kwargs.get("hvac_mode")
        if hvac_mode is not None:
            self._hvac_mode = hvac_mode
        if ATTR_TEMPERATURE in kwargs:
            self._target_temperature = kwargs[ATTR_TEMPERATURE]
            _LOGGER.debug("Setting temperature to %s", self._target_temperature)

        await self._send_climate_command()
        self.async_write_ha_state()

    async def async_set_hvac_mode(self, hvac_mode):
        """Set new target hvac mode."""
        _LOGGER.debug("Setting HVAC mode from %s to %s", self._hvac_mode, hvac_mode)
        self._hvac_mode = hvac_mode

        await self._send_climate_command()
        self.async_write_ha_state()

    async def async_turn_on(self):
        """Turn on in the last mode used."""
        await self.async_set_hvac_mode(self._last_on_mode)

    async def async_turn_off(self):
        await self.async_set_hvac_mode(HVACMode.OFF)

    async def _send_climate_command(self):
        """Encode the current state and transmit it."""
        if self._hvac_mode != HVACMode.OFF:
            self._last_on_mode = self._hvac_mode

        pulses = self._protocol.generate_ir_code(
            hvac_mode=self._hvac_mode,
            target_temp=self._target_temperature,
        )
        try:
            await self.hass.async_add_executor_job(self._transmitter.transmit, pulses)
        except HomeAssistantError as e:
            _LOGGER.error("Climate command failed: %s", e)
            self._available = False
            raise
        self._available = True

    async def async_update(self):
        """Update device availability."""
        self._available = await self.hass.async_add_executor_job(self._transmitter.check_available)


def _parse_temperature(state):
    """Sensor state to a float, None when unknown or unavailable."""
    if state is None or state.state in (STATE_UNKNOWN, STATE_UNAVAILABLE):
        return None
    try:
        return float(state.state)
    except (ValueError, TypeError):
        _LOGGER.debug("Invalid temperature value: %s", state.state)
        return None
