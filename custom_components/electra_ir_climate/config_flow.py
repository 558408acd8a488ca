"""Config flow for Electra IR Climate."""
import logging
import voluptuous as vol

from .const import (
    CONF_LOCAL_KEY,
    CONF_PROTOCOL_VERSION,
    CONF_SUPPORTS_COOL,
    CONF_SUPPORTS_HEAT,
    CONF_TEMPERATURE_SENSOR,
    DEFAULT_FRIENDLY_NAME,
    DOMAIN,
    TUYA_VERSIONS,
)
from .transmitter import probe_device

from homeassistant import config_entries
from homeassistant.core import callback
import homeassistant.helpers.config_validation as cv
from homeassistant.const import CONF_NAME, CONF_HOST, CONF_DEVICE_ID
from homeassistant.helpers import entity_registry as er

_LOGGER = logging.getLogger(__name__)

TEMPERATURE_UNITS = ['°c', '°f', 'c', 'f']


def _temperature_sensors(hass):
    """Sensor entities that look like temperature sensors."""
    entity_reg = er.async_get(hass)
    sensors = {'': 'No Temperature Sensor'}

    for entity in list(entity_reg.entities.values()):
        entity_id = entity.entity_id
        friendly_name = entity.original_name or entity_id

        if not entity_id.startswith('sensor.'):
            continue

        state = hass.states.get(entity_id)
        if not state:
            continue

        unit = (state.attributes.get('unit_of_measurement') or '').lower()
        if unit in TEMPERATURE_UNITS or 'temperature' in entity_id.lower():
            sensors[entity_id] = f"{friendly_name} ({entity_id})"

    _LOGGER.debug("Found %d temp sensors", len(sensors) - 1)
    return sensors


def _modes_schema(config):
    return vol.Schema({
        vol.Required(CONF_SUPPORTS_COOL, default=config.get(CONF_SUPPORTS_COOL, True)): cv.boolean,
        vol.Required(CONF_SUPPORTS_HEAT, default=config.get(CONF_SUPPORTS_HEAT, True)): cv.boolean,
    })


class ElectraClimateConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    VERSION = 1

    def __init__(self):
        self.config = {
            CONF_NAME: DEFAULT_FRIENDLY_NAME,
            CONF_DEVICE_ID: '',
            CONF_LOCAL_KEY: '',
            CONF_PROTOCOL_VERSION: TUYA_VERSIONS[0],
            CONF_HOST: '',
            CONF_SUPPORTS_COOL: True,
            CONF_SUPPORTS_HEAT: True,
            CONF_TEMPERATURE_SENSOR: '',
        }

    @staticmethod
    @callback
    def async_get_options_flow(entry):
        return ElectraClimateOptionsFlow(entry)

    async def async_step_user(self, user_input=None):
        """Handle a flow initialized by the user."""
        errors = {}
        if user_input is not None:
            await self.async_set_unique_id(user_input[CONF_DEVICE_ID])
            self._abort_if_unique_id_configured()

            self.config.update(user_input)

            version = await self._async_probe_version()
            if version is not None:
                self.config[CONF_PROTOCOL_VERSION] = version
                return await self.async_step_modes()
            errors["base"] = "cannot_connect"

        schema = vol.Schema({
            vol.Required(CONF_NAME, default=self.config[CONF_NAME]): cv.string,
            vol.Required(CONF_HOST, default=self.config[CONF_HOST]): cv.string,
            vol.Required(CONF_DEVICE_ID, default=self.config[CONF_DEVICE_ID]): cv.string,
            vol.Required(CONF_LOCAL_KEY, default=self.config[CONF_LOCAL_KEY]): cv.string,
        })

        return self.async_show_form(
            step_id="user",
            errors=errors,
            data_schema=schema
        )

    async def _async_probe_version(self):
        """Find the first Tuya protocol version the device answers to."""
        for version in TUYA_VERSIONS:
            _LOGGER.debug("Testing connection with version %s", version)
            device, status = await self.hass.async_add_executor_job(
                probe_device,
                self.config[CONF_DEVICE_ID],
                self.config[CONF_HOST],
                self.config[CONF_LOCAL_KEY],
                version
            )
            if device is not None:
                await self.hass.async_add_executor_job(device.close)
            if device and status and "Error" not in status:
                _LOGGER.debug("Connection successful with version %s", version)
                return version
        return None

    async def async_step_modes(self, user_input=None):
        """Select which operating modes the unit supports."""
        if user_input is not None:
            self.config[CONF_SUPPORTS_COOL] = user_input[CONF_SUPPORTS_COOL]
            self.config[CONF_SUPPORTS_HEAT] = user_input[CONF_SUPPORTS_HEAT]
            return await self.async_step_sensor_selection()

        return self.async_show_form(
            step_id="modes",
            data_schema=_modes_schema(self.config)
        )

    async def async_step_sensor_selection(self, user_input=None):
        """Sensor selection step."""
        if user_input is not None:
            self.config[CONF_TEMPERATURE_SENSOR] = user_input.get(CONF_TEMPERATURE_SENSOR, '')

            _LOGGER.debug("Final config - Temp sensor: '%s'", self.config[CONF_TEMPERATURE_SENSOR])

            return self.async_create_entry(
                title=self.config[CONF_NAME],
                data=self.config
            )

        temp_sensors = _temperature_sensors(self.hass)

        schema = vol.Schema({
            vol.Optional(CONF_TEMPERATURE_SENSOR, default=self.config.get(CONF_TEMPERATURE_SENSOR, '')): vol.In(temp_sensors),
        })

        return self.async_show_form(
            step_id="sensor_selection",
            data_schema=schema,
            description_placeholders={
                "climate_name": self.config[CONF_NAME]
            }
        )


class ElectraClimateOptionsFlow(config_entries.OptionsFlow):
    """Options flow for Electra IR Climate."""

    def __init__(self, entry):
        self.entry = entry
        self.config = dict(entry.data.items())
        _LOGGER.debug("OptionsFlow initialized with config: %s", self.config)

    async def async_step_init(self, user_input=None):
        """Manage the options."""
        if user_input is not None:
            _LOGGER.debug("Options user input: %s", user_input)

            updated_config = dict(self.config)
            updated_config.update(user_input)

            self.hass.config_entries.async_update_entry(self.entry, data=updated_config)
            return self.async_create_entry(title="", data={})

        schema = _modes_schema(self.config).extend({
            vol.Optional(
                CONF_TEMPERATURE_SENSOR,
                default=self.config.get(CONF_TEMPERATURE_SENSOR, '')
            ): vol.In(_temperature_sensors(self.hass)),
        })

        return self.async_show_form(
            step_id="init",
            data_schema=schema
        )
