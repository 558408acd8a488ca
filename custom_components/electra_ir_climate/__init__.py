"""Electra IR Climate integration."""
import logging
from homeassistant.core import HomeAssistant
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import CONF_DEVICE_ID, CONF_HOST, Platform

from .const import CONF_LOCAL_KEY, CONF_PROTOCOL_VERSION, DEFAULT_PROTOCOL_VERSION, DOMAIN
from .transmitter import TuyaIRTransmitter

_LOGGER = logging.getLogger(__name__)

PLATFORMS = [Platform.CLIMATE]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Open the IR blaster for this entry and set up the climate platform."""
    config = entry.data
    transmitter = TuyaIRTransmitter(
        dev_id=config.get(CONF_DEVICE_ID),
        address=config.get(CONF_HOST),
        local_key=config.get(CONF_LOCAL_KEY),
        protocol_version=float(config.get(CONF_PROTOCOL_VERSION, DEFAULT_PROTOCOL_VERSION)),
    )
    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = transmitter
    _LOGGER.debug(
        "Transmitter for %s at %s (Tuya %s)",
        config.get(CONF_DEVICE_ID), config.get(CONF_HOST),
        config.get(CONF_PROTOCOL_VERSION, DEFAULT_PROTOCOL_VERSION)
    )

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    entry.async_on_unload(entry.add_update_listener(update_listener))
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload the platform, then drop the blaster connection."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        transmitter = hass.data[DOMAIN].pop(entry.entry_id)
        await hass.async_add_executor_job(transmitter.close)
        _LOGGER.debug("Closed transmitter for %s", entry.entry_id)
    return unload_ok


async def update_listener(hass: HomeAssistant, entry: ConfigEntry):
    """Reload with the new modes or sensor."""
    _LOGGER.debug("Entry %s updated, reloading", entry.entry_id)
    await hass.config_entries.async_reload(entry.entry_id)
