# const.py
"""Constants for the Electra IR Climate integration."""

DOMAIN = "electra_ir_climate"
DEFAULT_FRIENDLY_NAME = "Electra IR Climate"
CLIMATE_BRAND = "electra"

CONF_LOCAL_KEY = "local_key"
CONF_PROTOCOL_VERSION = "protocol_version"
CONF_TEMPERATURE_SENSOR = "temperature_sensor"
CONF_SUPPORTS_COOL = "supports_cool"
CONF_SUPPORTS_HEAT = "supports_heat"

TUYA_VERSIONS = [3.3, 3.4, 3.5, 3.2, 3.1]
DEFAULT_PROTOCOL_VERSION = 3.3

CONNECTION_TIMEOUT = 10
CONNECTION_RETRY_LIMIT = 3
