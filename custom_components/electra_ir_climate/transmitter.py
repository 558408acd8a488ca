"""Send pulse sequences through a Tuya IR blaster."""
import logging
import threading

from tinytuya import Contrib

from homeassistant.exceptions import HomeAssistantError

from .climate_protocols.electra_pulses import CARRIER_FREQUENCY, PulseType
from .const import CONNECTION_RETRY_LIMIT, CONNECTION_TIMEOUT, DEFAULT_PROTOCOL_VERSION

_LOGGER = logging.getLogger(__name__)


def probe_device(dev_id, address, local_key, version):
    """Blocking connection test"""
    _LOGGER.debug("Testing connection to %s at %s with version %s", dev_id, address, version)
    try:
        device = Contrib.IRRemoteControlDevice(
            dev_id=dev_id,
            address=address,
            local_key=local_key,
            version=version,
            connection_timeout=CONNECTION_TIMEOUT,
            connection_retry_limit=CONNECTION_RETRY_LIMIT
        )
        status = device.status()
        _LOGGER.debug("Connection test status: %s", status)
        return device, status
    except Exception as e:
        _LOGGER.error("Connection test failed: %s", e)
        return None, {"Error": str(e)}


class TuyaIRTransmitter:
    """Raw mark/space transmitter backed by a Tuya IR remote control device.

    Timings are buffered between ``begin_frame`` and ``send``. Callers sharing
    the transmitter between threads should go through ``transmit``, which
    holds the device lock for the whole cycle. The Tuya raw
    format is a plain list of alternating mark/space durations starting with a
    mark, so adjacent pulses of the same type are merged into one.
    """

    def __init__(self, dev_id, address, local_key, protocol_version=DEFAULT_PROTOCOL_VERSION):
        self._dev_id = dev_id
        self._address = address
        self._local_key = local_key
        self._protocol_version = protocol_version

        self._device = None
        # Re-entrant: transmit() holds it across begin, load and send
        self._lock = threading.RLock()

        self._durations = []
        self._last_type = None
        self.carrier_frequency = CARRIER_FREQUENCY

    def begin_frame(self):
        self._durations = []
        self._last_type = None

    def set_carrier_frequency(self, frequency):
        self.carrier_frequency = frequency

    def mark(self, duration):
        self._append(PulseType.MARK, duration)

    def space(self, duration):
        # Nothing to wait for before the first mark
        if self._last_type is None:
            return
        self._append(PulseType.SPACE, duration)

    def _append(self, pulse_type, duration):
        if duration <= 0:
            return
        if pulse_type == self._last_type:
            self._durations[-1] += duration
        else:
            self._durations.append(duration)
            self._last_type = pulse_type

    @property
    def durations(self):
        return list(self._durations)

    def transmit(self, sequence):
        """Load a pulse sequence and send it."""
        with self._lock:
            self.set_carrier_frequency(sequence.carrier_frequency)
            self.begin_frame()
            for pulse in sequence:
                if pulse.type == PulseType.MARK:
                    self.mark(pulse.duration)
                else:
                    self.space(pulse.duration)
            return self.send()

    def send(self):
        """Send the buffered frame, blocking."""
        with self._lock:
            try:
                if not self._ensure_connection():
                    raise HomeAssistantError("Cannot establish connection to device")

                _LOGGER.debug(
                    "Sending IR command with %d pulses at %d Hz",
                    len(self._durations), self.carrier_frequency
                )

                b64 = Contrib.IRRemoteControlDevice.pulses_to_base64(self._durations)
                result = self._device.send_button(b64)

                if result and "Error" in result:
                    _LOGGER.error("Failed to send IR command: %s", result)
                    raise HomeAssistantError(f"Tuya device error: {result}")

                _LOGGER.debug("IR command sent successfully")
                return True

            except Exception as e:
                self._deinit_device()
                _LOGGER.error("Failed to send IR command: %s", e)
                raise HomeAssistantError(f"Failed to send IR command: {e}") from e

    def check_available(self):
        """Return True if the device answers a status request."""
        with self._lock:
            try:
                if not self._ensure_connection():
                    return False

                status = self._device.status()
                if status is None:
                    _LOGGER.debug("Device %s status is None", self._dev_id)
                    return False

                _LOGGER.debug("Device %s is available", self._dev_id)
                return True

            except Exception as e:
                _LOGGER.debug("Availability check failed for %s: %s", self._dev_id, e)
                self._deinit_device()
                return False

    def close(self):
        with self._lock:
            self._deinit_device()

    def _init_device(self):
        if self._device:
            return

        _LOGGER.debug("Initializing device %s with version %s", self._dev_id, self._protocol_version)
        self._device = Contrib.IRRemoteControlDevice(
            dev_id=self._dev_id,
            address=self._address,
            local_key=self._local_key,
            version=self._protocol_version,
            persist=True,
            connection_timeout=CONNECTION_TIMEOUT,
            connection_retry_limit=CONNECTION_RETRY_LIMIT
        )

    def _deinit_device(self):
        if self._device:
            try:
                self._device.close()
            except Exception as e:
                _LOGGER.debug("Closing device %s failed: %s", self._dev_id, e)
            finally:
                self._device = None

    def _ensure_connection(self):
        """Ensure device connection is active"""
        if not self._device:
            self._init_device()
            return self._device is not None

        try:
            self._device.status()
            return True
        except Exception as e:
            _LOGGER.debug("Connection lost, reinitializing: %s", e)
            self._deinit_device()
            self._init_device()
            return self._device is not None
