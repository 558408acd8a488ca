import pytest
from homeassistant.components.climate import HVACMode

from custom_components.electra_ir_climate.climate_protocols import get_protocol
from custom_components.electra_ir_climate.climate_protocols.electra import (
    ElectraProtocol,
    ToggleStateTracker,
)
from custom_components.electra_ir_climate.climate_protocols.electra_pulses import encode_frame


def test_tracker_holds_last_mode():
    tracker = ToggleStateTracker()
    assert tracker.read() == HVACMode.OFF

    tracker.update(HVACMode.HEAT)
    assert tracker.read() == HVACMode.HEAT

    tracker.update("whatever")
    assert tracker.read() == "whatever"


def test_power_toggle_follows_previous_mode():
    protocol = ElectraProtocol()

    first = protocol.generate_ir_code(HVACMode.COOL, 24)
    assert first.durations() == encode_frame(0x270480002).durations()
    assert protocol.tracker.read() == HVACMode.COOL

    second = protocol.generate_ir_code(HVACMode.COOL, 24)
    assert second.durations() == encode_frame(0x070480002).durations()

    off = protocol.generate_ir_code(HVACMode.OFF, 24)
    assert off.durations() == encode_frame(0x1F0480002).durations()
    assert protocol.tracker.read() == HVACMode.OFF

    again = protocol.generate_ir_code(HVACMode.COOL, 24)
    assert again.durations() == encode_frame(0x270480002).durations()


def test_initial_mode_seeds_tracker():
    protocol = ElectraProtocol(initial_mode=HVACMode.HEAT)

    sequence = protocol.generate_ir_code(HVACMode.COOL, 24)

    assert sequence.durations() == encode_frame(0x070480002).durations()


def test_supported_modes():
    assert ElectraProtocol().supported_hvac_modes == [
        HVACMode.OFF, HVACMode.COOL, HVACMode.HEAT, HVACMode.AUTO
    ]
    assert ElectraProtocol(supports_heat=False).supported_hvac_modes == [
        HVACMode.OFF, HVACMode.COOL, HVACMode.AUTO
    ]
    assert ElectraProtocol(supports_cool=False).supported_hvac_modes == [
        HVACMode.OFF, HVACMode.HEAT, HVACMode.AUTO
    ]


def test_temperature_limits():
    protocol = ElectraProtocol()

    assert protocol.temperature_min == 16
    assert protocol.temperature_max == 30
    assert protocol.temperature_step == 1


def test_get_protocol():
    protocol = get_protocol("electra", supports_cool=False)

    assert isinstance(protocol, ElectraProtocol)
    assert HVACMode.COOL not in protocol.supported_hvac_modes

    with pytest.raises(ValueError):
        get_protocol("lg")
