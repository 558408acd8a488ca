from custom_components.electra_ir_climate.climate_protocols.electra_pulses import (
    BIT_COUNT,
    CARRIER_FREQUENCY,
    FOOTER_MARK,
    HEADER_MARK,
    HEADER_SPACE,
    REPEAT_COUNT,
    TIME_UNIT,
    Pulse,
    PulseType,
    encode_bits,
    encode_frame,
    frame_bits,
)

MARK = PulseType.MARK
SPACE = PulseType.SPACE

COOL_24_FROM_OFF = 0x270480002


def _bits_from_pulses(pulses):
    """Read bits back from a single frame body (header space first)."""
    slots = []
    for pulse in pulses:
        slots.extend([pulse.type] * (pulse.duration // TIME_UNIT))
    slots = slots[HEADER_SPACE // TIME_UNIT:]
    return [1 if slots[i] == SPACE else 0 for i in range(0, len(slots), 2)]


def test_one_then_zero():
    assert encode_bits([1, 0]) == [
        Pulse(SPACE, 4000),
        Pulse(MARK, 2000),
        Pulse(SPACE, 1000),
    ]


def test_zeros():
    assert encode_bits([0, 0]) == [
        Pulse(SPACE, 3000),
        Pulse(MARK, 1000),
        Pulse(SPACE, 1000),
        Pulse(MARK, 1000),
        Pulse(SPACE, 1000),
    ]


def test_ones_close_on_mark():
    assert encode_bits([1, 1]) == [
        Pulse(SPACE, 4000),
        Pulse(MARK, 1000),
        Pulse(SPACE, 1000),
        Pulse(MARK, 1000),
    ]


def test_zero_one_zero():
    assert encode_bits([0, 1, 0]) == [
        Pulse(SPACE, 3000),
        Pulse(MARK, 1000),
        Pulse(SPACE, 2000),
        Pulse(MARK, 2000),
        Pulse(SPACE, 1000),
    ]


def test_custom_lead():
    assert encode_bits([1, 0], lead=0) == [
        Pulse(SPACE, 1000),
        Pulse(MARK, 2000),
        Pulse(SPACE, 1000),
    ]


def test_frame_bits_msb_first():
    bits = frame_bits(COOL_24_FROM_OFF)

    assert len(bits) == BIT_COUNT
    assert bits[:4] == [1, 0, 0, 1]
    assert bits[-2:] == [1, 0]


def test_frame_body_alternates_and_keeps_timing():
    body = encode_bits(frame_bits(COOL_24_FROM_OFF))

    assert body[0].type == SPACE
    assert body[-1].type == SPACE
    for previous, current in zip(body, body[1:]):
        assert previous.type != current.type
    for pulse in body:
        assert pulse.duration > 0
        assert pulse.duration % TIME_UNIT == 0
    assert sum(pulse.duration for pulse in body) == HEADER_SPACE + BIT_COUNT * 2 * TIME_UNIT
    assert _bits_from_pulses(body) == frame_bits(COOL_24_FROM_OFF)


def test_encode_frame_repeats_with_header_and_footer():
    sequence = encode_frame(COOL_24_FROM_OFF)
    body = encode_bits(frame_bits(COOL_24_FROM_OFF))

    assert sequence.carrier_frequency == CARRIER_FREQUENCY == 38000
    assert sequence.repeat_count == REPEAT_COUNT == 3
    assert len(sequence) == REPEAT_COUNT * (len(body) + 1) + 1

    for repeat in range(REPEAT_COUNT):
        start = repeat * (len(body) + 1)
        assert sequence[start] == Pulse(MARK, HEADER_MARK)
        assert sequence.pulses[start + 1:start + 1 + len(body)] == body

    assert sequence[-1] == Pulse(MARK, FOOTER_MARK)
    assert [p for p in sequence if p == Pulse(MARK, HEADER_MARK)] == [Pulse(MARK, HEADER_MARK)] * REPEAT_COUNT


def test_sequence_durations_alternate():
    sequence = encode_frame(0x1F0480002)
    types = [pulse.type for pulse in sequence]

    assert types[0] == MARK
    assert types[-1] == MARK
    assert all(a != b for a, b in zip(types, types[1:]))
    assert sequence.durations() == [pulse.duration for pulse in sequence]
    assert sequence.total_duration() == (
        REPEAT_COUNT * (HEADER_MARK + HEADER_SPACE + BIT_COUNT * 2 * TIME_UNIT) + FOOTER_MARK
    )
