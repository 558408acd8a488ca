"""Electra frame to IR pulse timings."""
import logging
from enum import Enum
from typing import NamedTuple

from .electra_frame import FRAME_BITS

_LOGGER = logging.getLogger(__name__)

# Electra IR timing parameters (microseconds)
TIME_UNIT = 1000
HEADER_MARK = 3 * TIME_UNIT
HEADER_SPACE = 3 * TIME_UNIT
FOOTER_MARK = 4 * TIME_UNIT
REPEAT_COUNT = 3
BIT_COUNT = FRAME_BITS
CARRIER_FREQUENCY = 38000


class PulseType(Enum):
    MARK = "mark"
    SPACE = "space"


class Pulse(NamedTuple):
    type: PulseType
    duration: int


class PulseSequence:
    """Ordered mark/space pulses with the carrier they are modulated on."""

    def __init__(self, pulses, carrier_frequency=CARRIER_FREQUENCY, repeat_count=REPEAT_COUNT):
        self.pulses = list(pulses)
        self.carrier_frequency = carrier_frequency
        self.repeat_count = repeat_count

    def __iter__(self):
        return iter(self.pulses)

    def __len__(self):
        return len(self.pulses)

    def __getitem__(self, index):
        return self.pulses[index]

    def durations(self):
        """Raw timings, alternating mark and space, starting with a mark."""
        return [pulse.duration for pulse in self.pulses]

    def total_duration(self):
        return sum(pulse.duration for pulse in self.pulses)

    def __repr__(self):
        return (
            f"PulseSequence({len(self.pulses)} pulses, "
            f"{self.carrier_frequency} Hz, x{self.repeat_count})"
        )


def frame_bits(frame):
    """Frame bits, most significant first."""
    return [(frame >> bit_position) & 1 for bit_position in range(BIT_COUNT - 1, -1, -1)]


def encode_bits(bits, lead=HEADER_SPACE):
    """Encode bits into coalesced mark/space pulses.

    Every bit spans two time units: a one is a space then a mark, a zero is a
    mark then a space. The first half of a bit always merges with the pulse
    still pending from the previous bit when they share a type, so no two
    consecutive pulses have the same type. ``lead`` is the space pending
    before the first bit, i.e. the header space.
    """
    pulses = []
    pending = lead
    next_type = PulseType.SPACE

    for bit in bits:
        if next_type == PulseType.SPACE:
            if bit:
                pulses.append(Pulse(PulseType.SPACE, pending + TIME_UNIT))
                next_type = PulseType.MARK
            else:
                pulses.append(Pulse(PulseType.SPACE, pending))
                pulses.append(Pulse(PulseType.MARK, TIME_UNIT))
        else:
            if bit:
                pulses.append(Pulse(PulseType.MARK, pending))
                pulses.append(Pulse(PulseType.SPACE, TIME_UNIT))
            else:
                pulses.append(Pulse(PulseType.MARK, pending + TIME_UNIT))
                next_type = PulseType.SPACE
        pending = TIME_UNIT

    # Frames end with a zero bit, so this closes on a space
    pulses.append(Pulse(next_type, pending))
    return pulses


def encode_frame(frame, repeat=REPEAT_COUNT):
    """Convert a 34-bit frame into the full repeated transmission."""
    bits = frame_bits(frame)
    pulses = []

    for _ in range(repeat):
        # Header
        pulses.append(Pulse(PulseType.MARK, HEADER_MARK))
        pulses.extend(encode_bits(bits))

    # Footer
    pulses.append(Pulse(PulseType.MARK, FOOTER_MARK))

    sequence = PulseSequence(pulses, repeat_count=repeat)
    _LOGGER.debug(f"Generated {len(sequence)} pulses for frame 0x{frame:09X}")
    return sequence
