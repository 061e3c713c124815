"""
Ternary cubes over a fixed number of input variables.

Every variable i owns two bits of an int mask:
  bit 2*i   -> the variable may be 0
  bit 2*i+1 -> the variable may be 1
so a fixed 0 is 0b01, a fixed 1 is 0b10 and a don't care is 0b11.
The pair 0b00 is never valid.  With this encoding "a covers b" is a
single subset test on the masks, whatever the number of inputs.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Union

_CHAR_TO_PAIR = {'0': 0b01, '1': 0b10, '-': 0b11}
_PAIR_TO_CHAR = {0b01: '0', 0b10: '1', 0b11: '-'}


def _low_bits(num_inputs: int) -> int:
    # one bit per variable, at position 2*i
    return ((1 << (2 * num_inputs)) - 1) // 3


@dataclass(frozen=True)
class Cube:
    num_inputs: int
    mask: int

    def __post_init__(self):
        if self.num_inputs < 0:
            raise ValueError(f"num_inputs must be >= 0, got {self.num_inputs}")
        if self.mask >> (2 * self.num_inputs):
            raise ValueError(f"mask {self.mask:#x} has bits beyond {self.num_inputs} inputs")
        low = _low_bits(self.num_inputs)
        if (self.mask | (self.mask >> 1)) & low != low:
            raise ValueError(f"mask {self.mask:#x} leaves a variable with no allowed value")

    @classmethod
    def from_string(cls, text: str) -> 'Cube':
        """Build a cube from '0'/'1'/'-' characters, variable 0 first."""
        mask = 0
        for i, ch in enumerate(text):
            if ch not in _CHAR_TO_PAIR:
                raise ValueError(f"invalid cube character {ch!r} in {text!r}")
            mask |= _CHAR_TO_PAIR[ch] << (2 * i)
        return cls(len(text), mask)

    @classmethod
    def from_bits(cls, bits: Union[str, Iterable[int]]) -> 'Cube':
        """Fully specified cube from a row of 0/1 values."""
        chars = []
        for b in bits:
            if b in (0, '0'):
                chars.append('0')
            elif b in (1, '1'):
                chars.append('1')
            else:
                raise ValueError(f"input value must be 0 or 1, got {b!r}")
        return cls.from_string(''.join(chars))

    @classmethod
    def universe(cls, num_inputs: int) -> 'Cube':
        """The cube with every variable don't care."""
        return cls(num_inputs, (1 << (2 * num_inputs)) - 1)

    def value(self, index: int) -> Optional[int]:
        """0 or 1 for a fixed variable, None for don't care."""
        if not 0 <= index < self.num_inputs:
            raise IndexError(f"variable index {index} out of range")
        pair = (self.mask >> (2 * index)) & 0b11
        if pair == 0b11:
            return None
        return 1 if pair == 0b10 else 0

    @property
    def weight(self) -> int:
        return weight(self)

    @property
    def is_fully_specified(self) -> bool:
        return weight(self) == 0

    def covers(self, other: 'Cube') -> bool:
        return covers(self, other)

    def __str__(self) -> str:
        return ''.join(_PAIR_TO_CHAR[(self.mask >> (2 * i)) & 0b11] for i in range(self.num_inputs))


def covers(a: Cube, b: Cube) -> bool:
    """True iff every input allowed by `b` is also allowed by `a`."""
    return a.mask & b.mask == b.mask


def weight(a: Cube) -> int:
    """Number of don't-care variables."""
    return bin(a.mask & (a.mask >> 1) & _low_bits(a.num_inputs)).count('1')
