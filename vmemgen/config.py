"""
Vector table configuration.

The 6502 fetches its three hardware vectors from the top of the address
space, low byte first:

    $FFFA-$FFFB  NMI
    $FFFC-$FFFD  RESET
    $FFFE-$FFFF  IRQ/BRK  (called INTERRUPT in the output file)

NMI and INTERRUPT default to fixed handler addresses; RESET follows the
start address given on the command line.
"""

from __future__ import annotations
from dataclasses import dataclass

from .errors import AddressRangeError

__all__ = [
    'VECTOR_TABLE_BASE',
    'DEFAULT_NMI_VECTOR',
    'DEFAULT_START_ADDR',
    'DEFAULT_INTERRUPT_VECTOR',
    'OUTPUT_EXTENSION',
    'ADDRESS_MAX',
    'VectorConfig',
    'check_address',
]

ADDRESS_MAX = 0xFFFF

VECTOR_TABLE_BASE = 0xFFFA
DEFAULT_NMI_VECTOR = 0x9000
DEFAULT_START_ADDR = 0x0000
DEFAULT_INTERRUPT_VECTOR = 0xA000

OUTPUT_EXTENSION = ".vmem"


def check_address(address, name: str = "address") -> int:
    """Return address unchanged if it is an int in 0..0xFFFF, else raise."""
    # bool is an int subclass but never a meaningful address
    if isinstance(address, bool) or not isinstance(address, int):
        raise AddressRangeError(address, name)
    if not 0 <= address <= ADDRESS_MAX:
        raise AddressRangeError(address, name)
    return address


@dataclass(frozen=True)
class VectorConfig:
    """The three vector addresses written after the image data."""
    start_address: int = DEFAULT_START_ADDR
    nmi: int = DEFAULT_NMI_VECTOR
    interrupt: int = DEFAULT_INTERRUPT_VECTOR

    def __post_init__(self):
        check_address(self.start_address, "start address")
        check_address(self.nmi, "NMI vector")
        check_address(self.interrupt, "INTERRUPT vector")
