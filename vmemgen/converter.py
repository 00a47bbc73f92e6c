"""
Binary image to Verilog memory (.vmem) converter.

Input:  Raw program image bytes (6502 assembler/linker output)
Output: $readmemh-style text, one byte per line, followed by the
        interrupt/reset vector block at @FFFA

Output layout:

    00                                   <- one line per image byte, in order
    ff
    0a
    @FFFA //Interrupt and Reset Vectors:
    00 90 //NMI Vector                   <- low byte, high byte
    00 04 //RESET Vector
    00 a0 //INTERRUPT Vector

The 6502 reads the low byte of a vector first, so $0400 must be written
as "00 04". Writing it the other way round still produces a well-formed
file that boots to the wrong address.
"""

from __future__ import annotations
from typing import Iterable, Iterator, List, Tuple
from dataclasses import dataclass
import logging

from .config import (
    VECTOR_TABLE_BASE,
    DEFAULT_NMI_VECTOR,
    DEFAULT_START_ADDR,
    DEFAULT_INTERRUPT_VECTOR,
    VectorConfig,
    check_address,
)
from .errors import ImageByteError

__all__ = [
    'VectorEntry',
    'VECTOR_HEADER',
    'split_address',
    'format_data_line',
    'format_vector_line',
    'vector_table',
    'vector_block',
    'iter_lines',
    'convert',
    'convert_config',
]

log = logging.getLogger(__name__)

VECTOR_HEADER = f"@{VECTOR_TABLE_BASE:04X} //Interrupt and Reset Vectors:"


@dataclass(frozen=True)
class VectorEntry:
    """One 16-bit entry of the vector block."""
    label: str
    address: int
    comment: str

    @property
    def low(self) -> int:
        return split_address(self.address)[0]

    @property
    def high(self) -> int:
        return split_address(self.address)[1]


def split_address(address: int) -> Tuple[int, int]:
    """Split a 16-bit address into (low, high) bytes."""
    check_address(address)
    return address & 0xFF, (address >> 8) & 0xFF


def format_data_line(byte: int) -> str:
    """Two lowercase hex digits, zero padded."""
    return f"{byte:02x}"


def format_vector_line(entry: VectorEntry) -> str:
    """'LL HH //comment' with the low byte first."""
    return f"{entry.low:02x} {entry.high:02x} //{entry.comment}"


def vector_table(start_address: int = DEFAULT_START_ADDR,
                 nmi: int = DEFAULT_NMI_VECTOR,
                 interrupt: int = DEFAULT_INTERRUPT_VECTOR) -> List[VectorEntry]:
    """Build the NMI, RESET, INTERRUPT entries in fetch order."""
    return [
        VectorEntry('NMI', check_address(nmi, "NMI vector"), 'NMI Vector'),
        VectorEntry('RESET', check_address(start_address, "start address"), 'RESET Vector'),
        VectorEntry('INTERRUPT', check_address(interrupt, "INTERRUPT vector"), 'INTERRUPT Vector'),
    ]


def vector_block(start_address: int = DEFAULT_START_ADDR,
                 nmi: int = DEFAULT_NMI_VECTOR,
                 interrupt: int = DEFAULT_INTERRUPT_VECTOR) -> List[str]:
    """Header line plus the three vector lines, without newlines."""
    lines = [VECTOR_HEADER]
    lines.extend(format_vector_line(e) for e in vector_table(start_address, nmi, interrupt))
    return lines


def _check_byte(value, index: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFF:
        raise ImageByteError(value, index)
    return value


def iter_lines(image: Iterable[int],
               start_address: int = DEFAULT_START_ADDR,
               nmi: int = DEFAULT_NMI_VECTOR,
               interrupt: int = DEFAULT_INTERRUPT_VECTOR) -> Iterator[str]:
    """Yield the newline-terminated output lines for image.

    image may be bytes, a bytearray, or any iterable of ints 0-255, so a
    large image can be streamed. The vector block is yielded only once the
    image is exhausted.
    """
    # Validate vectors up front so a bad address fails before any output
    block = vector_block(start_address, nmi, interrupt)

    count = 0
    if isinstance(image, (bytes, bytearray)):
        for b in image:
            yield f"{b:02x}\n"
        count = len(image)
    else:
        for index, value in enumerate(image):
            yield format_data_line(_check_byte(value, index)) + "\n"
            count += 1

    log.debug("Converted %d image bytes, RESET -> $%04X", count, start_address)

    for line in block:
        yield line + "\n"


def convert(image: Iterable[int],
            start_address: int = DEFAULT_START_ADDR,
            nmi: int = DEFAULT_NMI_VECTOR,
            interrupt: int = DEFAULT_INTERRUPT_VECTOR) -> str:
    """Convert a program image to .vmem text.

    Args:
        image: Program bytes, possibly empty.
        start_address: RESET vector target (default $0000).
        nmi: NMI vector (default $9000).
        interrupt: IRQ/BRK vector (default $A000).

    Returns:
        The complete file contents, every line newline terminated.
    """
    return ''.join(iter_lines(image, start_address, nmi, interrupt))


def convert_config(image: Iterable[int], config: VectorConfig) -> str:
    """convert() with the vector addresses taken from a VectorConfig."""
    return convert(image, config.start_address, config.nmi, config.interrupt)
