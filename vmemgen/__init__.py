"""
vmem — 6502 binary image to Verilog memory file converter
==========================================================
Turns the raw binary output of a 6502 assembler/linker into a .vmem text
file that $readmemh-based simulations can load, with the NMI / RESET /
INTERRUPT vectors appended at @FFFA.

Pipeline:
    ┌──────────┐    ┌────────────┐    ┌───────────┐    ┌────────────┐
    │ .bin     │───>│ read_image │───>│ converter │───>│ write_vmem │───> .vmem
    │ (bytes)  │    │  (files)   │    │  (text)   │    │  (files)   │
    └──────────┘    └────────────┘    └───────────┘    └────────────┘

    - converter.py: pure byte-to-line conversion and vector block
    - addresses.py: hex address arguments (0400, 0x0400, $0400)
    - paths.py:     test.bin -> test.vmem naming
    - files.py:     reading, writing, partial-output cleanup
    - config.py:    vector table constants and VectorConfig
"""

__version__ = "1.0.0"

from .config import (
    VECTOR_TABLE_BASE,
    DEFAULT_NMI_VECTOR,
    DEFAULT_START_ADDR,
    DEFAULT_INTERRUPT_VECTOR,
    OUTPUT_EXTENSION,
    VectorConfig,
)
from .errors import *
from .converter import (
    VectorEntry,
    split_address,
    vector_table,
    vector_block,
    iter_lines,
    convert,
    convert_config,
)
from .addresses import parse_address, parse_optional_address
from .paths import derive_output_path
from .files import read_image, write_vmem, convert_file
