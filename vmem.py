#!/usr/bin/env python3
"""
vmem — 6502 binary to Verilog memory file converter

Usage:
    python vmem.py <input.bin> [--start-addr 0400] [--nmi 9000] [--irq A000]
                               [-o output.vmem] [--stdout] [-v | -q] [--log-file PATH]

The output name is the input name cut at its first dot plus ".vmem", in the
same directory, unless -o is given. The vector block written at the end is:

    @FFFA //Interrupt and Reset Vectors:
    00 90 //NMI Vector          ($9000)
    00 00 //RESET Vector        (--start-addr, default $0000)
    00 a0 //INTERRUPT Vector    ($A000)

Examples:
    python vmem.py test.bin                      # test.vmem, RESET $0000
    python vmem.py test.bin --start-addr 0x0400  # test.vmem, RESET $0400
    python vmem.py test.bin --stdout | less

Exit status: 0 on success, 1 when the input cannot be read or the output
cannot be written, 2 on bad command-line usage.
"""

import argparse
import logging
import os
import sys

# Allow running from project root without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from vmemgen import __version__, files
from vmemgen.addresses import parse_optional_address
from vmemgen.config import (
    DEFAULT_NMI_VECTOR,
    DEFAULT_START_ADDR,
    DEFAULT_INTERRUPT_VECTOR,
    VectorConfig,
)
from vmemgen.converter import iter_lines
from vmemgen.errors import (
    InputNotFoundError,
    LogFileError,
    NameDerivationError,
    OutputUnwritableError,
)
from vmemgen.log_setup import setup_logging

log = logging.getLogger("vmem")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vmem",
        description="Convert a 6502 binary image to a Verilog .vmem memory file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Addresses are hex: 0400, 0x0400 or $0400.",
    )
    parser.add_argument("input", help="Input binary file (e.g. yourcode.bin)")
    parser.add_argument("--start-addr", default=None, metavar="HEX",
                        help="RESET vector address (default: 0000)")
    parser.add_argument("--nmi", default=None, metavar="HEX",
                        help=f"NMI vector address (default: {DEFAULT_NMI_VECTOR:04X})")
    parser.add_argument("--irq", "--interrupt", dest="irq", default=None, metavar="HEX",
                        help=f"INTERRUPT vector address (default: {DEFAULT_INTERRUPT_VECTOR:04X})")
    destination = parser.add_mutually_exclusive_group()
    destination.add_argument("-o", "--output", default=None,
                             help="Output file (default: input name with .vmem extension)")
    destination.add_argument("--stdout", action="store_true",
                             help="Write the memory file to stdout instead of a file")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true",
                           help="Show debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true",
                           help="Only show errors")
    parser.add_argument("--log-file", default=None,
                        help="Also write a debug log to this file")
    parser.add_argument("--version", action="version",
                        version=f"vmem {__version__}")
    return parser


def _vector_address(text, default, name):
    """Parse an optional vector argument, warning and falling back on bad text."""
    value, warning = parse_optional_address(text, default, name)
    if warning:
        log.warning(warning)
    return value


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging("vmem", verbose=args.verbose, quiet=args.quiet,
                      log_file=args.log_file)
    except LogFileError as e:
        log.error("%s", e)
        return 1

    config = VectorConfig(
        start_address=_vector_address(args.start_addr, DEFAULT_START_ADDR, "start address"),
        nmi=_vector_address(args.nmi, DEFAULT_NMI_VECTOR, "NMI vector"),
        interrupt=_vector_address(args.irq, DEFAULT_INTERRUPT_VECTOR, "INTERRUPT vector"),
    )
    log.debug("Input:  %s", args.input)
    log.debug("NMI:    $%04X", config.nmi)
    log.debug("RESET:  $%04X", config.start_address)
    log.debug("IRQ:    $%04X", config.interrupt)

    try:
        if args.stdout:
            image = files.read_image(args.input)
            sys.stdout.writelines(
                iter_lines(image, config.start_address, config.nmi, config.interrupt))
            sys.stdout.flush()
            return 0

        out_path = files.convert_file(args.input, args.output, config=config)

    except InputNotFoundError as e:
        log.error("%s", e)
        return 1
    except NameDerivationError as e:
        log.error("Error: %s", e)
        return 1
    except OutputUnwritableError as e:
        log.error("%s", e)
        return 1

    print(f"Finished writing {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
