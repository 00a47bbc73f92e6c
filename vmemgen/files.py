"""
File I/O around the pure converter.

read_image() and write_vmem() turn OS errors into the vmem error types so
the CLI has one place to report them. convert_file() is the whole pipeline:
the output name is derived before anything is written, and a failed write
removes the partial file.
"""

from __future__ import annotations
from typing import Iterable, Optional
from pathlib import Path
import logging
import os

from .config import VectorConfig
from .converter import iter_lines
from .errors import InputNotFoundError, OutputUnwritableError
from .paths import derive_output_path

__all__ = ['read_image', 'write_vmem', 'convert_file']

log = logging.getLogger(__name__)


def read_image(path) -> bytes:
    """Read the whole program image."""
    p = Path(path)
    if not p.is_file():
        raise InputNotFoundError(path)
    try:
        with open(p, "rb") as f:
            data = f.read()
    except OSError as e:
        raise InputNotFoundError(path, e.strerror or str(e)) from e
    log.debug("Read %d bytes from %s", len(data), p)
    return data


def write_vmem(path, lines: Iterable[str]) -> int:
    """Write lines to path as ASCII text, returning the line count.

    Nothing is left behind on failure.
    """
    p = Path(path)
    try:
        f = open(p, "w", encoding="ascii", newline="\n")
    except OSError as e:
        raise OutputUnwritableError(path, e.strerror or str(e)) from e

    count = 0
    try:
        with f:
            for line in lines:
                f.write(line)
                count += 1
    except OSError as e:
        _remove_partial(p)
        raise OutputUnwritableError(path, e.strerror or str(e)) from e
    except BaseException:
        _remove_partial(p)
        raise

    log.debug("Wrote %d lines to %s", count, p)
    return count


def _remove_partial(p: Path):
    try:
        os.remove(p)
    except OSError as e:
        log.warning("Could not remove partial output %s: %s", p, e)


def convert_file(input_path, output_path=None, *,
                 config: Optional[VectorConfig] = None) -> Path:
    """Convert input_path to a .vmem file and return the output path.

    output_path defaults to the input name with a .vmem extension.
    """
    config = config or VectorConfig()
    out = Path(output_path) if output_path is not None else derive_output_path(input_path)
    image = read_image(input_path)
    write_vmem(out, iter_lines(image, config.start_address, config.nmi, config.interrupt))
    return out
