"""
Output file naming.

The .vmem file lands next to the input and takes the input's name cut at
its first dot:

    test.bin          -> test.vmem
    build/prog.v2.bin -> build/prog.vmem
    rom               -> rom.vmem
    .boot.bin         -> .boot.vmem    (leading dots belong to the name)
"""

from __future__ import annotations
from pathlib import Path
import os

from .config import OUTPUT_EXTENSION
from .errors import NameDerivationError

__all__ = ['derive_output_path']


def derive_output_path(input_path, extension: str = OUTPUT_EXTENSION) -> Path:
    """Return the .vmem path for input_path."""
    raw = os.fspath(input_path)
    if not raw:
        raise NameDerivationError(raw, "empty path")
    if raw.endswith(("/", os.sep)) or (os.altsep and raw.endswith(os.altsep)):
        raise NameDerivationError(raw, "path names a directory")

    path = Path(raw)
    name = path.name
    if not name or name in (".", ".."):
        raise NameDerivationError(raw, "no file name")

    body = name.lstrip(".")
    if not body:
        raise NameDerivationError(raw, "file name has no stem")
    leading = name[:len(name) - len(body)]
    stem = leading + body.split(".", 1)[0]

    return path.with_name(stem + extension)
