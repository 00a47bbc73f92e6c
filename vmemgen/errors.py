"""
Exception hierarchy for the vmem converter.

Every failure the command line can report has its own class so the CLI can
print a distinct message for each. The two range errors are also ValueErrors
because they mean the caller passed a badly typed value into the pure
converter.
"""

__all__ = [
    'VmemError',
    'InputNotFoundError',
    'AddressParseError',
    'OutputUnwritableError',
    'NameDerivationError',
    'AddressRangeError',
    'ImageByteError',
    'LogFileError',
]


class VmemError(Exception):
    """Base class for all vmem errors."""


class InputNotFoundError(VmemError):
    """Raised when the input image cannot be opened for reading."""
    def __init__(self, path, reason: str = ""):
        self.path = path
        self.reason = reason
        msg = f"no such file as: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class AddressParseError(VmemError):
    """Raised when address text is not a valid 16-bit hex value."""
    def __init__(self, text: str, reason: str = "not a hex address"):
        self.text = text
        self.reason = reason
        super().__init__(f"Unable to convert address {text!r}: {reason}")


class OutputUnwritableError(VmemError):
    """Raised when the .vmem file cannot be opened or written."""
    def __init__(self, path, reason: str = ""):
        self.path = path
        self.reason = reason
        msg = f"unable to open output file for writing: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class NameDerivationError(VmemError):
    """Raised when no output file name can be built from the input path."""
    def __init__(self, path, reason: str = ""):
        self.path = path
        self.reason = reason
        msg = f"unable to generate output file name from {str(path)!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class AddressRangeError(VmemError, ValueError):
    """Raised when an integer address does not fit in 16 bits."""
    def __init__(self, address, name: str = "address"):
        self.address = address
        self.name = name
        super().__init__(f"{name} out of range: {address!r} (expected 0x0000-0xFFFF)")


class ImageByteError(VmemError, ValueError):
    """Raised when an image element is not a byte value."""
    def __init__(self, value, index: int):
        self.value = value
        self.index = index
        super().__init__(f"image element {index} is not a byte: {value!r}")


class LogFileError(VmemError):
    """Raised when the --log-file target cannot be created or opened."""
    def __init__(self, path, reason: str = ""):
        self.path = path
        self.reason = reason
        msg = f"unable to open log file: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)
