"""
Error types raised by the reticle generator.

Parsing errors are raised eagerly and abort whatever batch is running.
Degenerate geometry is never an error.
"""


class ReticleError(Exception):
    """Base class for all reticle generator errors."""


class InvalidHexColor(ReticleError, ValueError):
    """A color token is not exactly six hexadecimal digits."""

    def __init__(self, raw, line_number=None):
        self.raw = raw
        self.line_number = line_number
        if line_number is None:
            message = f"Invalid hex color: {raw}"
        else:
            message = f"Invalid hex color on row {line_number}: {raw}"
        super().__init__(message)


class MalformedRow(ReticleError, ValueError):
    """A color-pair row has no comma separator."""

    def __init__(self, line_number, line):
        self.line_number = line_number
        self.line = line
        super().__init__(f"Invalid row {line_number}: {line}")


class IOFailure(ReticleError, OSError):
    """Reading or writing an artifact, CSV or profile failed."""

    def __init__(self, action, path, cause=None):
        self.action = action
        self.path = str(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{action} failed for {self.path}{detail}")


class ProfileFormatError(ReticleError, ValueError):
    """A stored profile could not be parsed into a configuration."""

    def __init__(self, path, cause):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Parse failed for {self.path}: {cause}")
