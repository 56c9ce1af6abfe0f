"""Custom exceptions for deltadiff."""


class DeltaDiffError(Exception):
    """Base exception for all deltadiff errors."""

    pass


class DeltaFormatError(DeltaDiffError):
    """Raised when a delta file is malformed or inconsistent."""

    def __init__(self, message="", path=None, line_number=None):
        if path is not None and line_number is not None:
            message = f"{path}:{line_number}: {message}"
        elif path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
        self.path = path
        self.line_number = line_number


class ChainConsistencyError(DeltaDiffError):
    """Raised when the selected chains break the sweep's ordering assumptions."""

    pass
