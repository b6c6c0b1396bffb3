"""Exceptions raised by the Hough detectors."""


class InvalidParameterError(ValueError):
    """Raised when a detector is called with malformed parameters.

    Always raised before any accumulator is allocated, so callers never
    see partial results.
    """

    def __init__(self, name: str, value, reason: str):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {name}={value!r}: {reason}")
