"""
Errors raised by the analytics engine.
"""


class SnapshotValidationError(ValueError):
    """
    A snapshot record (or selector) has an invalid shape.

    Raised instead of coercing bad input to a default. Subclasses ValueError
    so pydantic validators report it as a regular ValidationError.
    """

    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message if not field else f"{field}: {message}")
