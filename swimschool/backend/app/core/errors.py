"""Error kinds raised by the scheduling and booking services."""


class SchedulingError(Exception):
    status_code = 500
    kind = "scheduling_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(SchedulingError):
    """Malformed input, out-of-range values or unsupported enum values."""

    status_code = 400
    kind = "validation_error"


class FormatError(ValidationError):
    """A time string that is not zero-padded ``HH:MM``."""

    kind = "format_error"


class NotFoundError(SchedulingError):
    status_code = 404
    kind = "not_found"


class CapacityError(SchedulingError):
    """The slot filled up before the seat could be claimed."""

    status_code = 409
    kind = "capacity_error"


class ConflictError(SchedulingError):
    status_code = 409
    kind = "conflict"


__all__ = [
    "SchedulingError",
    "ValidationError",
    "FormatError",
    "NotFoundError",
    "CapacityError",
    "ConflictError",
]
