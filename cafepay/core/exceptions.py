# cafepay/core/exceptions.py
"""
Exception types raised by the payroll engine.

    CafepayError
    +-- ShiftValidationError
    |   +-- InvalidTimeError      start or end missing / unparseable
    |   +-- ShiftOrderError       end <= start
    |   +-- ShiftDurationError    longer than 24 hours
    +-- StorageError              data file unreadable or invalid
    +-- PayrollRunError           period run failed and was rolled back

Each class carries a machine-readable ``code``.
"""


class CafepayError(Exception):
    """Base class for all engine errors."""

    code: str = "CAFEPAY_ERROR"


class ShiftValidationError(CafepayError):
    """A shift's start/end pair cannot be used for pay computation."""

    code = "INVALID_SHIFT"


class InvalidTimeError(ShiftValidationError):
    code = "INVALID_TIME"

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}: {value!r}")


class ShiftOrderError(ShiftValidationError):
    code = "SHIFT_ORDER"

    def __init__(self, start, end):
        self.start = start
        self.end = end
        super().__init__(f"End time must be after start time ({start} -> {end})")


class ShiftDurationError(ShiftValidationError):
    code = "SHIFT_DURATION"

    def __init__(self, hours: float, max_hours: int):
        self.hours = hours
        self.max_hours = max_hours
        super().__init__(f"Shift cannot exceed {max_hours} hours (got {hours:.2f})")


class StorageError(CafepayError):
    """General error type for problems loading data files."""

    code = "STORAGE_ERROR"


class PayrollRunError(CafepayError):
    """A payroll period run failed; nothing from the run was kept."""

    code = "PAYROLL_RUN_FAILED"

    def __init__(self, period_id, employee_id, cause: Exception):
        self.period_id = period_id
        self.employee_id = employee_id
        super().__init__(
            f"Payroll run for period {period_id} failed at employee {employee_id}: {cause}"
        )
