class SchedulingError(Exception):
    """Base for expected booking outcomes the caller can act on."""

    code = "scheduling_error"


class NotAProviderError(SchedulingError):
    code = "not_a_provider"


class SelfBookingNotAllowedError(SchedulingError):
    code = "self_booking_not_allowed"


class PastDateError(SchedulingError):
    code = "past_date"


class SlotUnavailableError(SchedulingError):
    code = "slot_unavailable"


class BookingNotFoundError(SchedulingError):
    code = "not_found"


class NotOwnerError(SchedulingError):
    code = "not_owner"


class TooLateToCancelError(SchedulingError):
    code = "too_late_to_cancel"


class BookingAlreadyCanceledError(SchedulingError):
    code = "already_canceled"


class StorageError(RuntimeError):
    """Raised when the booking store fails (I/O errors, corrupted data)."""

    code = "storage_error"
