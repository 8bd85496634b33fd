# salon_booking/errors.py


class SalonError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(SalonError):
    status_code = 404


class ServiceUnavailable(NotFound):
    """The service exists but has been deactivated, so it cannot be booked."""


class Conflict(SalonError):
    status_code = 409


class InvalidTransition(Conflict):
    """Booking is CANCELLED or COMPLETED and cannot change any more."""


class InvalidInput(SalonError):
    status_code = 422
