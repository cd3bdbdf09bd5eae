"""
Error taxonomy for the clinic store.

Route handlers map these to HTTP statuses; direct callers catch them.
"""


class ClinicError(Exception):
    """Base class for every error raised by the clinic store."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ClinicError):
    """Caller input failed a required-field or type check. Nothing was written."""

    status_code = 400


class NotFoundError(ClinicError):
    """A referenced patient, doctor, appointment or update does not exist."""

    status_code = 404


class InternalError(ClinicError):
    """Unexpected failure inside the store. Indicates a bug, not a usage error."""

    status_code = 500
