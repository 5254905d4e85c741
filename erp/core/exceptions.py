"""
Error taxonomy shared by the data access layer and the routers.

- NotFoundError: an identity lookup (student / faculty by user id) found nothing.
- RemoteCallError: a Supabase call failed. Never retried.
- ValidationFailure: form-level checks, raised before any remote call.
- PermissionDenied: the caller may not touch this row.
"""


class ERPError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ERPError):
    status_code = 404


class RemoteCallError(ERPError):
    status_code = 502


class ValidationFailure(ERPError):
    status_code = 422


class PermissionDenied(ERPError):
    status_code = 403
