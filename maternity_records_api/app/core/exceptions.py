"""
Error taxonomy shared by the service layer and both HTTP surfaces.

Services raise these exceptions; ``main.register_exception_handlers``
turns them into responses.  Each class carries its HTTP status and a
short machine‑readable code.  ``StoreError`` never exposes its detail
to clients; the driver message is only logged.
"""


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = 500
    code = "internal_error"
    default_detail = "Internal server error."
    expose_detail = True

    def __init__(self, detail=None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    @property
    def public_detail(self) -> str:
        return self.detail if self.expose_detail else self.default_detail


class ValidationError(AppError):
    """The request is missing required data (e.g. the personal number)."""

    status_code = 400
    code = "validation_error"
    default_detail = "Invalid request."


class NotFoundError(AppError):
    status_code = 404
    code = "not_found"
    default_detail = "Not found."


class UnknownServiceError(NotFoundError):
    """The service (collection) name is not part of the catalog."""

    code = "unknown_service"
    default_detail = "Service not found."

    def __init__(self, service_name, detail=None):
        self.service_name = service_name
        super().__init__(detail)


class StoreError(AppError):
    """A document store operation failed.  Never retried."""

    code = "store_error"
    default_detail = "Error accessing the document store."
    expose_detail = False


class ConfigurationError(Exception):
    """Startup configuration is missing or unreadable (e.g. credentials)."""
