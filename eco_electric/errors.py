"""Domain errors and their HTTP rendering."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500
    detail = "Internal error"

    def __init__(self, detail=None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class MissingCredential(ServiceError):
    status_code = 401
    detail = "Missing bearer token"


class InvalidOrExpiredToken(ServiceError):
    status_code = 403
    detail = "Invalid or expired token"


class IdentityMismatch(ServiceError):
    status_code = 403
    detail = "Forbidden access"


class NotAdmin(ServiceError):
    status_code = 403
    detail = "Admin access required"


class NotFound(ServiceError):
    status_code = 404

    def __init__(self, resource: str, identifier):
        super().__init__(f"{resource} not found: {identifier}")
        self.resource = resource
        self.identifier = identifier


class InvalidInput(ServiceError):
    status_code = 422
    detail = "Invalid request"


class InvalidAmount(ServiceError):
    status_code = 400
    detail = "Price must be a positive amount"


class PaymentProviderError(ServiceError):
    status_code = 502
    detail = "Payment provider rejected the request"


async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
