"""Error taxonomy for the catalog client and helpers for the products API."""
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base class for every catalog failure."""


class CatalogApiError(CatalogError):
    """A remote call did not produce a usable payload."""


class NoBackendConfigured(CatalogApiError):
    def __init__(self, message: str = "No API URL configured - using local backup") -> None:
        super().__init__(message)


class NetworkError(CatalogApiError):
    """No HTTP response was obtained (DNS, connection refused, reset, ...)."""


class RemoteError(CatalogApiError):
    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class EnvelopeError(CatalogApiError):
    def __init__(self, message: str, *, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


class NotFound(CatalogError):
    def __init__(self, product_id: Any) -> None:
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = product_id


class MethodNotAllowed(CatalogError):
    def __init__(self, method: str) -> None:
        super().__init__(f"Method {method} not allowed")
        self.method = method


class PersistenceFailure(CatalogError):
    """The local backup could not be read or written. Never fatal."""


class ProductOperationError(CatalogError):
    def __init__(self, action: str, cause: Exception) -> None:
        super().__init__(f"Failed to {action} product: {cause}")
        self.action = action
        self.cause = cause


class ErrorHandler:
    def internal_error(self, exc: Exception, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        logger.error("Unhandled exception in products API: %s (context=%s)", exc, context or {}, exc_info=exc)
        return {
            "success": False,
            "error": "Internal server error",
            "message": str(exc),
        }

    def not_found(self, message: Optional[str] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {"success": False, "error": "Product not found"}
        if message:
            body["message"] = message
        return body

    def bad_request(self, error: str) -> Dict[str, Any]:
        return {"success": False, "error": error}

    def method_not_allowed(self, exc: MethodNotAllowed) -> Dict[str, Any]:
        logger.info("Rejected %s request on products resource", exc.method)
        return {"success": False, "error": "Method not allowed"}
