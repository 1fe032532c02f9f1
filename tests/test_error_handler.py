from eyewear_catalog.error_handler import (
    CatalogApiError,
    ErrorHandler,
    MethodNotAllowed,
    NetworkError,
    NoBackendConfigured,
    NotFound,
    ProductOperationError,
    RemoteError,
)


def test_internal_error_returns_payload():
    eh = ErrorHandler()
    out = eh.internal_error(Exception("boom"), context={"k": "v"})
    assert out["success"] is False
    assert out["error"] == "Internal server error"
    assert "boom" in out["message"]


def test_not_found_and_method_payloads():
    eh = ErrorHandler()
    assert eh.not_found() == {"success": False, "error": "Product not found"}
    assert eh.not_found("Product not found")["message"] == "Product not found"
    assert eh.method_not_allowed(MethodNotAllowed("PATCH"))["error"] == "Method not allowed"


def test_remote_failures_share_a_base():
    assert issubclass(NoBackendConfigured, CatalogApiError)
    assert issubclass(NetworkError, CatalogApiError)
    assert issubclass(RemoteError, CatalogApiError)
    assert not issubclass(NotFound, CatalogApiError)


def test_operation_error_keeps_cause():
    cause = RemoteError("HTTP 503: Service Unavailable", 503)
    err = ProductOperationError("update", cause)
    assert str(err) == "Failed to update product: HTTP 503: Service Unavailable"
    assert err.cause is cause
    assert NotFound(7).product_id == 7
