"""
FastAPI application - products API entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os
from typing import Any, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from eyewear_catalog.api.products_handler import ProductsHandler
from eyewear_catalog.database.postgres_real import ProductStore
from eyewear_catalog.error_handler import ErrorHandler
from eyewear_catalog.utils.config_loader import CatalogConfig, load_catalog_config

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter()
error_handler = ErrorHandler()

BODY_METHODS = {"POST", "PUT", "PATCH"}


def get_products_handler(request: Request) -> ProductsHandler:
    """The app's handler; built here only when create_app had no database URL to build it from."""
    handler: Optional[ProductsHandler] = getattr(request.app.state, "products_handler", None)
    if handler is None:
        config: CatalogConfig = request.app.state.config
        handler = ProductsHandler(ProductStore(config.server.database_url), error_handler)
        request.app.state.products_handler = handler
    return handler


async def _read_json_body(request: Request) -> Any:
    if request.method not in BODY_METHODS:
        return None
    raw = await request.body()
    if not raw.strip():
        return None
    return await request.json()


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.api_route("/products", methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH", "HEAD"])
async def products(request: Request):
    try:
        handler = get_products_handler(request)
        body = await _read_json_body(request)
    except ValueError as exc:
        return JSONResponse(status_code=500, content=error_handler.internal_error(exc))

    result = await run_in_threadpool(handler.handle, request.method, dict(request.query_params), body)
    return JSONResponse(status_code=result.status_code, content=result.body)


def create_app(config: Optional[CatalogConfig] = None, store: Optional[ProductStore] = None) -> FastAPI:
    app = FastAPI(
        title="Eyewear Catalog Products API",
        description="CRUD over the eyewear product catalog with on-demand schema provisioning",
        version="1.0.0",
    )
    app.state.config = config or load_catalog_config()
    if store is None and app.state.config.server.database_url:
        store = ProductStore(app.state.config.server.database_url)
    if store is not None:
        app.state.products_handler = ProductsHandler(store, error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )
    app.include_router(router, prefix="/api")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("PORT", app.state.config.server.port))
    uvicorn.run("eyewear_catalog.api.main:app", host="0.0.0.0", port=port, log_level="info")
