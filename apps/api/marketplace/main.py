import logging
import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse, Response

from marketplace.config import allowed_origins, ensure_secure_runtime_settings, settings
from marketplace.db.base import Base
from marketplace.db.session import engine
from marketplace.observability import configure_logging, log_event, set_request_id
from marketplace.realtime.routes import router as realtime_router
from marketplace.routers.brands import router as brands_router
from marketplace.routers.categories import public_router as public_categories_router
from marketplace.routers.categories import router as categories_router
from marketplace.routers.counts import router as counts_router
from marketplace.routers.health import router as health_router
from marketplace.routers.logistics import router as logistics_router
from marketplace.routers.units import router as units_router
from marketplace.routers.upload import router as upload_router


@asynccontextmanager
async def lifespan(_app: FastAPI):
    import marketplace.models  # noqa: F401 (register all SQLAlchemy models)

    configure_logging()
    ensure_secure_runtime_settings()
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="B2B marketplace admin, logistics, upload and auction relay API",
    lifespan=lifespan,
)


def custom_openapi():
    """
    Adds HTTP Bearer (JWT) auth to the OpenAPI schema so Swagger UI shows an
    'Authorize' button and sends the Authorization: Bearer <token> header.
    """
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    components = openapi_schema.setdefault("components", {})
    security_schemes = components.setdefault("securitySchemes", {})
    security_schemes["BearerAuth"] = {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
    }
    openapi_schema["security"] = [{"BearerAuth": []}]

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.middleware("http")
async def request_context_middleware(request: Request, call_next) -> Response:
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    set_request_id(request_id)

    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = round((time.perf_counter() - start) * 1000, 2)

    response.headers["X-Request-ID"] = request_id
    log_event(
        "http_request",
        detail={
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "elapsed_ms": elapsed_ms,
        },
        level=logging.INFO if response.status_code < 500 else logging.ERROR,
    )
    return response


app.include_router(health_router)
app.include_router(brands_router, prefix=settings.api_prefix)
app.include_router(categories_router, prefix=settings.api_prefix)
app.include_router(units_router, prefix=settings.api_prefix)
app.include_router(counts_router, prefix=settings.api_prefix)
app.include_router(public_categories_router, prefix=settings.api_prefix)
app.include_router(logistics_router, prefix=settings.api_prefix)
app.include_router(upload_router, prefix=settings.api_prefix)
app.include_router(realtime_router)
