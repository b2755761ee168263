"""Main FastAPI application for Widget Layout Service"""
import logging
from datetime import datetime, timezone
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import settings
from .errors import CatalogLoadError, InvalidIdentityError, TemplateServiceError
from .models import ErrorPayload, ErrorResponse, HealthCheckResponse
from .routes import base_templates, templates, widget_mapping
from .services.catalogs import init_catalogs

# Set up logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Catalogs are loaded once; a broken catalog stops the service
try:
    init_catalogs(settings.BASE_WIDGET_DASHBOARD_TEMPLATES, settings.WIDGET_MAPPING_CONFIG)
except CatalogLoadError:
    logger.critical("Failed to parse catalogs, shutting down the service", exc_info=True)
    raise

# Create FastAPI app
app = FastAPI(
    title=settings.SERVICE_NAME,
    description="Dashboard Template Layout Service",
    version=settings.SERVICE_VERSION
)


def error_response(status_code: int, message: str) -> JSONResponse:
    """Error envelope response"""
    body = ErrorResponse(errors=[ErrorPayload(code=status_code, message=message)])
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@app.exception_handler(TemplateServiceError)
async def template_service_error_handler(request: Request, exc: TemplateServiceError):
    return error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    if any(error.get("loc", ("",))[0] == "body" for error in exc.errors()):
        return PlainTextResponse("Invalid request body", status_code=status.HTTP_400_BAD_REQUEST)
    return PlainTextResponse("Invalid request parameters", status_code=status.HTTP_400_BAD_REQUEST)


@app.exception_handler(InvalidIdentityError)
async def invalid_identity_error_handler(request: Request, exc: InvalidIdentityError):
    return PlainTextResponse("Invalid identity header", status_code=status.HTTP_400_BAD_REQUEST)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


# Register routes; fixed paths before /{template_id}
app.include_router(base_templates.router)
app.include_router(widget_mapping.router)
app.include_router(templates.router)


@app.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """Health check endpoint"""
    dependencies = {}

    # Check database
    try:
        from .db.session import engine
        from sqlalchemy import text
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        dependencies["database"] = "healthy"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        dependencies["database"] = "unhealthy"

    status_value = "healthy" if all(v == "healthy" for v in dependencies.values()) else "degraded"

    return HealthCheckResponse(
        status=status_value,
        service=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        dependencies=dependencies
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.SERVICE_HOST,
        port=settings.SERVICE_PORT,
        reload=True
    )
