import logging
from datetime import datetime, timezone
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core import config
from app.core.errors import ApiError, InvalidFormat, MissingFields
from app.database import init_db

from app.routes.auth import router as auth_router
from app.routes.trips import router as trips_router
from app.routes.admin import router as admin_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

app = FastAPI(title="Trip Planner API", version=API_VERSION)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create tables (after models are imported)
init_db()


if config.ENVIRONMENT == "development":
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(error.get("loc", [])), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    # A missing body is the only way a required field can be absent
    if details and all(error["type"] == "missing" for error in details):
        error = MissingFields("Request body is required", details=details)
    else:
        error = InvalidFormat(details=details)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "error": "Endpoint not found",
                "code": "ROUTE_NOT_FOUND",
                "message": f"API endpoint '{request.url.path}' not found",
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": str(exc.detail),
            "code": "HTTP_ERROR",
            "message": str(exc.detail),
        },
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
    content = {
        "success": False,
        "error": "Internal server error",
        "code": "INTERNAL_ERROR",
        "message": "Something went wrong",
    }
    if not config.IS_PRODUCTION:
        content["message"] = str(exc)
        content["detail"] = repr(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


api_router = APIRouter()
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(trips_router, prefix="/trips", tags=["trips"])
api_router.include_router(admin_router, prefix="/admin", tags=["admin"])


@api_router.get("/health", tags=["health"])
def health_check():
    return {
        "success": True,
        "message": "API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(api_router, prefix="/api")


@app.get("/")
def read_root():
    return {
        "success": True,
        "message": "Trip Planner API",
        "version": API_VERSION,
        "endpoints": {
            "health": "/api/health",
            "auth": "/api/auth/*",
            "trips": "/api/trips",
            "admin": "/api/admin/*",
        },
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on port {config.PORT} ({config.ENVIRONMENT})")
    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT)
