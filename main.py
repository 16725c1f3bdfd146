import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv
import uvicorn

import storage
from database import check_connection, init_db
from errors import ListingError, ValidationError
from logging_config import setup_logging
from routers import auth_router, properties_router, reviews_router, transactions_router, users_router
from services.session_store import SessionStore

# Load .env
load_dotenv()

setup_logging(os.getenv("LOG_LEVEL", "INFO"), os.getenv("LOG_FORMAT", "standard"))
logger = logging.getLogger(__name__)

# App instance
app = FastAPI(title="Property Listings API")
app.state.session_store = SessionStore()

# CORS
origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount static uploads
os.makedirs(storage.UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=storage.UPLOAD_DIR), name="uploads")

if os.getenv("AUTO_CREATE_TABLES", "false").lower() == "true":
    init_db()

app.include_router(auth_router)
app.include_router(properties_router)
app.include_router(users_router)
app.include_router(reviews_router)
app.include_router(transactions_router)


@app.get("/api/health", tags=["health"])
def health():
    if not check_connection():
        return JSONResponse(status_code=503, content={"error": "Database is temporarily unavailable"})
    return {"status": "ok"}


# Error responses: {"error": message}
@app.exception_handler(ListingError)
async def listing_error_handler(request: Request, exc: ListingError):
    content = {"error": exc.message}
    if isinstance(exc, ValidationError) and exc.field:
        content["field"] = exc.field
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0]
    field = str(first["loc"][-1]) if first.get("loc") else None
    return JSONResponse(status_code=400, content={"error": first["msg"], "field": field})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


if __name__ == "__main__":
    port = int(os.getenv("PORT", 3000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
