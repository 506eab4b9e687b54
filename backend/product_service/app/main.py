# backend/product_service/app/main.py

import logging
import os
import sys
import time

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import OperationalError

from . import api, views
from .config import (
    DB_CONNECT_MAX_RETRIES,
    DB_CONNECT_RETRY_DELAY_SECONDS,
    IMAGE_BASE_URL,
    IMAGE_DIR,
)
from .db import Base, engine
from .exceptions import ImageStorageError
from .storage import DIRECTORY_MODE

# --- Standard Logging Configuration ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Suppress noisy logs from third-party libraries for cleaner output
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)

# --- FastAPI Application Setup ---
app = FastAPI(
    title="Product Service API",
    description="Product catalog with image uploads, served as HTML pages and a JSON API.",
    version="1.0.0",
)

# Enable CORS (for frontend dev/testing)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Use specific origins in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api.router)
app.include_router(views.router)

# Uploaded images are served straight from the asset directory, which must
# exist before the first request or StaticFiles fails every lookup
os.makedirs(IMAGE_DIR, mode=DIRECTORY_MODE, exist_ok=True)
app.mount(
    IMAGE_BASE_URL,
    StaticFiles(directory=IMAGE_DIR),
    name="images",
)


# --- Exception Handlers ---
@app.exception_handler(ImageStorageError)
async def image_storage_error_handler(request: Request, exc: ImageStorageError):
    logger.error(
        f"Product Service: Image storage failure on {request.method} {request.url.path}: {exc}"
    )
    if request.url.path.startswith(api.router.prefix):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": False, "message": "Could not store product image."},
        )
    return PlainTextResponse(
        "Could not store product image.",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


# --- FastAPI Event Handlers ---
@app.on_event("startup")
async def startup_event():
    max_retries = DB_CONNECT_MAX_RETRIES
    retry_delay_seconds = DB_CONNECT_RETRY_DELAY_SECONDS
    for i in range(max_retries):
        try:
            logger.info(
                f"Product Service: Attempting to connect to the database and create tables (attempt {i+1}/{max_retries})..."
            )
            Base.metadata.create_all(bind=engine)
            logger.info(
                "Product Service: Successfully connected to the database and ensured tables exist."
            )
            break  # Exit loop if successful
        except OperationalError as e:
            logger.warning(f"Product Service: Failed to connect to the database: {e}")
            if i < max_retries - 1:
                logger.info(
                    f"Product Service: Retrying in {retry_delay_seconds} seconds..."
                )
                time.sleep(retry_delay_seconds)
            else:
                logger.critical(
                    f"Product Service: Failed to connect to the database after {max_retries} attempts. Exiting application."
                )
                sys.exit(1)  # Critical failure: exit if DB connection is unavailable
        except Exception as e:
            logger.critical(
                f"Product Service: An unexpected error occurred during database startup: {e}",
                exc_info=True,
            )
            sys.exit(1)


# --- Root Endpoint ---
@app.get("/", status_code=status.HTTP_200_OK, summary="Root endpoint")
async def read_root():
    return {"message": "Welcome to the Product Service!"}


# --- Health Check Endpoint ---
@app.get("/health", status_code=status.HTTP_200_OK, summary="Health check endpoint")
async def health_check():
    return {"status": "ok", "service": "product-service"}
