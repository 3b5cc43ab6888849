"""
ArtGraph FastAPI Application
============================

REST API for the image content-analysis graph.

Endpoints Overview:
------------------
Health & Info:
  - GET  /                          - API info
  - GET  /health                    - Health check (API + Neo4j)

Auth (placeholders):
  - GET  /auth/status               - Authentication status
  - POST /auth/login                - Not implemented
  - POST /auth/logout               - Not implemented

Upload (placeholders):
  - GET  /upload/status             - Upload service status
  - POST /upload                    - Not implemented

Graph:
  - GET  /graph                     - Users, images and attributes (sample data)

Images:
  - GET  /images/list               - List images
  - GET  /images/{image_id}         - Not implemented

Run with:
  uvicorn api.main:app --reload --host 0.0.0.0 --port 3000
or:
  python -m api.main
"""

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import Optional
import asyncio
import time
import os

from neo4j import Driver

from ArtGraph import __version__
from ArtGraph.logging.logger import setup_logger
from ArtGraph.storage import neo4j_storage
from ArtGraph.storage.errors import NotInitializedError

from .models import (
    # Base
    MessageResponse, ErrorResponse, ApiInfoResponse,
    # Health
    HealthResponse, ApiStatus,
    # Auth / Upload
    AuthStatusResponse, UploadStatusResponse,
    # Graph / Images
    GraphResponse, ImageListResponse,
)

from .services import health_service, graph_service

logger = setup_logger(__name__)


# ============================================================================
# Application Lifecycle
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize Neo4j on startup, close it on shutdown"""
    logger.info("🚀 Starting ArtGraph API...")

    try:
        await asyncio.to_thread(neo4j_storage.initialize)
    except Exception as e:
        # Refuse to serve against a broken store; uvicorn exits non-zero
        logger.error(f"Failed to start server: {e}")
        raise

    logger.info("✓ ArtGraph API is running!")
    try:
        yield
    finally:
        logger.info("Shutdown signal received. Closing Neo4j connection...")
        await asyncio.to_thread(neo4j_storage.close)


# ============================================================================
# Create FastAPI App
# ============================================================================

app = FastAPI(
    title="ArtGraph API",
    description="""
    REST API for the ArtGraph image analysis graph

    Users, images and derived attributes (objects, techniques, composition)
    are stored as nodes in Neo4j. Most endpoints are placeholders for now.
    """,
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request"""
    start_time = time.time()
    response = await call_next(request)
    elapsed_ms = (time.time() - start_time) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} - {elapsed_ms:.1f} ms")
    return response


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error="Something went wrong!").model_dump(exclude_none=True)
    )


# ============================================================================
# Dependencies
# ============================================================================

def get_store_driver() -> Optional[Driver]:
    """
    The process-wide Neo4j driver, or None if it is not initialized.

    Handlers borrow the driver; they must never close it.
    """
    try:
        return neo4j_storage.get_driver()
    except NotInitializedError:
        return None


def not_implemented(message: str) -> JSONResponse:
    return JSONResponse(status_code=501, content=MessageResponse(message=message).model_dump())


NOT_IMPLEMENTED = {501: {"model": MessageResponse, "description": "Not implemented yet"}}


# ============================================================================
# Health & Info Endpoints
# ============================================================================

@app.get("/", response_model=ApiInfoResponse, tags=["Info"])
async def root():
    """API root - basic information"""
    return ApiInfoResponse(
        name="ArtGraph API",
        version=__version__,
        description="REST API for the ArtGraph image analysis graph",
        endpoints={
            "health": "/health",
            "auth": "/auth/status",
            "upload": "/upload/status",
            "graph": "/graph",
            "images": "/images/list",
        }
    )


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    responses={503: {"model": HealthResponse, "description": "A dependency is unavailable"}}
)
def health_check(driver: Optional[Driver] = Depends(get_store_driver)):
    """
    Health check endpoint.

    Returns 200 when every dependency is reachable, 503 otherwise.
    """
    status = health_service.check(driver)
    status_code = 200 if status.status is ApiStatus.HEALTHY else 503
    return JSONResponse(status_code=status_code, content=status.model_dump(mode="json"))


# ============================================================================
# Auth Endpoints
# ============================================================================

@app.get("/auth/status", response_model=AuthStatusResponse, tags=["Auth"])
async def auth_status():
    """Get the current authentication status"""
    return AuthStatusResponse()


@app.post("/auth/login", tags=["Auth"], responses=NOT_IMPLEMENTED)
async def login():
    """Login endpoint (placeholder)"""
    return not_implemented("Login not implemented yet")


@app.post("/auth/logout", tags=["Auth"], responses=NOT_IMPLEMENTED)
async def logout():
    """Logout endpoint (placeholder)"""
    return not_implemented("Logout not implemented yet")


# ============================================================================
# Upload Endpoints
# ============================================================================

@app.get("/upload/status", response_model=UploadStatusResponse, tags=["Upload"])
async def upload_status():
    """Get the status of the upload service"""
    return UploadStatusResponse()


@app.post("/upload", tags=["Upload"], responses=NOT_IMPLEMENTED)
async def upload_image():
    """Upload a new image (placeholder)"""
    return not_implemented("Upload endpoint not implemented yet")


# ============================================================================
# Graph Endpoints
# ============================================================================

@app.get("/graph", response_model=GraphResponse, tags=["Graph"])
async def get_graph():
    """
    Get the complete graph for visualization.

    Includes users, their images, and the attributes derived from each image.
    """
    return graph_service.get_graph()


# ============================================================================
# Image Endpoints
# ============================================================================

@app.get("/images/list", response_model=ImageListResponse, tags=["Images"])
async def list_images():
    """Get a list of all images"""
    return ImageListResponse()


@app.get("/images/{image_id}", tags=["Images"], responses=NOT_IMPLEMENTED)
async def get_image(image_id: str):
    """Get details for a specific image (placeholder)"""
    return not_implemented("Image details endpoint not implemented yet")


if __name__ == "__main__":
    import uvicorn
    from dotenv import load_dotenv

    load_dotenv()
    uvicorn.run(
        "api.main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "3000")),
    )
