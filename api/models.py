"""
Pydantic Models for ArtGraph API
================================

Request and response models for the REST API endpoints.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime, timezone
from enum import Enum

from ArtGraph import __version__


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Enums
# ============================================================================

class ApiStatus(str, Enum):
    """Overall API health"""
    HEALTHY = "healthy"
    DEGRADED = "degraded"


class DependencyStatus(str, Enum):
    """State of a backing service"""
    UNKNOWN = "unknown"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class ImageStatus(str, Enum):
    """Processing state of an uploaded image"""
    PENDING = "pending"
    PROCESSING = "processing"
    PROCESSED = "processed"
    FAILED = "failed"


# ============================================================================
# Base Models
# ============================================================================

class MessageResponse(BaseModel):
    """Plain message, used by placeholder endpoints"""
    message: str


class ErrorResponse(BaseModel):
    """Error response model"""
    error: str
    message: Optional[str] = None


# ============================================================================
# Health Models
# ============================================================================

class HealthDependencies(BaseModel):
    """Status of each backing service"""
    neo4j: DependencyStatus = DependencyStatus.UNKNOWN


class HealthResponse(BaseModel):
    """Health check response"""
    status: ApiStatus = ApiStatus.HEALTHY
    timestamp: datetime = Field(default_factory=_utcnow)
    environment: Optional[str] = None
    version: str = __version__
    dependencies: HealthDependencies = Field(default_factory=HealthDependencies)


# ============================================================================
# Auth Models
# ============================================================================

class AuthStatusResponse(BaseModel):
    """Authentication status"""
    authenticated: bool = False
    message: str = "Authentication not implemented yet"
    timestamp: datetime = Field(default_factory=_utcnow)


# ============================================================================
# Upload Models
# ============================================================================

class UploadStatusResponse(BaseModel):
    """Upload service status"""
    status: str = "ready"
    maxFileSize: str = "10MB"
    supportedTypes: List[str] = Field(default_factory=lambda: ["image/jpeg", "image/png"])
    timestamp: datetime = Field(default_factory=_utcnow)


# ============================================================================
# Graph Models
# ============================================================================

class ImageAttribute(BaseModel):
    """An attribute derived from an image (object, technique, composition, ...)"""
    type: str
    value: str


class GraphImage(BaseModel):
    """An image node with its attributes"""
    imageId: str
    uploadedAt: datetime
    url: str
    status: ImageStatus = ImageStatus.PENDING
    attributes: List[ImageAttribute] = []


class GraphUser(BaseModel):
    """A user node with its images"""
    userId: str
    createdAt: datetime
    lastLogin: Optional[datetime] = None
    images: List[GraphImage] = []


class GraphResponse(BaseModel):
    """Complete graph for visualization"""
    users: List[GraphUser]
    root: str = "root"


# ============================================================================
# Image Models
# ============================================================================

class ImageListResponse(BaseModel):
    """Image listing"""
    images: List[GraphImage] = []
    total: int = 0
    page: int = 1
    pageSize: int = 10
    timestamp: datetime = Field(default_factory=_utcnow)


class ApiInfoResponse(BaseModel):
    """API root information"""
    name: str
    version: str
    description: str
    docs_url: str = "/docs"
    endpoints: Dict[str, str]
