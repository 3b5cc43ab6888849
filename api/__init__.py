"""
ArtGraph FastAPI Backend
========================

REST API in front of the ArtGraph Neo4j store.

Endpoints cover:
- Health checks (API and Neo4j)
- Graph data for visualization
- Placeholders for auth, upload and image details
"""

from .main import app

__all__ = ['app']
