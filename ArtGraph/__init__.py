"""
ArtGraph
========

Graph storage backend for the image content-analysis API.
Users, images and their derived attributes live in Neo4j.
"""
__version__ = "1.0.0"

from .config import StoreConfig, load_store_config
from .storage.neo4j_storage import initialize, get_driver, close

__all__ = ['StoreConfig', 'load_store_config', 'initialize', 'get_driver', 'close']
