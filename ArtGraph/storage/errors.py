"""
Errors raised while bringing up or using the Neo4j connection.

All of them derive from StoreError. Where a builtin exception already names
the failure (connection, permission), the store error subclasses it too so
callers may catch either.
"""


class StoreError(Exception):
    """Base class for graph store errors"""


class ConfigurationError(StoreError):
    """Required connection settings are missing or empty"""


class StoreConnectionError(StoreError, ConnectionError):
    """The driver could not be created"""


class ConnectivityError(StoreError):
    """A read-only probe against the store failed"""


class WritePermissionError(StoreError, PermissionError):
    """The write-permission probe did not round-trip its record"""


class NotInitializedError(StoreError, RuntimeError):
    """The driver was requested before a successful initialize()"""
