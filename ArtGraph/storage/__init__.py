from .errors import (
    StoreError,
    ConfigurationError,
    StoreConnectionError,
    ConnectivityError,
    WritePermissionError,
    NotInitializedError,
)
