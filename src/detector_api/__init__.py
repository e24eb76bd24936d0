from detector_api.client import DetectorClient
from detector_api.config.settings import ClientConfig, Settings, get_settings
from detector_api.transport.errors import (
    APIError,
    DecodeError,
    DetectorAPIError,
    RequestTimeout,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "ClientConfig",
    "DecodeError",
    "DetectorAPIError",
    "DetectorClient",
    "RequestTimeout",
    "Settings",
    "TransportError",
    "get_settings",
]
