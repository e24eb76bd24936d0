from detector_api.transport.dispatcher import Dispatcher
from detector_api.transport.errors import (
    APIError,
    DecodeError,
    DetectorAPIError,
    RequestTimeout,
    TransportError,
)
from detector_api.transport.response import classify, decode_body, drain, read_response

__all__ = [
    "APIError",
    "DecodeError",
    "DetectorAPIError",
    "Dispatcher",
    "RequestTimeout",
    "TransportError",
    "classify",
    "decode_body",
    "drain",
    "read_response",
]
