"""Client library for the CloudConvert file conversion API."""

from .client import CloudConvertClient
from .config import Settings, get_settings
from .errors import CloudConvertError, DecodeError, ServiceError, TransportError
from .models import ConversionParams, Outcome, UploadFile

__all__ = [
    "CloudConvertClient",
    "Settings",
    "get_settings",
    "CloudConvertError",
    "TransportError",
    "ServiceError",
    "DecodeError",
    "ConversionParams",
    "Outcome",
    "UploadFile",
]
