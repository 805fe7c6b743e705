"""유틸리티 모듈"""
from .exceptions import (
    OverlayError,
    ConfigurationError,
    UpstreamError,
    UpstreamTransportError,
    UpstreamApiError,
)
from .logging_config import setup_logging
from .settings import Settings

__all__ = [
    "OverlayError",
    "ConfigurationError",
    "UpstreamError",
    "UpstreamTransportError",
    "UpstreamApiError",
    "setup_logging",
    "Settings",
]
