"""Utility modules."""
from .logger import get_logger, configure_logging, set_request_context
from .exceptions import (
    FinScanError,
    ConfigError,
    ValidationError,
    ExtractionFailed,
    LLMError,
    ModelUnavailable,
    MalformedResponse,
    InvalidCandidate
)
from .tempfiles import staged_upload

__all__ = [
    "get_logger",
    "configure_logging",
    "set_request_context",
    "FinScanError",
    "ConfigError",
    "ValidationError",
    "ExtractionFailed",
    "LLMError",
    "ModelUnavailable",
    "MalformedResponse",
    "InvalidCandidate",
    "staged_upload"
]
