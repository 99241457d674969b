"""Custom exception classes for FinScan."""


class FinScanError(Exception):
    """Base exception for FinScan."""
    pass


class ConfigError(FinScanError):
    """Configuration-related errors."""
    pass


class ValidationError(FinScanError):
    """Request-level validation errors (bad upload, empty batch)."""
    pass


class ExtractionFailed(FinScanError):
    """OCR or PDF decoding could not produce any text."""
    pass


class LLMError(FinScanError):
    """LLM processing errors."""
    pass


class ModelUnavailable(LLMError):
    """The generative model could not be reached or is not configured."""
    pass


class MalformedResponse(LLMError):
    """The model replied, but not in the requested shape."""
    pass


class InvalidCandidate(FinScanError):
    """A single transaction row failed normalization.

    Row-level: callers collect these per index and keep going.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
