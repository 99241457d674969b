"""Document text extraction module."""
from .models import RawDocument, PDF_MEDIA_TYPE, IMAGE_MEDIA_TYPES, SUPPORTED_MEDIA_TYPES
from .text_extractor import TextExtractor

__all__ = ["RawDocument", "PDF_MEDIA_TYPE", "IMAGE_MEDIA_TYPES", "SUPPORTED_MEDIA_TYPES", "TextExtractor"]
