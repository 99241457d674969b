"""Text extraction from uploaded receipts and statements."""
from pathlib import Path
from typing import Optional

import pdfplumber
import pypdf
import pytesseract
from PIL import Image, UnidentifiedImageError

from finscan.utils.logger import get_logger
from finscan.utils.exceptions import ExtractionFailed
from .models import PDF_MEDIA_TYPE, IMAGE_MEDIA_TYPES

logger = get_logger()


class TextExtractor:
    """Extracts raw text from PDF files (embedded text) and images (OCR)."""

    def __init__(self, min_text_length: int = 1, tesseract_lang: str = "eng"):
        """
        Initialize text extractor.

        Args:
            min_text_length: Shortest non-blank text accepted as a result
            tesseract_lang: Tesseract language code(s), e.g. "eng" or "eng+hin"
        """
        self.min_text_length = min_text_length
        self.tesseract_lang = tesseract_lang

    def extract(self, file_path: Path, media_type: str) -> str:
        """
        Extract text from a staged upload.

        Args:
            file_path: Path to the uploaded file (read only)
            media_type: Declared media type of the upload

        Returns:
            Extracted text

        Raises:
            ExtractionFailed: If decoding fails or no text is recognized
        """
        file_path = Path(file_path)

        if media_type == PDF_MEDIA_TYPE:
            text = self._extract_with_pdfplumber(file_path)
            if not text:
                logger.info(f"pdfplumber found no text, trying pypdf for {file_path.name}")
                text = self._extract_with_pypdf(file_path)
        elif media_type in IMAGE_MEDIA_TYPES:
            text = self._extract_with_ocr(file_path)
        else:
            raise ExtractionFailed(f"Unsupported media type: {media_type}")

        if not self.validate_extraction(text):
            raise ExtractionFailed(
                f"Could not read any text from {file_path.name}. "
                f"The file may be corrupted, blank, or a scanned PDF."
            )

        logger.info(f"Successfully extracted {len(text)} characters from {file_path.name}")
        return text

    def validate_extraction(self, text: Optional[str]) -> bool:
        """Check that extraction produced usable text."""
        return bool(text) and len(text.strip()) >= self.min_text_length

    def _extract_with_pdfplumber(self, pdf_path: Path) -> Optional[str]:
        """
        Extract text using pdfplumber.

        Args:
            pdf_path: Path to PDF file

        Returns:
            Extracted text or None if failed
        """
        try:
            with pdfplumber.open(pdf_path) as pdf:
                text_parts = []
                for i, page in enumerate(pdf.pages, 1):
                    page_text = page.extract_text()
                    if page_text:
                        text_parts.append(page_text)
                        logger.debug(f"pdfplumber: Page {i} extracted {len(page_text)} chars")

                text = "\n".join(text_parts)
                logger.info(f"pdfplumber extracted {len(text)} chars from {len(pdf.pages)} pages in {pdf_path.name}")
                return text if text else None

        except Exception as e:
            logger.warning(f"pdfplumber extraction failed for {pdf_path.name}: {e}")
            return None

    def _extract_with_pypdf(self, pdf_path: Path) -> Optional[str]:
        """Extract text using pypdf (fallback)."""
        try:
            with open(pdf_path, "rb") as f:
                reader = pypdf.PdfReader(f)
                text_parts = []

                for i, page in enumerate(reader.pages, 1):
                    page_text = page.extract_text()
                    if page_text:
                        text_parts.append(page_text)
                        logger.debug(f"pypdf: Page {i} extracted {len(page_text)} chars")

                text = "\n".join(text_parts)
                logger.info(f"pypdf extracted {len(text)} chars from {len(reader.pages)} pages in {pdf_path.name}")
                return text if text else None

        except Exception as e:
            logger.error(f"pypdf extraction failed for {pdf_path.name}: {e}")
            return None

    def _extract_with_ocr(self, image_path: Path) -> str:
        """
        Run Tesseract OCR over the full image.

        Raises:
            ExtractionFailed: If the image cannot be decoded or OCR fails
        """
        try:
            with Image.open(image_path) as image:
                image.load()
                text = pytesseract.image_to_string(image, lang=self.tesseract_lang)
        except pytesseract.TesseractNotFoundError as e:
            raise ExtractionFailed(f"OCR engine is not installed: {e}") from e
        except pytesseract.TesseractError as e:
            raise ExtractionFailed(f"OCR failed for {image_path.name}: {e}") from e
        except (UnidentifiedImageError, OSError) as e:
            raise ExtractionFailed(f"Could not decode image {image_path.name}: {e}") from e

        logger.info(f"OCR extracted {len(text)} chars from {image_path.name}")
        return text
