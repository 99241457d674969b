"""Upload processing: file -> text -> model -> validated candidates.

One ExtractionService call handles one upload request from start to finish.
The uploaded bytes are staged in a uniquely named temp file that is removed
on every exit path. Nothing is retried; the bulk-statement path runs the
model first, then the pattern scan, then settles for an empty result.
"""
import uuid
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Iterator, List, Optional, Protocol, Sequence

from finscan.config.settings import AppSettings, get_settings
from finscan.extraction.models import RawDocument, PDF_MEDIA_TYPE, SUPPORTED_MEDIA_TYPES
from finscan.extraction.text_extractor import TextExtractor
from finscan.llm.dedup import deduplicate
from finscan.llm.fallback import scan_receipt, scan_statement
from finscan.llm.gateway import GeminiGateway, ModelGateway
from finscan.llm.models import (
    BulkCreateResult,
    FinancialSummary,
    ReceiptExtraction,
    StatementResult,
    TaskKind,
    TransactionCandidate,
)
from finscan.llm.normalizer import normalize_batch, normalize_receipt
from finscan.llm.prompts import build_chat_prompt, build_prompt
from finscan.llm.response_parser import parse_array, parse_object
from finscan.utils.exceptions import ModelUnavailable, ValidationError
from finscan.utils.logger import get_logger, set_request_context
from finscan.utils.tempfiles import staged_upload

logger = get_logger()


class TransactionStore(Protocol):
    """Persistent transaction store (owned by the web application)."""

    def insert_many(self, transactions: List[TransactionCandidate]) -> List[Any]:
        ...


class ExtractionService:
    """Runs receipt, statement, bulk-save and chat requests."""

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        gateway: Optional[ModelGateway] = None,
        extractor: Optional[TextExtractor] = None,
    ):
        self.settings = settings or get_settings()
        self.gateway = gateway or GeminiGateway(
            self.settings.gemini_api_key,
            model_name=self.settings.llm_model_name
        )
        self.extractor = extractor or TextExtractor(
            min_text_length=self.settings.min_text_length,
            tesseract_lang=self.settings.tesseract_lang
        )

    def extract_receipt(self, document: RawDocument) -> ReceiptExtraction:
        """
        Extract one receipt from an image or PDF.

        Raises:
            ValidationError: Unsupported type or file too large
            ExtractionFailed: No text could be read
            ModelUnavailable: The model could not be reached
            MalformedResponse: The model reply was not a JSON object
        """
        self._check_upload(document, SUPPORTED_MEDIA_TYPES)

        with self._request(document) as text:
            reply = self.gateway.generate(build_prompt(TaskKind.RECEIPT, text))
            receipt = normalize_receipt(parse_object(reply))

            if receipt.amount is None:
                logger.info("Model found no amount on receipt, trying basic extraction")
                scanned = scan_receipt(text)
                receipt = replace(
                    receipt,
                    amount=scanned.amount,
                    merchant=receipt.merchant or scanned.merchant
                )

            logger.info(f"Receipt extracted: amount={receipt.amount} category={receipt.category}")
            return receipt

    def extract_statement(self, document: RawDocument) -> StatementResult:
        """
        Extract all transactions from a PDF statement.

        An empty result is a success. A model that cannot be reached, or that
        returns no usable rows, hands over to the pattern scan.

        Raises:
            ValidationError: Not a PDF or file too large
            ExtractionFailed: No text could be read
            MalformedResponse: The model reply was not a JSON array
        """
        self._check_upload(document, (PDF_MEDIA_TYPE,))

        with self._request(document) as text:
            candidates = self._extract_with_model(text)
            if candidates:
                logger.info(f"Model extracted {len(candidates)} unique transactions")
                return StatementResult(candidates, source="model")

            logger.info("No transactions found by AI, trying fallback parsing...")
            candidates = scan_statement(text)
            if candidates:
                return StatementResult(candidates, source="fallback")

            logger.info("Fallback parsing found no transactions either")
            return StatementResult([], source="none")

    def bulk_create(self, rows: Sequence[Any], store: TransactionStore) -> BulkCreateResult:
        """
        Validate user-approved rows and save the valid ones together.

        Rejected rows are reported by index and reason, never dropped.

        Raises:
            ValidationError: If no rows were provided
        """
        if not isinstance(rows, (list, tuple)) or not rows:
            raise ValidationError("No transactions provided")

        candidates, rejections = normalize_batch(rows, require_description=True)

        if not candidates:
            logger.warning(f"No valid transactions to save ({len(rejections)} rejected)")
            return BulkCreateResult(0, len(rejections), [], rejections)

        logger.info(
            f"Saving {len(candidates)} valid transactions, "
            f"{len(rejections)} invalid transactions skipped"
        )
        saved = list(store.insert_many(candidates))
        return BulkCreateResult(len(saved), len(rejections), saved, rejections)

    def chat(self, message: str, summary: FinancialSummary) -> str:
        """
        Answer a user question with their financial profile as context.

        Raises:
            ValidationError: Empty message
            ModelUnavailable: The model could not be reached
        """
        if not message or not message.strip():
            raise ValidationError("Message is required")

        logger.info("Chat request received")
        return self.gateway.generate(build_chat_prompt(message.strip(), summary))

    def _extract_with_model(self, text: str) -> List[TransactionCandidate]:
        """Model path of the statement flow; [] when the model is unavailable."""
        try:
            reply = self.gateway.generate(build_prompt(TaskKind.STATEMENT, text))
        except ModelUnavailable as e:
            logger.warning(f"AI extraction unavailable: {e}")
            return []

        records = parse_array(reply)
        unique = deduplicate(records)
        candidates, rejections = normalize_batch(unique)
        if rejections:
            logger.info(f"Dropped {len(rejections)} model rows without a usable amount")
        return candidates

    def _check_upload(self, document: RawDocument, allowed: Sequence[str]) -> None:
        if document.media_type not in allowed:
            kinds = ", ".join(allowed)
            raise ValidationError(f"Unsupported file type {document.media_type}; expected one of: {kinds}")
        if document.size > self.settings.max_upload_bytes:
            limit_mb = self.settings.max_upload_bytes / (1024 * 1024)
            raise ValidationError(f"File exceeds the {limit_mb:g}MB upload limit")

    @contextmanager
    def _request(self, document: RawDocument) -> Iterator[str]:
        """Stage the upload, tag logs with a request id, yield its text."""
        set_request_context(uuid.uuid4().hex[:8])
        try:
            logger.info(f"Processing upload: {document.filename or 'unnamed'} ({document.size} bytes)")
            with staged_upload(document.content, document.media_type, self.settings.temp_dir) as path:
                yield self.extractor.extract(path, document.media_type)
        finally:
            set_request_context(None)
