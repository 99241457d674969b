"""Command-line entry point."""
import sys
import json
import argparse
from pathlib import Path

from finscan.config.settings import AppSettings, set_settings
from finscan.extraction.models import RawDocument
from finscan.llm.models import FinancialSummary
from finscan.orchestrator.processor import ExtractionService
from finscan.utils.exceptions import FinScanError
from finscan.utils.logger import configure_logging, get_logger

logger = get_logger()


def receipt_command(service: ExtractionService, file_path: str) -> None:
    """Extract a single receipt and print it as JSON."""
    receipt = service.extract_receipt(RawDocument.from_path(Path(file_path)))
    print(json.dumps(receipt.to_dict(), indent=2, ensure_ascii=False))


def statement_command(service: ExtractionService, file_path: str) -> None:
    """Extract all statement transactions and print them as JSON."""
    result = service.extract_statement(RawDocument.from_path(Path(file_path)))
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    print(f"{len(result.transactions)} transactions ({result.source})", file=sys.stderr)


def chat_command(service: ExtractionService, message: str, summary_path: str = None) -> None:
    """Ask the assistant a question, optionally with a summary JSON file."""
    data = {}
    if summary_path:
        with open(summary_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    print(service.chat(message, FinancialSummary.from_dict(data)))


def _load_settings(config_path: str = None) -> AppSettings:
    """Load and validate settings, exiting on invalid configuration."""
    settings = AppSettings.load(Path(config_path) if config_path else None)

    is_valid, message = settings.validate()
    if not is_valid:
        logger.critical(f"Invalid configuration: {message}")
        sys.exit(1)

    set_settings(settings)
    return settings


def main(argv=None):
    """Main entry point for the FinScan CLI."""
    parser = argparse.ArgumentParser(description="FinScan receipt and statement extraction")
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument("--log-level", help="Override the configured log level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    receipt_parser = subparsers.add_parser("receipt", help="Extract a single receipt (image or PDF)")
    receipt_parser.add_argument("file")

    statement_parser = subparsers.add_parser("statement", help="Extract all transactions from a PDF statement")
    statement_parser.add_argument("file")

    chat_parser = subparsers.add_parser("chat", help="Ask the finance assistant a question")
    chat_parser.add_argument("message")
    chat_parser.add_argument("--summary", help="JSON file with totalIncome, totalExpenses, categories")

    args = parser.parse_args(argv)

    try:
        settings = _load_settings(args.config)
        if args.log_level:
            settings.log_level = args.log_level
        configure_logging(settings)

        service = ExtractionService(settings)

        if args.command == "receipt":
            receipt_command(service, args.file)
        elif args.command == "statement":
            statement_command(service, args.file)
        elif args.command == "chat":
            chat_command(service, args.message, args.summary)
    except FinScanError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
