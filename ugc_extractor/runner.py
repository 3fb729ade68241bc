"""
Command-line entry point.
Run with: python -m ugc_extractor.runner invoice.pdf --type Invoice
"""

import argparse
import sys
from pathlib import Path

from ugc_extractor.models.enums import DocumentType
from ugc_extractor.observability.logging import setup_logging
from ugc_extractor.pipeline.orchestrator import InvalidDocumentType, process_pdf_document


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ugc-extract",
        description="Extract a draft invoice or contract record from a PDF.",
    )
    parser.add_argument("pdf", type=Path, help="Path to the PDF document")
    parser.add_argument(
        "--type",
        dest="document_type",
        default=DocumentType.INVOICE.value,
        help='Document type: "Invoice" or "Contract" (default: Invoice)',
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log at DEBUG, including a preview of the decoded text",
    )
    return parser


def main(argv=None) -> int:
    """Print the extracted record as camelCase JSON."""
    args = build_parser().parse_args(argv)
    setup_logging(level="DEBUG" if args.verbose else None)

    try:
        content = args.pdf.read_bytes()
    except OSError as e:
        print(f"Cannot read {args.pdf}: {e}", file=sys.stderr)
        return 1

    try:
        record = process_pdf_document(content, args.document_type)
    except InvalidDocumentType as e:
        print(f"{e.error_code}: {e.message}", file=sys.stderr)
        return 2

    print(record.model_dump_json(by_alias=True, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
