"""Command line entry point for uploading invoices and finding quote candidates."""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from quote_autopilot.core.logging import configure_logging
from quote_autopilot.core.models import CATEGORIES
from quote_autopilot.core.utils import get_config_value
from quote_autopilot.ingestion.files import ValidationError
from quote_autopilot.processing.pipeline import run_search, run_upload
from quote_autopilot.storage.kv import JsonFileKeyValueStore
from quote_autopilot.storage.repositories import CompanyRepository
from quote_autopilot.storage.seed import seed_companies

DEFAULT_STORE_PATH = "data/store.json"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with upload, search, and seed subcommands."""

    parser = argparse.ArgumentParser(description="Upload invoices and find companies to request quotes from")
    parser.add_argument(
        "--store",
        type=Path,
        default=Path(get_config_value("QUOTE_STORE_PATH", DEFAULT_STORE_PATH) or DEFAULT_STORE_PATH),
        help="JSON file holding invoices and the company directory",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    upload = subparsers.add_parser("upload", help="Analyse a PDF invoice and store it")
    upload.add_argument("file", type=Path, help="PDF file to upload")

    search = subparsers.add_parser("search", help="Find companies to request quotes from")
    target = search.add_mutually_exclusive_group(required=True)
    target.add_argument("--category", choices=CATEGORIES, help="Business category to search")
    target.add_argument("--invoice-id", help="Use the business category of a stored invoice")
    target.add_argument("--name", help="Substring of the company name")
    search.add_argument("--output", type=Path, help="CSV file to write the ranked companies to")
    search.add_argument(
        "--sink",
        choices=["csv", "excel"],
        default="csv",
        help="Also write an Excel workbook when set to excel",
    )
    search.add_argument(
        "--excel-output",
        type=Path,
        default=Path("output/companies.xlsx"),
        help="Excel file to write when --sink=excel",
    )

    subparsers.add_parser("seed", help="Populate an empty company directory with demo companies")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entrypoint for the quote-autopilot command."""

    configure_logging()
    args = build_parser().parse_args(argv)
    store = JsonFileKeyValueStore(args.store)

    if args.command == "upload":
        try:
            invoice = run_upload(args.file, store)
        except ValidationError as exc:
            print(str(exc), file=sys.stderr)
            return 2
        print(f"Stored invoice {invoice.id} ({invoice.company_name}, {invoice.business_category})")
        return 0

    if args.command == "search":
        result = run_search(
            store,
            category=args.category,
            invoice_id=args.invoice_id,
            name=args.name,
            output_path=args.output,
            sink=args.sink,
            excel_path=args.excel_output,
        )
        for company in result.companies:
            print(f"{company.id}\t{company.name}\t{company.industry or ''}")
        print(f"Found {result.total_found} companies ({result.contactable_count} contactable)")
        return 0

    count = seed_companies(CompanyRepository(store))
    print(f"Seeded {count} companies")
    return 0


if __name__ == "__main__":
    sys.exit(main())
