import argparse
import asyncio
import json
import mimetypes
import re
import sys
from pathlib import Path

from filingiq.analysis.summary import generate_analysis_summary
from filingiq.config.settings import Settings
from filingiq.documents.models import DocumentRef
from filingiq.logging.logger import Log
from filingiq.pdf.factory import PdfExtractorFactory
from filingiq.processor.batch import analyze_documents

# Box 12 codes (e.g. D for 401(k) deferrals) are the amounts most often lost in extraction.
_BOX_12_RE = re.compile(
    r"box\s*12|code\s*[A-Za-z]|12\s*[A-Za-z]\s*[\d,.]|\bD\b.*\d|deferral|401",
    re.IGNORECASE,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="filingiq", description="Tax document analysis")
    commands = parser.add_subparsers(dest="command", required=True)

    extract = commands.add_parser(
        "extract-text", help="print the PDF text exactly as it is sent to the model"
    )
    extract.add_argument("path", type=Path)

    analyze = commands.add_parser("analyze", help="analyze local tax documents")
    analyze.add_argument("paths", type=Path, nargs="+")
    analyze.add_argument("--filing-status", default=None)
    return parser


def document_refs(paths: list[Path]) -> list[DocumentRef]:
    """DocumentRefs for local files; locators are absolute so the document root is the filesystem root."""
    refs = []
    for path in paths:
        mime_type, _ = mimetypes.guess_type(path.name)
        refs.append(
            DocumentRef(
                filename=path.name,
                locator=str(path.resolve()),
                mime_type=mime_type or "application/octet-stream",
            )
        )
    return refs


def run_extract_text(settings: Settings, path: Path) -> int:
    text = PdfExtractorFactory.get(settings).extract(path.read_bytes())
    print("--- Extracted text (what is sent to the model) ---\n")
    print(text)
    print("\n--- End ---")
    print(f"\nContains Box 12 / code / deferral-like terms: {bool(_BOX_12_RE.search(text))}")
    return 0


def run_analyze(settings: Settings, paths: list[Path], filing_status: str | None) -> int:
    settings = settings.model_copy(update={"document_root": Path("/")})
    results = asyncio.run(analyze_documents(document_refs(paths), filing_status, settings=settings))
    print(json.dumps([result.to_dict() for result in results], indent=2))
    print()
    print(generate_analysis_summary(results))
    return 0 if any(result.succeeded for result in results) else 1


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> configure logging -> run the command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    for warning in settings.configuration_warnings():
        Log.warning(warning)

    if args.command == "extract-text":
        return run_extract_text(settings, args.path)
    return run_analyze(settings, args.paths, args.filing_status)


if __name__ == "__main__":
    sys.exit(main())
