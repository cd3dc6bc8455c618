"""
Command line entry point: verify a single PDF against a claim.

    docverify agreement.pdf --type rental --claim tenantName="Asha Rao" --claim rentAmount=10000
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .exceptions import DocumentVerificationError, UnsupportedDocumentType
from .models import DocumentType, VerdictStatus
from .settings import Settings
from .verifier import DocumentVerifier

EXIT_ORIGINAL = 0
EXIT_FAKE = 1
EXIT_ERROR = 2


def parse_claims(pairs: List[str]) -> Dict[str, str]:
    """Turn ``key=value`` arguments into a claim mapping"""
    claim: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(f"Claim must look like key=value, got '{pair}'")
        claim[key.strip()] = value.strip()
    return claim


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docverify",
        description="Verify claimed facts against a sale, gift, rental or authority document.",
    )
    parser.add_argument("document", type=Path, help="PDF document to verify")
    parser.add_argument(
        "--type", "-t", dest="doc_type", required=True,
        help=f"Document type ({', '.join(t.value for t in DocumentType)})",
    )
    parser.add_argument(
        "--claim", "-c", action="append", default=[], metavar="KEY=VALUE",
        help="Claimed field value, repeatable",
    )
    parser.add_argument("--json", action="store_true", help="Print only the JSON result")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        claim = parse_claims(args.claim)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        document_bytes = args.document.read_bytes()
    except OSError as e:
        print(f"❌ ERROR: cannot read {args.document}: {e}", file=sys.stderr)
        return EXIT_ERROR

    try:
        verifier = DocumentVerifier.from_settings(settings)
        if not args.json:
            print("=" * 60)
            print(f"Document Verifier - {args.document.name} ({args.doc_type})")
            print("=" * 60)
        result = verifier.verify(document_bytes, args.doc_type, claim)
    except UnsupportedDocumentType as e:
        print(f"❌ UNSUPPORTED DOCUMENT TYPE: {e}", file=sys.stderr)
        return EXIT_ERROR
    except DocumentVerificationError as e:
        print(f"❌ VERIFICATION ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR
    except ValueError as e:
        print(f"❌ ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR

    if not args.json:
        print(f"\nStatus: {result.status.value}")
        print(result.analysis)
        print("\n" + "=" * 60)
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))

    return EXIT_ORIGINAL if result.status is VerdictStatus.ORIGINAL else EXIT_FAKE


if __name__ == "__main__":
    sys.exit(main())
