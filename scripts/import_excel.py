"""
Import a donor spreadsheet from the command line.

    python -m scripts.import_excel path/to/donors.xlsx
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from app.services.donor_import_service import ImportHeaderError, ImportPersistenceError, get_donor_import_service
from db.session import SessionLocal

logger = logging.getLogger("scripts.import_excel")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import donors and donations from a spreadsheet.")
    parser.add_argument("path", type=Path, help=".xlsx, .xls, .csv or .json file to import")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    args = _parse_args(argv)

    if not args.path.is_file():
        logger.error("File not found: %s", args.path)
        return 2

    db = SessionLocal()
    try:
        summary = get_donor_import_service().import_file(
            filename=args.path.name,
            content=args.path.read_bytes(),
            db=db,
        )
    except ImportHeaderError as exc:
        logger.error("Import rejected: %s", exc)
        return 1
    except ImportPersistenceError as exc:
        logger.error("Import failed: %s", exc)
        return 1
    finally:
        db.close()

    print(
        f"total={summary.total} successful={summary.successful} failed={summary.failed} "
        f"skipped={summary.skipped} donors_created={summary.donors_created} "
        f"donors_updated={summary.donors_updated} donations_created={summary.donations_created}"
    )
    for error in summary.errors:
        print(f"  {error}", file=sys.stderr)
    return 0 if summary.failed == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
