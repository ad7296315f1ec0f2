"""Spreadsheet structure sampler.

Given an ``.xlsx`` file, report each sheet's name, how many rows and columns
its used range spans, and the first few rows of raw cell values.  Used to
inspect planning workbooks while designing calculators; nothing in the
calculators depends on it.

Run directly to print the summary as JSON::

    python -m finplanner.components.workbook path/to/workbook.xlsx
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Sequence
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

logger = logging.getLogger(__name__)

SAMPLE_ROWS = 10


@dataclass
class SheetInfo:
    name: str
    rows: int
    columns: int
    sample_data: List[List[Any]] = field(default_factory=list)


def sample_workbook(path, sample_rows: int = SAMPLE_ROWS) -> List[SheetInfo]:
    """Summarize every sheet in the workbook at ``path``.

    ``path`` may also be an open binary file (e.g. an upload).  Raises
    ``FileNotFoundError`` if a path does not exist.
    """
    if isinstance(path, (str, Path)):
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Workbook not found: {path}")

    wb = load_workbook(path, data_only=True)
    try:
        sheets = []
        for ws in wb.worksheets:
            rows = ws.max_row - ws.min_row + 1
            columns = ws.max_column - ws.min_column + 1
            sample = [
                list(values)
                for values in ws.iter_rows(
                    min_row=ws.min_row,
                    max_row=min(ws.max_row, ws.min_row + sample_rows - 1),
                    values_only=True,
                )
            ]
            sheets.append(SheetInfo(ws.title, rows, columns, sample))
            logger.debug("sheet %r: %d rows x %d columns", ws.title, rows, columns)
    finally:
        wb.close()
    return sheets


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Print the structure of an Excel workbook as JSON.")
    parser.add_argument("path", help="Path to an .xlsx workbook")
    parser.add_argument("--rows", type=int, default=SAMPLE_ROWS, help="Sample rows per sheet (default: %(default)s)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        sheets = sample_workbook(args.path, sample_rows=args.rows)
    except (OSError, ValueError, InvalidFileException, BadZipFile) as exc:
        logger.error("could not analyze %s: %s", args.path, exc)
        return 1

    logger.info("sheet names: %s", ", ".join(s.name for s in sheets))
    print(json.dumps([asdict(s) for s in sheets], indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
