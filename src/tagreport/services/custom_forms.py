"""
Parsing of uploaded custom form CSV data
"""

import csv
import io
from typing import List, Tuple


class FormCsvError(ValueError):
    pass


def parse_form_csv(csv_data: str) -> List[Tuple[str, str]]:
    """Parse `code,itemName` lines into (code, item_name) pairs.

    Blank lines are skipped, a leading `code,itemName` header row is
    dropped, and item names may themselves contain commas.
    """
    pairs = []
    reader = csv.reader(io.StringIO(csv_data.strip()))
    for line_number, row in enumerate(reader, start=1):
        if not row or not any(cell.strip() for cell in row):
            continue
        if len(row) < 2:
            raise FormCsvError(f"Line {line_number}: expected code,itemName")

        code = row[0].strip()
        item_name = ",".join(row[1:]).strip()
        if line_number == 1 and code.lower() == "code":
            continue
        if not code or not item_name:
            raise FormCsvError(f"Line {line_number}: code and item name are both required")
        pairs.append((code, item_name))

    if not pairs:
        raise FormCsvError("CSV data contains no items")
    return pairs
