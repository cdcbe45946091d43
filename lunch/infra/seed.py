"""Seed data loader: reads the initial restaurant list from CSV.

File format (header row required):
    restaurants,option
    Arbys,cheap
    Olive Garden,normal
"""
import csv
import logging
from pathlib import Path
from typing import List, Tuple

from lunch.utilities.constants import SEED_HEADER

logger = logging.getLogger(__name__)


def read_seed_file(path) -> List[Tuple[str, str]]:
    """Return (name, category) pairs; incomplete rows are skipped."""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Seed file not found: {path}. Nothing to seed.")
        return []
    rows: List[Tuple[str, str]] = []
    with open(path, 'r', encoding='utf-8', newline='') as f:
        reader = csv.reader(f)
        header = next(reader, None)
        if header is None:
            return rows
        if tuple(h.strip().lower() for h in header[:2]) != SEED_HEADER:
            logger.warning(f"Unexpected seed header {header} in {path}")
        for record in reader:
            if len(record) < 2:
                continue
            name, category = record[0].strip(), record[1].strip()
            if name and category:
                rows.append((name, category))
    logger.debug(f"Read {len(rows)} seed rows from {path}")
    return rows
