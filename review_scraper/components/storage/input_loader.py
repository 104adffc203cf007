"""Reads the list of restaurants to scrape from a `Name,Ranking,Url` CSV file."""
import csv
import os
from typing import Dict, List

from review_scraper.core.exceptions import InputFileError
from review_scraper.core.logger import get_logger
from review_scraper.models.records import Entity

logger = get_logger(__name__)

REQUIRED_COLUMNS = ("Name", "Ranking", "Url")


def load_entities(path: str) -> List[Entity]:
    """
    Loads entities in file order. Rows repeating an earlier url are dropped.

    Raises:
        InputFileError: If the file is missing, unreadable, lacks a required
                        column, or has a row without a url.
    """
    if not os.path.isfile(path):
        raise InputFileError(path, "file does not exist")

    entities: Dict[str, Entity] = {}
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            missing = [column for column in REQUIRED_COLUMNS if column not in (reader.fieldnames or [])]
            if missing:
                raise InputFileError(path, f"missing column(s): {', '.join(missing)}")

            for line_number, row in enumerate(reader, start=2):
                url = (row.get("Url") or "").strip()
                if not url:
                    raise InputFileError(path, f"row {line_number} has no Url")
                if url in entities:
                    logger.warning(f"Skipping duplicate url on row {line_number}: {url}")
                    continue
                entities[url] = Entity(
                    name=(row.get("Name") or "").strip(),
                    ranking=(row.get("Ranking") or "").strip(),
                    url=url,
                )
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise InputFileError(path, f"cannot be read: {e}")

    logger.info(f"Loaded {len(entities)} restaurants from {path}")
    return list(entities.values())
