"""
Row ingestion - read the resource catalog into field-name -> string mappings.

No type coercion happens here: difficulty, multi-value and hierarchical
fields are interpreted by the entity resolver.
"""

import io
import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

# Catalog columns
COL_RESOURCE_NAME = "Resource Name"
COL_LINK = "Link"
COL_AREA = "Area"
COL_MODULE = "Module"
COL_TAGS = "Tags"
COL_TYPE = "Type"
COL_DIFFICULTY = "Difficulty"
COL_PREREQUISITES = "Prerequisite module(s)"
COL_TAG_PREREQUISITES = "Tag Prerequisites"

CATALOG_COLUMNS = [
    COL_RESOURCE_NAME,
    COL_LINK,
    COL_AREA,
    COL_MODULE,
    COL_TAGS,
    COL_TYPE,
    COL_DIFFICULTY,
    COL_PREREQUISITES,
    COL_TAG_PREREQUISITES,
]


def parse_rows(text: str, delimiter: str = ",") -> list[dict[str, str]]:
    """
    Parse delimited text with a header row into one mapping per data row.

    Header names and values are trimmed and missing values become "".
    Lines that are blank or whitespace-only are skipped; a line of bare
    delimiters is still a row. Empty input gives an empty list.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return []

    try:
        df = pd.read_csv(
            io.StringIO("\n".join(lines)),
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
            index_col=False,
        )
    except pd.errors.EmptyDataError:
        return []

    if df.empty:
        return []

    df = df.fillna("")
    df.columns = [str(c).strip() for c in df.columns]
    df = df.apply(lambda col: col.str.strip())

    rows = df.to_dict(orient="records")
    logger.debug(f"Parsed {len(rows)} rows with columns {list(df.columns)}")
    return rows


def missing_columns(columns) -> list[str]:
    """Catalog columns absent from the given header, in catalog order."""
    present = set(columns)
    return [column for column in CATALOG_COLUMNS if column not in present]


def read_rows(path: Path, delimiter: str = ",") -> list[dict[str, str]]:
    """
    Read a catalog file into row mappings.

    Raises:
        FileNotFoundError: If the catalog file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    logger.info(f"Loading catalog from {path}...")
    text = path.read_text(encoding="utf-8-sig")
    rows = parse_rows(text, delimiter=delimiter)
    if rows:
        absent = missing_columns(rows[0])
        if absent:
            logger.warning(f"Catalog is missing columns: {', '.join(absent)}")
    logger.info(f"Loaded {len(rows)} catalog rows")
    return rows
