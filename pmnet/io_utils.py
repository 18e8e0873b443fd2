"""Single place for reading the source CSVs and the constants file"""
import csv
import json
import os
from typing import Any, Dict, Iterator, List, Optional

import pandas as pd

from pmnet.activities import normalize_header
from pmnet.logging import get_logger
from pmnet.models import NetworkConstants

logger = get_logger(__name__)

CONSTANTS_ENV = "PMNET_CONSTANTS"
DATA_DIR_ENV = "PMNET_DATA_DIR"
LOG_LEVEL_ENV = "PMNET_LOG_LEVEL"


def load_constants(constants_file: Optional[str] = None) -> NetworkConstants:
    """Load constants.json, then apply environment overrides.

    A missing file is not an error: every setting has a default.
    """
    path = constants_file or os.environ.get(CONSTANTS_ENV, "constants.json")
    raw: Dict[str, Any] = {}
    if os.path.isfile(path):
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    constants = NetworkConstants(**raw)

    data_dir = os.environ.get(DATA_DIR_ENV)
    if data_dir:
        constants.data.directory = data_dir
    log_level = os.environ.get(LOG_LEVEL_ENV)
    if log_level:
        constants.logging.level = log_level
    return constants


def merge_same_headers(frame: pd.DataFrame) -> pd.DataFrame:
    """Collapse columns whose headers normalized to the same key.

    Per row, the first non-blank value across those columns wins.
    """
    if not frame.columns.duplicated().any():
        return frame
    merged = {}
    for key in dict.fromkeys(frame.columns):
        same = frame.loc[:, frame.columns == key]
        blank = same.apply(lambda col: col.str.strip() == "")
        merged[key] = same.mask(blank).bfill(axis=1).iloc[:, 0].fillna("")
    return pd.DataFrame(merged, index=frame.index)


def read_activity_rows(path: str) -> List[Dict[str, str]]:
    """Rows of the headed activity CSV, keyed by normalized header.

    Every cell stays a string; nothing is turned into NaN. Undecodable bytes
    become U+FFFD and are left for validation to report. A file with no
    content at all reads as zero rows.
    """
    try:
        frame = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            encoding="utf-8-sig",
            encoding_errors="replace",
            index_col=False,
        )
    except pd.errors.EmptyDataError:
        logger.info("source_read", path=path, rows=0)
        return []

    # short rows leave NaN behind even with NA conversion off
    frame = merge_same_headers(frame.fillna("").rename(columns=normalize_header))
    rows = frame.to_dict(orient="records")
    logger.info("source_read", path=path, rows=len(rows))
    return rows


def read_matrix_rows(path: str) -> Iterator[List[str]]:
    """Rows of the header-less matrix CSV, each with its own length.

    Single pass; blank lines are not rows. Undecodable bytes become U+FFFD.
    """
    count = 0
    with open(path, "r", encoding="utf-8-sig", errors="replace", newline="") as f:
        for row in csv.reader(f):
            if not row:
                continue
            count += 1
            yield row
    logger.info("source_read", path=path, rows=count)
