"""
Historical query log reader.

The log is plain text, one raw query per line. Lines are normalized and
blank results are skipped.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from sidekick.autocomplete.frequency import FrequencyTable
from sidekick.preprocessing.normalizer import normalize_query

logger = logging.getLogger(__name__)


def iter_query_log(path: Path) -> Iterator[str]:
    """
    Yield every non-blank normalized query in the log at *path*.

    Raises ``FileNotFoundError`` / ``OSError`` if the file cannot be read.
    """
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            query = normalize_query(line)
            if query:
                yield query


def read_query_log(path: Path) -> tuple[FrequencyTable, int]:
    """
    Count the queries of the log at *path*.

    The whole file is read before anything is returned, so callers never
    see a partially counted log. Returns ``(frequencies, line_count)``
    where *line_count* is the number of non-blank queries.
    """
    frequencies = FrequencyTable()
    lines = 0
    for query in iter_query_log(path):
        frequencies.increment(query)
        lines += 1

    logger.info("Read %d queries (%d distinct) from %s", lines, len(frequencies), path)
    return frequencies, lines
