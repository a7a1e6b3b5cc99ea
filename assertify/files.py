"""Line-oriented file reading and delimited file joins."""

import logging
from pathlib import Path
from typing import List, Union

from assertify.exceptions import ConfigurationError, ResourceReadError
from assertify.relational import JoinRow, inner_join, left_join

logger = logging.getLogger(__name__)

PROGRESS_EVERY_LINES = 100_000

JOIN_HOW = ("inner", "left")


def read_lines(path: Union[str, Path], encoding: str = "utf-8") -> List[str]:
    """Read a text file into a list of lines without line terminators.

    Raises:
        ResourceReadError: If the file cannot be opened or read
    """
    lines: List[str] = []
    logger.info("Reading file: %s", path)
    try:
        with open(path, "r", encoding=encoding) as f:
            for line in f:
                lines.append(line.rstrip("\r\n"))
                if len(lines) % PROGRESS_EVERY_LINES == 0:
                    logger.info("%d lines read from %s", len(lines), path)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read %s: %s", path, e)
        raise ResourceReadError(f"Cannot read {path}: {e}") from e
    return lines


def _column(separator: str, index: int):
    def extract(line: str) -> str:
        return line.split(separator)[index]

    return extract


def join_files(
    left_path: Union[str, Path],
    left_separator: str,
    left_column: int,
    right_path: Union[str, Path],
    right_separator: str,
    right_column: int,
    how: str = "inner",
) -> List[JoinRow]:
    """Join two delimited text files on one column each.

    Args:
        left_path: Left file
        left_separator: Column separator of the left file
        left_column: Zero-based join column in the left file
        right_path: Right file
        right_separator: Column separator of the right file
        right_column: Zero-based join column in the right file
        how: ``"inner"`` or ``"left"``

    Returns:
        Joined rows holding the raw lines of both sides

    Raises:
        ConfigurationError: If ``how`` is not a known join type
        ResourceReadError: If a file cannot be read
        JoinError: If a line lacks the join column
    """
    if how not in JOIN_HOW:
        raise ConfigurationError(f"Unknown join type {how!r}, expected one of {', '.join(JOIN_HOW)}")

    left_lines = read_lines(left_path)
    right_lines = read_lines(right_path)
    join = inner_join if how == "inner" else left_join
    rows = join(
        left_lines,
        right_lines,
        _column(left_separator, left_column),
        _column(right_separator, right_column),
    )
    logger.info(
        "%s join of %d and %d lines produced %d rows", how, len(left_lines), len(right_lines), len(rows)
    )
    return rows
