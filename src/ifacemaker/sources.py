"""
File system access for input sources and generated output.
"""

import glob
from pathlib import Path
from typing import Iterable, List

from ifacemaker.exceptions import SourceReadError
from ifacemaker.logging_config import logger


def is_valid_pattern(pattern: str) -> bool:
    """False for patterns with an unterminated character class such as `[`."""
    index = 0
    while index < len(pattern):
        char = pattern[index]
        if char == "\\":
            index += 2
            continue
        if char == "[":
            # a class needs at least one member before its closing bracket
            end = pattern.find("]", index + 2)
            if end < 0:
                return False
            index = end
        index += 1
    return True


def expand_patterns(patterns: Iterable[str]) -> List[str]:
    """
    Expands file names and glob patterns, preserving the given order.

    Patterns that match nothing contribute nothing; matches of a single
    pattern are sorted.

    Raises:
        SourceReadError: If a pattern is malformed.
    """
    files: List[str] = []
    for pattern in patterns:
        if not is_valid_pattern(pattern):
            raise SourceReadError(pattern, "syntax error in pattern")
        matches = sorted(glob.glob(pattern))
        if not matches:
            logger.debug(f"Pattern {pattern!r} matched no files")
        files.extend(matches)
    return files


def read_source(path: str) -> bytes:
    """
    Reads a source file.

    Raises:
        SourceReadError: If the file cannot be read.
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise SourceReadError(path, e.strerror or str(e)) from e


def write_output(path: str, text: str) -> None:
    """
    Writes generated code to a file.

    Raises:
        SourceReadError: If the file cannot be written.
    """
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as e:
        raise SourceReadError(path, e.strerror or str(e)) from e
    logger.info(f"Wrote {len(text)} bytes to {path}")
