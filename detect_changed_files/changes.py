from __future__ import annotations

import logging
from typing import BinaryIO

from detect_changed_files.config import decode_utf8
from detect_changed_files.globmatch import MatchPath


LOGGER = logging.getLogger(__name__)


def parse_changed_lines(data: bytes, *, source: str = "<stdin>") -> list[MatchPath]:
    """One path per line (as printed by `git diff --name-only`); blank lines are skipped."""
    files: list[MatchPath] = []
    for line_number, raw in enumerate(data.splitlines(), start=1):
        line = decode_utf8(raw, source=source, line=line_number).strip()
        if not line:
            continue
        files.append(MatchPath.from_str(line))
    LOGGER.debug("read %d changed path(s) from %s", len(files), source)
    return files


def read_changed_files(stream: BinaryIO, *, source: str = "<stdin>") -> list[MatchPath]:
    return parse_changed_lines(stream.read(), source=source)
