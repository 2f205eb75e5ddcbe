from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from detect_changed_files.globmatch import MatchPath, is_match


@dataclass(frozen=True)
class EvaluationContext:
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))


def evaluate_groups(
    groups: Mapping[str, Sequence[MatchPath]],
    candidates: Sequence[MatchPath],
    ctx: EvaluationContext | None = None,
) -> dict[str, bool]:
    """
    Decide, for every group, whether any candidate path matches any of its patterns.

    Every group is present in the result and starts out False. A group that has
    matched is skipped for the remaining candidates, so the result only depends
    on which pairs match, never on iteration order.
    """

    ctx = ctx or EvaluationContext()
    results = {name: False for name in groups}

    for candidate in candidates:
        for name, patterns in groups.items():
            if results[name]:
                continue
            for pattern in patterns:
                if is_match(pattern, candidate):
                    results[name] = True
                    ctx.logger.debug("group %r matched %r via %r", name, candidate.source, pattern.source)
                    break
        if all(results.values()):
            break

    ctx.logger.debug(
        "evaluated %d candidate(s) against %d group(s): %d matched",
        len(candidates),
        len(results),
        sum(results.values()),
    )
    return results
