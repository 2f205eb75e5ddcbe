from __future__ import annotations

from dataclasses import dataclass, field


DOUBLE_STAR = "**"


@dataclass(frozen=True)
class PathComponent:
    text: str

    @property
    def is_double_star(self) -> bool:
        return self.text == DOUBLE_STAR


def split_components(path: str) -> tuple[PathComponent, ...]:
    """Split a path on '/' and drop empty segments ('a//b/' == 'a/b')."""
    return tuple(PathComponent(part) for part in path.split("/") if part)


@dataclass(frozen=True)
class MatchPath:
    components: tuple[PathComponent, ...]
    source: str = field(default="", compare=False)

    @staticmethod
    def from_str(path: str) -> "MatchPath":
        return MatchPath(components=split_components(path), source=path)


def match_component(pattern: str, text: str) -> bool:
    """
    Match a single path component against a wildcard pattern.

    Semantics:
    - A literal character matches itself.
    - '?' matches exactly one character.
    - '*' matches zero or more characters.

    Neither argument may contain '/'. The search over '*' consumption lengths
    runs on an explicit stack, so pattern length never reaches the recursion
    limit. Results are memoized per call on the (pattern_index, text_index) pair.
    """

    p_len = len(pattern)
    t_len = len(text)
    memo: dict[tuple[int, int], bool] = {}

    def settle(p: int, t: int) -> tuple[bool | None, int, int]:
        # Literals and '?' have a single continuation; walk them up to the next '*'.
        i, j = p, t
        while i < p_len and j < t_len and pattern[i] != "*":
            if pattern[i] != "?" and pattern[i] != text[j]:
                return False, i, j
            i += 1
            j += 1

        if i == p_len:
            return j == t_len, i, j
        if j == t_len:
            return all(c == "*" for c in pattern[i:]), i, j
        # A run of '*' consumes the same text as a single one.
        while i + 1 < p_len and pattern[i + 1] == "*":
            i += 1
        return None, i, j

    result, i, j = settle(0, 0)
    if result is not None:
        return result

    # Each frame: [state, star index, text index, next consumption length].
    stack: list[list] = [[(0, 0), i, j, 0]]
    while stack:
        frame = stack[-1]
        state, i, j, n = frame

        if j + n > t_len:
            memo[state] = False
            stack.pop()
            continue

        frame[3] = n + 1
        child = (i + 1, j + n)
        if child in memo:
            found = memo[child]
        else:
            found, ci, cj = settle(*child)
            if found is None:
                stack.append([child, ci, cj, 0])
                continue
            memo[child] = found
        if found:
            return True

    return False


def is_match(pattern: MatchPath, text: MatchPath) -> bool:
    """
    Match a full pattern path against a candidate path, component by component.

    '**' as the last pattern component absorbs whatever text is left. Elsewhere
    it aligns one-to-one with the next text component and then lets following
    mismatches skip text components until the next pattern component matches.
    This is a single forward pass: it does not backtrack to try other splits.
    """

    if not pattern.components:
        return not text.components

    p_parts = pattern.components
    t_parts = text.components
    p_idx = 0
    t_idx = 0
    double_star = False

    while p_idx < len(p_parts) and t_idx < len(t_parts):
        pat = p_parts[p_idx]

        if pat.is_double_star:
            if p_idx + 1 == len(p_parts):
                return True
            double_star = True
            p_idx += 1
            t_idx += 1
            continue

        if match_component(pat.text, t_parts[t_idx].text):
            double_star = False
            p_idx += 1
            t_idx += 1
        elif double_star:
            t_idx += 1
        else:
            return False

    return p_idx == len(p_parts) and t_idx == len(t_parts)