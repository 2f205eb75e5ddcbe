from __future__ import annotations

import logging
import tomllib
from collections.abc import Hashable
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

from detect_changed_files.errors import ConfigParseError, InvalidEncodingError, MalformedGroupDefinitionError
from detect_changed_files.globmatch import MatchPath


LOGGER = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}
TOML_SUFFIXES = {".toml"}
COMMENT_PREFIXES = ("#", ";")


def parse_config(content: str) -> dict[str, list[str]]:
    """
    Parse the section-based format: a '[group]' header followed by one pattern per line.

    Blank lines and lines starting with '#' or ';' are skipped. A header with no
    patterns after it defines an empty group.
    """

    result: dict[str, list[str]] = {}
    current: list[str] | None = None

    for line_number, line in enumerate(content.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIXES):
            continue

        if stripped.startswith("[") and stripped.endswith("]"):
            if len(stripped) < 3:
                raise ConfigParseError("Invalid section header: too short", line=line_number)
            name = stripped[1:-1]
            if name in result:
                raise MalformedGroupDefinitionError(f"Duplicate section: '{name}'", line=line_number)
            current = result[name] = []
            continue

        if current is None:
            raise ConfigParseError("Item found before any section is defined", line=line_number)
        current.append(stripped)

    return result


class _UniqueKeyLoader(yaml.SafeLoader):
    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        seen: set[Any] = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                continue
            if key in seen:
                raise MalformedGroupDefinitionError(
                    f"Duplicate section: '{key}'",
                    line=key_node.start_mark.line + 1,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def _check_groups(data: Any, *, fmt: str) -> dict[str, list[str]]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedGroupDefinitionError(f"{fmt} config must be a mapping of group name to pattern list.")

    groups: dict[str, list[str]] = {}
    for name, patterns in data.items():
        if not isinstance(name, str):
            raise MalformedGroupDefinitionError(f"Group name must be a string: {name!r}")
        if not isinstance(patterns, list):
            raise MalformedGroupDefinitionError(f"Patterns of group '{name}' must be a list")
        for p in patterns:
            if not isinstance(p, str):
                raise MalformedGroupDefinitionError(f"Pattern in group '{name}' must be a string: {p!r}")
        groups[name] = list(patterns)
    return groups


def parse_yaml_config(content: str) -> dict[str, list[str]]:
    try:
        data = yaml.load(content, Loader=_UniqueKeyLoader)
    except yaml.MarkedYAMLError as e:
        line = e.problem_mark.line + 1 if e.problem_mark is not None else None
        raise ConfigParseError(str(e.problem or e), line=line) from e
    except yaml.YAMLError as e:
        raise ConfigParseError(str(e)) from e
    return _check_groups(data, fmt="YAML")


def parse_toml_config(content: str) -> dict[str, list[str]]:
    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(str(e)) from e
    return _check_groups(data, fmt="TOML")


def decode_utf8(data: bytes, *, source: str, line: int | None = None) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidEncodingError(source, e.reason, line=line) from e


@dataclass(frozen=True)
class GroupsConfig:
    groups: Mapping[str, tuple[MatchPath, ...]]

    @staticmethod
    def from_raw(raw: dict[str, list[str]]) -> "GroupsConfig":
        groups = {name: tuple(MatchPath.from_str(p) for p in patterns) for name, patterns in raw.items()}
        return GroupsConfig(groups=MappingProxyType(groups))

    def __len__(self) -> int:
        return len(self.groups)


def load_config(path: Path) -> GroupsConfig:
    text = decode_utf8(path.read_bytes(), source=str(path))

    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        raw = parse_yaml_config(text)
    elif suffix in TOML_SUFFIXES:
        raw = parse_toml_config(text)
    else:
        raw = parse_config(text)

    config = GroupsConfig.from_raw(raw)
    LOGGER.debug(
        "loaded %d group(s), %d pattern(s) from %s",
        len(config),
        sum(len(p) for p in config.groups.values()),
        path,
    )
    return config
