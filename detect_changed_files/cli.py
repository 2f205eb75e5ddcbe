from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from detect_changed_files.changes import read_changed_files
from detect_changed_files.config import load_config
from detect_changed_files.errors import DetectChangedFilesError
from detect_changed_files.groups import EvaluationContext, evaluate_groups
from detect_changed_files.logging_setup import init_logging
from detect_changed_files.report import format_json, format_text


VERSION = "0.3.0"

LOGGER = logging.getLogger(__name__)

DESCRIPTION = """\
Read changed file paths from stdin (typically the output of
'git diff --name-only') and report, for each group of patterns in the
configuration file, whether any changed file matches it.
"""

EPILOG = """\
examples:
  git diff --name-only | detect-changed-files config.conf
  git diff --name-only --cached | detect-changed-files config.yaml
  git diff --name-only HEAD~1 HEAD | detect-changed-files --format text config.toml

patterns:
  *   matches any sequence of characters except /
  ?   matches any single character except /
  **  matches zero or more path components

configuration formats (chosen by file suffix):
  .yaml/.yml  mapping of group name to a list of patterns
  .toml       table of group name to an array of patterns
  other       '[group]' headers, each followed by one pattern per line
"""


class ExitCode:
    ok = 0
    error = 1
    usage = 2


def cmd_check(args: argparse.Namespace) -> int:
    try:
        config = load_config(Path(args.config))
        changed = read_changed_files(sys.stdin.buffer)
    except (OSError, DetectChangedFilesError) as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.error

    results = evaluate_groups(config.groups, changed, EvaluationContext(logger=LOGGER))

    if args.format == "text":
        print(format_text(results))
    else:
        print(format_json(results))
    return ExitCode.ok


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="detect-changed-files",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-V", "--version", action="version", version=VERSION)
    p.add_argument("--format", choices=["json", "text"], default="json", help="Output format (default: json)")
    p.add_argument("--log-level", default="WARNING", help="Logging level written to stderr (default: WARNING)")
    p.add_argument("--log-file", help="Also write logs to this file")
    p.add_argument("config", help="Path to the configuration file")
    p.set_defaults(func=cmd_check)

    args = p.parse_args(argv)
    try:
        init_logging(args.log_level, args.log_file)
    except OSError as e:
        print(f"error: cannot open log file: {e}", file=sys.stderr)
        return ExitCode.error
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
