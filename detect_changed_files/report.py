from __future__ import annotations

import json
from typing import Mapping


def format_json(results: Mapping[str, bool]) -> str:
    return json.dumps({name: bool(v) for name, v in results.items()}, indent=2, sort_keys=True)


def format_text(results: Mapping[str, bool]) -> str:
    return "\n".join(f"{name}: {'true' if results[name] else 'false'}" for name in sorted(results))
