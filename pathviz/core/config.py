# pathviz/core/config.py
#!/usr/bin/env python3
"""
Defaults and option lookup.

- CLI: --name=value (last one wins)
- ENV: PATHVIZ_<NAME>
"""

import os
import sys
from pathlib import Path
from typing import List, Optional

GRID_SIZE = 25
WALL_PROBABILITY = 0.25
DEFAULT_SPEED = 50
DEFAULT_ALGORITHM = "astar"

MAP_DIR = Path(__file__).resolve().parents[2] / "maps"


def resolve_option(name: str, default: Optional[str] = None,
                   argv: Optional[List[str]] = None) -> Optional[str]:
    value = os.getenv(f"PATHVIZ_{name.upper().replace('-', '_')}", default)
    prefix = f"--{name}="
    for arg in (sys.argv[1:] if argv is None else argv):
        if arg.startswith(prefix):
            value = arg.split("=", 1)[1]
    return value


def resolve_int(name: str, default: int, argv: Optional[List[str]] = None) -> int:
    raw = resolve_option(name, None, argv)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"option {name} expects an integer, got {raw!r}") from None
