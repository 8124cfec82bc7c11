#!/usr/bin/env python3
"""Lightweight validator for allocation preset JSON files."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from budget_allocator.config import PRESETS_DIR
from budget_allocator.derivation import derive
from budget_allocator.formatting import format_percent
from budget_allocator.presets import load_preset


def validate_preset(path: Path) -> Dict[str, str]:
    try:
        model = load_preset(path)
    except (OSError, ValueError) as e:
        return {"name": path.stem, "errors": str(e)}

    view = derive(model)
    if not view.is_balanced:
        return {
            "name": path.stem,
            "errors": f"percents add up to {format_percent(view.all_percent_total)}, not 100%",
        }
    return {}


def main(preset_dir: Optional[Path] = None) -> int:
    directory = preset_dir or PRESETS_DIR
    if not directory.exists():
        print(f"Preset directory not found: {directory}")
        return 1

    issues = []
    for path in sorted(directory.glob('*.json')):
        result = validate_preset(path)
        if result:
            issues.append((path.name, result['errors']))

    if issues:
        print("Preset validation failed:")
        for filename, message in issues:
            print(f"  - {filename}: {message}")
        return 1

    print("All presets validated successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
