from __future__ import annotations

import re
from pathlib import Path


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def safe_case_id(case_id: str) -> str:
    """Turn a pytest node id into something usable as a directory name."""
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", case_id).strip("_") or "case"


def case_screenshot_dir(base_dir: Path, case_id: str) -> Path:
    screenshots = base_dir / "screenshots" / safe_case_id(case_id)
    ensure_dir(screenshots)
    return screenshots


def outcomes_path(base_dir: Path) -> Path:
    ensure_dir(base_dir)
    return base_dir / "outcomes.json"
