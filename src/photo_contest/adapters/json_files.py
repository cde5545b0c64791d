"""Helpers for whole-file JSON ledgers."""

import json
from pathlib import Path


def read_json(path: Path, default: object) -> object:
    """Load a JSON document, returning ``default`` when the file is absent."""
    if not path.exists():
        return default
    return json.loads(path.read_text(encoding="utf-8"))


def write_json(path: Path, payload: object) -> None:
    """Rewrite a JSON document in place, pretty-printed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
    )
