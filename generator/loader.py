"""Locate and load Moodle schema documents.

Schema documents are produced by the PHP extraction script, one per Moodle
branch, and live in schemas/<branch>.json (e.g. schemas/MOODLE_405_STABLE.json).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .schema_parser import SchemaDocument, parse_document

ROOT_DIR = Path(__file__).parent.parent
SCHEMAS_DIR = ROOT_DIR / "schemas"
OPENAPI_DIR = ROOT_DIR / "openapi"
BINDINGS_DIR = ROOT_DIR / "moodle_ws" / "generated"


def read_json(path: Path) -> dict[str, Any]:
    """Read a raw schema document from disk."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def load_schema(path: Path) -> SchemaDocument:
    """Load and parse a schema document."""
    return parse_document(read_json(path))


def list_schema_files(directory: Path | None = None) -> list[Path]:
    """Return every *.json schema in a directory, sorted by name."""
    schemas_dir = directory or SCHEMAS_DIR
    if not schemas_dir.is_dir():
        return []
    return sorted(schemas_dir.glob("*.json"))


def resolve_schema_arg(arg: str, directory: Path | None = None) -> Path:
    """Map a CLI argument to a schema path.

    Arguments ending in .json are taken as paths; anything else is a branch
    name looked up in the schemas directory.
    """
    if arg.endswith(".json"):
        return Path(arg)
    return (directory or SCHEMAS_DIR) / f"{arg}.json"
