"""Entry point: python -m generator [schema ...]

Reads schemas/<branch>.json (or the given files), writes
openapi/<branch>.json, openapi/<branch>.yaml and
moodle_ws/generated/<branch>.py.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .codegen import generate, write_openapi
from .context_builder import build_context
from .loader import (
    BINDINGS_DIR,
    OPENAPI_DIR,
    list_schema_files,
    load_schema,
    resolve_schema_arg,
)
from .naming import module_name
from .openapi import to_openapi


def process_schema(
    schema_path: Path,
    openapi_dir: Path = OPENAPI_DIR,
    bindings_dir: Path | None = BINDINGS_DIR,
) -> str:
    """Generate every artifact for one schema file. Returns its base name."""
    name = schema_path.stem
    print(f"Processing schema: {name}")

    document = load_schema(schema_path)
    write_openapi(to_openapi(document), name, openapi_dir)

    if bindings_dir is not None:
        generate(build_context(document, module_name(name)), bindings_dir)

    return name


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m generator",
        description="Generate OpenAPI documents and typed bindings from Moodle schemas.",
    )
    parser.add_argument(
        "schemas",
        nargs="*",
        help="Schema files (*.json) or branch names under schemas/. Default: all.",
    )
    parser.add_argument("--schemas-dir", type=Path, default=None)
    parser.add_argument("--openapi-dir", type=Path, default=OPENAPI_DIR)
    parser.add_argument("--bindings-dir", type=Path, default=BINDINGS_DIR)
    parser.add_argument(
        "--no-bindings",
        action="store_true",
        help="Only write OpenAPI documents.",
    )
    args = parser.parse_args(argv)

    if args.schemas:
        schema_files = [resolve_schema_arg(a, args.schemas_dir) for a in args.schemas]
    else:
        schema_files = list_schema_files(args.schemas_dir)

    if not schema_files:
        print("No schema files found.")
        return 0

    bindings_dir = None if args.no_bindings else args.bindings_dir
    missing = False
    for schema_file in schema_files:
        if not schema_file.is_file():
            print(f"Schema file not found: {schema_file}", file=sys.stderr)
            missing = True
            continue
        process_schema(schema_file, args.openapi_dir, bindings_dir)

    print("\nGeneration complete!")
    return 1 if missing else 0


if __name__ == "__main__":
    sys.exit(main())
