"""Render templates and write generated output.

Takes the context from context_builder and produces
moodle_ws/generated/<module>.py, and writes OpenAPI documents as
openapi/<name>.json and openapi/<name>.yaml.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jinja2

from .loader import BINDINGS_DIR, OPENAPI_DIR
from .yaml_emitter import to_yaml

TEMPLATE_DIR = Path(__file__).parent / "templates"


def render_bindings(context: dict[str, Any]) -> str:
    """Render the bindings template to source text."""
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    template = env.get_template("bindings.py.j2")
    return template.render(**context)


def generate(context: dict[str, Any], output_dir: Path | None = None) -> Path:
    """Render the bindings template and write <module_name>.py."""
    out_dir = output_dir or BINDINGS_DIR
    out_dir.mkdir(parents=True, exist_ok=True)
    output_path = out_dir / f"{context['module_name']}.py"
    output_path.write_text(render_bindings(context), encoding="utf-8")

    print(f"  Generated {output_path} ({context['function_count']} functions)")
    return output_path


def write_openapi(
    openapi: dict[str, Any],
    name: str,
    output_dir: Path | None = None,
) -> tuple[Path, Path]:
    """Write an OpenAPI document as <name>.json and <name>.yaml."""
    out_dir = output_dir or OPENAPI_DIR
    out_dir.mkdir(parents=True, exist_ok=True)

    json_path = out_dir / f"{name}.json"
    json_path.write_text(json.dumps(openapi, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"  Generated {json_path}")

    yaml_path = out_dir / f"{name}.yaml"
    yaml_path.write_text(to_yaml(openapi), encoding="utf-8")
    print(f"  Generated {yaml_path}")

    return json_path, yaml_path
