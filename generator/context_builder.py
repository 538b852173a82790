"""Build Jinja2 template context for typed Python bindings.

Walks each function's parameter and return trees, turns every object with
declared keys into a TypedDict (nested objects first, so the generated
module never needs forward references), and assembles one async wrapper
descriptor per function for bindings.py.j2.

Nested TypedDict names extend their parent's name:

  CoreCourseGetCoursesRequest
  CoreCourseGetCoursesRequestOptions          (object property "options")
  CoreCourseGetCoursesResponseItem            (array items)
  CoreCourseGetCoursesResponseItemCourseformatoptionsItem
"""

from __future__ import annotations

import re
from typing import Any

from .naming import binding_name, is_safe_field_name, tag_for_function, to_pascal_case
from .schema_parser import (
    ArraySchema,
    FunctionDescriptor,
    ObjectSchema,
    SchemaDocument,
    SchemaValue,
    resolve_python_type,
)


def _strip_html(text: str) -> str:
    """Strip HTML tags and collapse whitespace."""
    text = re.sub(r"<[^>]+>", "", text)
    text = re.sub(r"\s+", " ", text).strip()
    return text


def _docstring_text(text: str) -> str:
    """Make description text safe inside a triple-quoted docstring."""
    text = _strip_html(text)
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _type_suffix(prop_name: str) -> str:
    return to_pascal_case(re.sub(r"\W", "_", prop_name))


class _DefinitionCollector:
    """Accumulate TypedDict and alias definitions in dependency order."""

    def __init__(self) -> None:
        self.definitions: list[dict[str, Any]] = []
        self._names: set[str] = set()

    def _reserve(self, name: str) -> str:
        candidate = name
        counter = 2
        while candidate in self._names:
            candidate = f"{name}{counter}"
            counter += 1
        self._names.add(candidate)
        return candidate

    def type_for(self, schema: SchemaValue | None, name: str) -> str:
        """Return the Python type expression for a node, defining types as needed."""
        if isinstance(schema, ObjectSchema) and schema.properties:
            return self._define_typeddict(schema, name)
        if isinstance(schema, ArraySchema) and schema.items is not None:
            return f"list[{self.type_for(schema.items, f'{name}Item')}]"
        return resolve_python_type(schema)

    def _define_typeddict(self, schema: ObjectSchema, name: str) -> str:
        name = self._reserve(name)
        fields = []
        for prop_name, prop in schema.properties.items():
            fields.append({
                "name": prop_name,
                "key": repr(prop_name),
                "type": self.type_for(prop, f"{name}{_type_suffix(prop_name)}"),
                "required": schema.is_required(prop_name),
                "description": _strip_html(getattr(prop, "description", "") or ""),
            })
        self.definitions.append({
            "kind": "typeddict",
            "name": name,
            "description": _docstring_text(schema.description),
            "fields": fields,
            "functional": not all(is_safe_field_name(f["name"]) for f in fields),
        })
        return name

    def define_root(self, schema: SchemaValue | None, name: str, *, empty: str) -> str:
        """Define the top-level request/response type for a function.

        ``empty`` is the alias target used when the function declares nothing.
        """
        if isinstance(schema, ObjectSchema) and schema.properties:
            return self._define_typeddict(schema, name)
        target = empty if schema is None else self.type_for(schema, name)
        name = self._reserve(name)
        self.definitions.append({"kind": "alias", "name": name, "type": target})
        return name


def _has_required_params(schema: SchemaValue | None) -> bool:
    if not isinstance(schema, ObjectSchema):
        return False
    return any(schema.is_required(prop) for prop in schema.properties)


def _build_function(
    func: FunctionDescriptor,
    collector: _DefinitionCollector,
) -> dict[str, Any]:
    pascal = to_pascal_case(func.name)
    request_type = collector.define_root(
        func.parameters, f"{pascal}Request", empty="dict[str, Any]",
    )
    response_type = collector.define_root(
        func.returns, f"{pascal}Response", empty="None",
    )

    summary = _docstring_text(func.description) or f"Call {func.name}."
    return {
        "name": binding_name(func.name),
        "wsfunction": func.name,
        "summary": summary,
        "type": func.type,
        "login_required": func.login_required,
        "capabilities": _docstring_text(func.capabilities),
        "tag": tag_for_function(func.name),
        "request_type": request_type,
        "response_type": response_type,
        "params_required": _has_required_params(func.parameters),
    }


def _deduplicate_binding_names(functions: list[dict[str, Any]]) -> None:
    """Ensure all binding names are unique by appending a counter if needed."""
    seen: dict[str, int] = {}
    for function in functions:
        name = function["name"]
        if name in seen:
            seen[name] += 1
            function["name"] = f"{name}_{seen[name]}"
        else:
            seen[name] = 1


def build_context(document: SchemaDocument, module_name: str) -> dict[str, Any]:
    """Build the full template context for one schema document."""
    collector = _DefinitionCollector()
    functions: list[dict[str, Any]] = []
    tags: dict[str, list[str]] = {}

    for func in document.functions:
        functions.append(_build_function(func, collector))

    _deduplicate_binding_names(functions)

    for function in functions:
        tags.setdefault(function["tag"], []).append(function["name"])

    return {
        "module_name": module_name,
        "definitions": collector.definitions,
        "functions": functions,
        "tags": dict(sorted(tags.items())),
        "function_count": len(functions),
        "moodle_version": document.moodle_version,
        "moodle_release": document.moodle_release,
        "generated_at": document.generated_at,
    }
