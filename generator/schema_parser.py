"""Parse extracted Moodle schema JSON into a typed schema tree.

The extractor emits one node per external_description:
- external_value             -> {"type": "integer"|"number"|"boolean"|"string", ...}
- external_single_structure  -> {"type": "object", "properties": {...}, "required": [...]}
- external_multiple_structure -> {"type": "array", "items": {...}}
- anything it can't classify -> {"type": "unknown", "class": "..."}

Handles:
- Required flags on scalars (VALUE_REQUIRED / VALUE_OPTIONAL / VALUE_DEFAULT)
- Declared defaults, including an explicit null default
- allownull -> nullable
- Required lists naming keys that don't exist (dropped)
- Missing array item schemas
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

SCALAR_TYPES = ("integer", "number", "boolean", "string")

_PYTHON_SCALARS: dict[str, str] = {
    "integer": "int",
    "number": "float",
    "boolean": "bool",
    "string": "str",
}


class _Missing:
    """Marker for 'no default declared', distinct from a null default."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclass(frozen=True)
class ScalarSchema:
    type: str
    description: str = ""
    required: bool | None = None
    default: Any = MISSING
    nullable: bool = False

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING


@dataclass(frozen=True)
class ObjectSchema:
    properties: dict[str, SchemaValue] = field(default_factory=dict)
    required: tuple[str, ...] = ()
    description: str = ""

    def is_required(self, name: str) -> bool:
        """A property is required if listed, or if its own flag says so."""
        if name in self.required:
            return True
        prop = self.properties.get(name)
        return isinstance(prop, ScalarSchema) and prop.required is True


@dataclass(frozen=True)
class ArraySchema:
    items: SchemaValue | None = None
    description: str = ""


@dataclass(frozen=True)
class UnknownSchema:
    type_name: str = "unknown"


SchemaValue = Union[ScalarSchema, ObjectSchema, ArraySchema, UnknownSchema]


@dataclass(frozen=True)
class ServiceRef:
    shortname: str
    name: str


@dataclass(frozen=True)
class FunctionDescriptor:
    name: str
    description: str = ""
    type: str = "read"
    ajax: bool = False
    login_required: bool = True
    readonly_session: bool = True
    capabilities: str = ""
    services: tuple[ServiceRef, ...] = ()
    parameters: SchemaValue | None = None
    returns: SchemaValue | None = None
    classname: str | None = None
    methodname: str | None = None


@dataclass(frozen=True)
class SchemaDocument:
    moodle_version: str
    moodle_release: str
    generated_at: str
    functions: tuple[FunctionDescriptor, ...] = ()


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def parse_schema_value(raw: Any) -> SchemaValue | None:
    """Convert one raw schema node to a SchemaValue. None stays None."""
    if raw is None:
        return None
    if not isinstance(raw, dict):
        return UnknownSchema(type(raw).__name__)

    schema_type = raw.get("type")

    if schema_type in SCALAR_TYPES:
        required = raw.get("required")
        return ScalarSchema(
            type=schema_type,
            description=_text(raw.get("description")),
            required=required if isinstance(required, bool) else None,
            default=raw["default"] if "default" in raw else MISSING,
            nullable=bool(raw.get("nullable", False)),
        )

    if schema_type == "object":
        raw_props = raw.get("properties") or {}
        # PHP encodes an empty associative array as []
        if not isinstance(raw_props, dict):
            raw_props = {}
        properties: dict[str, SchemaValue] = {}
        for name, prop in raw_props.items():
            parsed = parse_schema_value(prop)
            properties[name] = parsed if parsed is not None else UnknownSchema("null")
        listed = set(raw.get("required") or [])
        required = tuple(name for name in properties if name in listed)
        return ObjectSchema(
            properties=properties,
            required=required,
            description=_text(raw.get("description")),
        )

    if schema_type == "array":
        return ArraySchema(
            items=parse_schema_value(raw.get("items")),
            description=_text(raw.get("description")),
        )

    return UnknownSchema(str(schema_type or raw.get("class") or "unknown"))


def parse_function(raw: dict[str, Any]) -> FunctionDescriptor:
    """Parse one function record. A record without a name raises KeyError."""
    services = tuple(
        ServiceRef(shortname=_text(s.get("shortname")), name=_text(s.get("name")))
        for s in raw.get("services") or []
    )
    return FunctionDescriptor(
        name=raw["name"],
        classname=raw.get("classname"),
        methodname=raw.get("methodname"),
        description=_text(raw.get("description")),
        type=raw.get("type") or "read",
        ajax=bool(raw.get("ajax", False)),
        login_required=bool(raw.get("loginrequired", True)),
        readonly_session=bool(raw.get("readonlysession", True)),
        capabilities=_text(raw.get("capabilities")),
        services=services,
        parameters=parse_schema_value(raw.get("parameters")),
        returns=parse_schema_value(raw.get("returns")),
    )


def parse_document(raw: dict[str, Any]) -> SchemaDocument:
    """Parse a whole schema document, keeping function order."""
    return SchemaDocument(
        moodle_version=str(raw.get("moodleVersion") or "unknown"),
        moodle_release=str(raw.get("moodleRelease") or "unknown"),
        generated_at=str(raw.get("generatedAt") or "unknown"),
        functions=tuple(parse_function(f) for f in raw.get("functions") or []),
    )


def resolve_python_type(schema: SchemaValue | None, object_name: str | None = None) -> str:
    """Resolve a SchemaValue to a Python type expression.

    ``object_name`` is the TypedDict name to use for an object with
    properties; without one such objects fall back to dict[str, Any].
    """
    if schema is None:
        return "Any"

    if isinstance(schema, ScalarSchema):
        py_type = _PYTHON_SCALARS[schema.type]
        return f"{py_type} | None" if schema.nullable else py_type

    if isinstance(schema, ArraySchema):
        if schema.items is None:
            return "list[Any]"
        return f"list[{resolve_python_type(schema.items, object_name)}]"

    if isinstance(schema, ObjectSchema):
        if schema.properties and object_name:
            return object_name
        return "dict[str, Any]"

    return "Any"
