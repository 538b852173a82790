"""Tests for the schema_parser module."""

from generator.schema_parser import (
    MISSING,
    ArraySchema,
    ObjectSchema,
    ScalarSchema,
    UnknownSchema,
    parse_document,
    parse_function,
    parse_schema_value,
    resolve_python_type,
)


class TestParseSchemaValue:
    """Raw extractor nodes -> SchemaValue variants."""

    def test_none(self):
        assert parse_schema_value(None) is None

    def test_scalar(self):
        node = parse_schema_value({"type": "integer", "description": "id", "required": True})
        assert node == ScalarSchema(type="integer", description="id", required=True)
        assert not node.has_default

    def test_scalar_default_and_nullable(self):
        node = parse_schema_value(
            {"type": "string", "required": False, "default": "x", "nullable": True},
        )
        assert node.default == "x"
        assert node.nullable is True
        assert node.required is False

    def test_explicit_null_default_is_a_default(self):
        node = parse_schema_value({"type": "string", "default": None})
        assert node.has_default
        assert node.default is None

    def test_missing_default_sentinel(self):
        assert parse_schema_value({"type": "boolean"}).default is MISSING

    def test_object_keeps_order(self):
        node = parse_schema_value({
            "type": "object",
            "properties": {"b": {"type": "string"}, "a": {"type": "integer"}},
            "required": ["a"],
        })
        assert isinstance(node, ObjectSchema)
        assert list(node.properties) == ["b", "a"]
        assert node.required == ("a",)

    def test_required_filtered_to_known_keys(self):
        node = parse_schema_value({
            "type": "object",
            "properties": {"a": {"type": "integer"}},
            "required": ["a", "ghost"],
        })
        assert node.required == ("a",)

    def test_php_empty_properties_list(self):
        """PHP encodes an empty associative array as []."""
        node = parse_schema_value({"type": "object", "properties": []})
        assert node == ObjectSchema()

    def test_array(self):
        node = parse_schema_value({"type": "array", "items": {"type": "string"}})
        assert node == ArraySchema(items=ScalarSchema(type="string"))

    def test_array_without_items(self):
        assert parse_schema_value({"type": "array"}).items is None

    def test_unknown(self):
        node = parse_schema_value({"type": "unknown", "class": "external_warnings"})
        assert node == UnknownSchema("unknown")

    def test_unrecognised_type(self):
        assert isinstance(parse_schema_value({"type": "date"}), UnknownSchema)

    def test_non_dict(self):
        assert isinstance(parse_schema_value("string"), UnknownSchema)


class TestObjectRequired:
    """Required-ness comes from the list or the scalar's own flag."""

    def test_listed(self):
        node = ObjectSchema(properties={"a": ScalarSchema("integer")}, required=("a",))
        assert node.is_required("a")

    def test_scalar_flag(self):
        node = ObjectSchema(properties={"a": ScalarSchema("integer", required=True)})
        assert node.is_required("a")

    def test_optional(self):
        node = ObjectSchema(properties={"a": ScalarSchema("integer", required=False)})
        assert not node.is_required("a")


class TestParseFunction:
    """Function records."""

    def test_defaults(self):
        func = parse_function({"name": "core_x_y"})
        assert func.type == "read"
        assert func.login_required is True
        assert func.services == ()
        assert func.parameters is None
        assert func.returns is None

    def test_document(self, document):
        assert document.moodle_version == "2024100700"
        assert document.generated_at == "2024-10-20T09:15:00+00:00"
        names = [f.name for f in document.functions]
        assert names[0] == "core_course_get_courses"
        assert len(names) == 5

    def test_services(self, document):
        func = document.functions[0]
        assert func.services[0].shortname == "moodle_mobile_app"
        assert func.classname == "core_course_external"

    def test_missing_metadata(self):
        doc = parse_document({"functions": []})
        assert doc.moodle_version == "unknown"
        assert doc.functions == ()


class TestResolvePythonType:
    """SchemaValue -> Python type expression."""

    def test_scalars(self):
        assert resolve_python_type(ScalarSchema("integer")) == "int"
        assert resolve_python_type(ScalarSchema("number")) == "float"
        assert resolve_python_type(ScalarSchema("boolean")) == "bool"
        assert resolve_python_type(ScalarSchema("string")) == "str"

    def test_nullable(self):
        assert resolve_python_type(ScalarSchema("integer", nullable=True)) == "int | None"

    def test_array(self):
        assert resolve_python_type(ArraySchema(ScalarSchema("string"))) == "list[str]"
        assert resolve_python_type(ArraySchema()) == "list[Any]"

    def test_object(self):
        obj = ObjectSchema(properties={"a": ScalarSchema("integer")})
        assert resolve_python_type(obj) == "dict[str, Any]"
        assert resolve_python_type(obj, "Named") == "Named"
        assert resolve_python_type(ObjectSchema(), "Named") == "dict[str, Any]"

    def test_unknown(self):
        assert resolve_python_type(UnknownSchema()) == "Any"
        assert resolve_python_type(None) == "Any"
