"""Transform a parsed Moodle schema document into an OpenAPI 3.1 document.

Moodle serves every function from one endpoint and selects the function
with the wsfunction field. For code generators each function is modelled
as its own path, /webservice/rest/<function>, with a single POST operation
whose request and response bodies are named component schemas:

  core_course_get_courses -> CoreCourseGetCoursesRequest
                             CoreCourseGetCoursesResponse

The output depends only on the input document; the generation timestamp in
info.description is the document's own generatedAt.
"""

from __future__ import annotations

from typing import Any

from .naming import tag_for_function, to_pascal_case
from .schema_parser import (
    ArraySchema,
    FunctionDescriptor,
    ObjectSchema,
    ScalarSchema,
    SchemaDocument,
    SchemaValue,
)

OPENAPI_VERSION = "3.1.0"
PATH_PREFIX = "/webservice/rest/"
ERROR_SCHEMA = "MoodleError"
WARNING_SCHEMA = "MoodleWarning"
SECURITY_SCHEME = "wstoken"

_TAG_DESCRIPTIONS: dict[str, str] = {
    "core_auth": "Authentication functions",
    "core_blog": "Blog functions",
    "core_calendar": "Calendar functions",
    "core_cohort": "Cohort management",
    "core_comment": "Comment functions",
    "core_competency": "Competency framework",
    "core_completion": "Course completion",
    "core_course": "Course management",
    "core_customfield": "Custom fields",
    "core_enrol": "Enrollment functions",
    "core_fetch": "Data fetching",
    "core_files": "File management",
    "core_filters": "Filter functions",
    "core_form": "Form functions",
    "core_grades": "Grade functions",
    "core_group": "Group management",
    "core_message": "Messaging functions",
    "core_notes": "Notes functions",
    "core_output": "Output functions",
    "core_question": "Question bank",
    "core_rating": "Rating functions",
    "core_reportbuilder": "Report builder",
    "core_role": "Role management",
    "core_search": "Search functions",
    "core_session": "Session management",
    "core_table": "Table functions",
    "core_tag": "Tag functions",
    "core_user": "User management",
    "core_webservice": "Web service functions",
    "core_xapi": "xAPI functions",
    "mod_assign": "Assignment module",
    "mod_book": "Book module",
    "mod_chat": "Chat module",
    "mod_choice": "Choice module",
    "mod_data": "Database module",
    "mod_feedback": "Feedback module",
    "mod_folder": "Folder module",
    "mod_forum": "Forum module",
    "mod_glossary": "Glossary module",
    "mod_h5pactivity": "H5P activity module",
    "mod_imscp": "IMS content package",
    "mod_label": "Label module",
    "mod_lesson": "Lesson module",
    "mod_lti": "LTI module",
    "mod_page": "Page module",
    "mod_quiz": "Quiz module",
    "mod_resource": "Resource module",
    "mod_scorm": "SCORM module",
    "mod_survey": "Survey module",
    "mod_url": "URL module",
    "mod_wiki": "Wiki module",
    "mod_workshop": "Workshop module",
    "tool_dataprivacy": "Data privacy tools",
    "tool_lp": "Learning plans",
    "tool_mobile": "Mobile app support",
    "tool_policy": "Policy management",
    "tool_usertours": "User tours",
    "enrol_guest": "Guest enrollment",
    "enrol_manual": "Manual enrollment",
    "enrol_self": "Self enrollment",
    "message_airnotifier": "Airnotifier messaging",
    "message_popup": "Popup messaging",
    "gradereport_grader": "Grader report",
    "gradereport_overview": "Overview report",
    "gradereport_user": "User grade report",
}


def _open_object(description: str = "") -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object", "additionalProperties": True}
    if description:
        schema["description"] = description
    return schema


def schema_to_openapi(schema: SchemaValue | None) -> dict[str, Any]:
    """Map a SchemaValue onto an OpenAPI schema object."""
    if schema is None:
        return _open_object()

    if isinstance(schema, ScalarSchema):
        result: dict[str, Any] = {"type": schema.type}
        if schema.description:
            result["description"] = schema.description
        if schema.has_default:
            result["default"] = schema.default
        if schema.nullable:
            result["nullable"] = True
        return result

    if isinstance(schema, ArraySchema):
        result = {"type": "array", "items": schema_to_openapi(schema.items)}
        if schema.description:
            result["description"] = schema.description
        return result

    if isinstance(schema, ObjectSchema):
        # An object without declared keys has an unknown shape, not an empty one
        if not schema.properties:
            return _open_object(schema.description)

        properties = {
            name: schema_to_openapi(prop) for name, prop in schema.properties.items()
        }
        required = [name for name in schema.properties if schema.is_required(name)]
        result = {"type": "object", "properties": properties}
        if required:
            result["required"] = required
        if schema.description:
            result["description"] = schema.description
        return result

    return _open_object()


def _ref(name: str) -> dict[str, str]:
    return {"$ref": f"#/components/schemas/{name}"}


def _json_content(schema_name: str) -> dict[str, Any]:
    return {"application/json": {"schema": _ref(schema_name)}}


def build_operation(
    func: FunctionDescriptor,
    request_schema: str,
    response_schema: str,
) -> dict[str, Any]:
    """Build the POST operation object for one function."""
    operation: dict[str, Any] = {
        "operationId": func.name,
        "summary": func.description or f"Call {func.name}",
    }
    if func.description:
        operation["description"] = func.description
    operation["tags"] = [tag_for_function(func.name)]
    operation["x-moodle-type"] = func.type
    if func.capabilities:
        operation["x-moodle-capabilities"] = func.capabilities
    operation["x-moodle-ajax"] = func.ajax
    operation["x-moodle-login-required"] = func.login_required
    if func.services:
        operation["x-moodle-services"] = [s.shortname for s in func.services]
    operation["requestBody"] = {
        "required": True,
        "content": {
            "application/x-www-form-urlencoded": {"schema": _ref(request_schema)},
        },
    }
    operation["responses"] = {
        "200": {
            "description": "Successful response",
            "content": _json_content(response_schema),
        },
        "400": {
            "description": "Bad request - invalid parameters",
            "content": _json_content(ERROR_SCHEMA),
        },
        "401": {
            "description": "Unauthorized - invalid or missing token",
            "content": _json_content(ERROR_SCHEMA),
        },
    }
    operation["security"] = [{SECURITY_SCHEME: []}]
    return operation


def build_tags(functions: tuple[FunctionDescriptor, ...] | list[FunctionDescriptor]) -> list[dict[str, str]]:
    """Return sorted, deduplicated tag objects for a set of functions."""
    tags = sorted({tag_for_function(f.name) for f in functions})
    return [
        {"name": tag, "description": _TAG_DESCRIPTIONS.get(tag, f"{tag} functions")}
        for tag in tags
    ]


def _shared_schemas() -> dict[str, Any]:
    return {
        ERROR_SCHEMA: {
            "type": "object",
            "properties": {
                "exception": {"type": "string", "description": "The exception class name"},
                "errorcode": {"type": "string", "description": "The error code"},
                "message": {"type": "string", "description": "Human-readable error message"},
                "debuginfo": {
                    "type": "string",
                    "description": "Debug information (only in development mode)",
                },
            },
            "required": ["message"],
        },
        WARNING_SCHEMA: {
            "type": "object",
            "properties": {
                "item": {"type": "string", "description": "Item that triggered the warning"},
                "itemid": {"type": "integer", "description": "ID of the item"},
                "warningcode": {"type": "string", "description": "Warning code"},
                "message": {"type": "string", "description": "Warning message"},
            },
            "required": ["warningcode", "message"],
        },
    }


def to_openapi(document: SchemaDocument) -> dict[str, Any]:
    """Build the full OpenAPI document for a schema document."""
    schemas: dict[str, Any] = {}
    paths: dict[str, Any] = {}

    for func in document.functions:
        pascal = to_pascal_case(func.name)
        request_name = f"{pascal}Request"
        response_name = f"{pascal}Response"

        if func.parameters is not None:
            schemas[request_name] = schema_to_openapi(func.parameters)
        else:
            schemas[request_name] = {"type": "object", "properties": {}}

        if func.returns is not None:
            schemas[response_name] = schema_to_openapi(func.returns)
        else:
            schemas[response_name] = {"type": "object", "nullable": True}

        paths[f"{PATH_PREFIX}{func.name}"] = {
            "post": build_operation(func, request_name, response_name),
        }

    schemas.update(_shared_schemas())

    return {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": "Moodle Web Services API",
            "version": document.moodle_version,
            "description": (
                "Auto-generated OpenAPI specification for Moodle Web Services.\n\n"
                f"Moodle Release: {document.moodle_release}\n"
                f"Generated: {document.generated_at}"
            ),
            "contact": {"name": "Moodle", "url": "https://moodle.org"},
            "license": {
                "name": "GPL-3.0",
                "url": "https://www.gnu.org/licenses/gpl-3.0.html",
            },
        },
        "servers": [
            {
                "url": "{baseUrl}",
                "description": "Moodle instance",
                "variables": {
                    "baseUrl": {
                        "default": "https://moodle.example.com",
                        "description": "The base URL of your Moodle installation",
                    },
                },
            },
        ],
        "security": [{SECURITY_SCHEME: []}],
        "tags": build_tags(document.functions),
        "paths": paths,
        "components": {
            "schemas": schemas,
            "securitySchemes": {
                SECURITY_SCHEME: {
                    "type": "apiKey",
                    "in": "query",
                    "name": "wstoken",
                    "description": (
                        "Web service token. Generate in Moodle: Site administration"
                        " > Plugins > Web services > Manage tokens"
                    ),
                },
            },
        },
    }
