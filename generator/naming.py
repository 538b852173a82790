"""Derive schema, tag, module and identifier names from Moodle function names.

Moodle function names are underscore-delimited, component first:

  core_course_get_courses      -> CoreCourseGetCourses   (tag: core_course)
  mod_forum_add_discussion     -> ModForumAddDiscussion  (tag: mod_forum)
  tool_mobile_get_config       -> ToolMobileGetConfig    (tag: tool_mobile)
  standalone                   -> Standalone             (tag: standalone)

Schema branches map to generated module names:

  MOODLE_405_STABLE            -> moodle_405_stable
"""

from __future__ import annotations

import keyword
import re


def to_pascal_case(name: str) -> str:
    """Capitalise the first letter of each underscore-delimited segment."""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))


def tag_for_function(name: str) -> str:
    """Return the tag for a function: its first two segments, or the first."""
    parts = name.split("_")
    if len(parts) >= 2:
        return f"{parts[0]}_{parts[1]}"
    return parts[0] or "misc"


def _camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case."""
    s1 = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s1).lower()


def module_name(schema_name: str) -> str:
    """Turn a schema file base name into a Python module name."""
    name = _camel_to_snake(schema_name) if not schema_name.isupper() else schema_name.lower()
    name = re.sub(r"[^a-z0-9_]", "_", name)
    name = re.sub(r"_+", "_", name).strip("_")
    if not name or name[0].isdigit():
        name = f"moodle_{name}"
    return name


def is_safe_field_name(name: str) -> bool:
    """True if a key can be a TypedDict class attribute."""
    return name.isidentifier() and not keyword.iskeyword(name)


def binding_name(function_name: str) -> str:
    """Return the Python function name for a Moodle function."""
    name = re.sub(r"[^A-Za-z0-9_]", "_", function_name)
    if not name or name[0].isdigit() or keyword.iskeyword(name):
        name = f"ws_{name}"
    return name
