"""Tests for the naming module."""

from generator.naming import (
    binding_name,
    is_safe_field_name,
    module_name,
    tag_for_function,
    to_pascal_case,
)


class TestToPascalCase:
    """Function name -> schema name prefix."""

    def test_core_course_get_courses(self):
        assert to_pascal_case("core_course_get_courses") == "CoreCourseGetCourses"

    def test_single_segment(self):
        assert to_pascal_case("standalone") == "Standalone"

    def test_keeps_inner_case(self):
        assert to_pascal_case("mod_h5pactivity_get_attempts") == "ModH5pactivityGetAttempts"

    def test_empty_segments(self):
        assert to_pascal_case("core__x") == "CoreX"


class TestTagForFunction:
    """First two segments become the tag."""

    def test_core_course(self):
        assert tag_for_function("core_course_get_courses") == "core_course"

    def test_two_segments(self):
        assert tag_for_function("mod_forum") == "mod_forum"

    def test_single_segment(self):
        assert tag_for_function("standalone") == "standalone"

    def test_empty(self):
        assert tag_for_function("") == "misc"


class TestModuleName:
    """Schema branch -> generated module name."""

    def test_stable_branch(self):
        assert module_name("MOODLE_405_STABLE") == "moodle_405_stable"

    def test_camel_case(self):
        assert module_name("MoodleMain") == "moodle_main"

    def test_leading_digit(self):
        assert module_name("405") == "moodle_405"

    def test_valid_identifier(self):
        assert module_name("moodle-4.5.1").isidentifier()


class TestIdentifiers:
    """Python-safe names for fields and wrappers."""

    def test_keyword_not_safe(self):
        assert not is_safe_field_name("class")
        assert is_safe_field_name("courseid")

    def test_binding_name_passthrough(self):
        assert binding_name("core_course_get_courses") == "core_course_get_courses"

    def test_binding_name_sanitized(self):
        name = binding_name("local-plugin.fn")
        assert name.isidentifier()
