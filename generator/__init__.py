"""Code generator for the Moodle Web Services SDK.

Pipeline: schema JSON -> typed schema tree -> OpenAPI 3.1 (JSON + YAML)
and typed Python bindings. Run with ``python -m generator``.
"""
