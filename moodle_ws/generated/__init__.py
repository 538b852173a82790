"""Per-version bindings written by ``python -m generator``.

One module per schema document, e.g. ``moodle_ws.generated.moodle_405_stable``.
"""
