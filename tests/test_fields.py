"""
Tests for FieldSet focus cycling and line editing.
"""

# Path setup handled by conftest.py
from taskbeacon.core.fields import FieldSet
from taskbeacon.core.constants import ADD_FIELDS, ENRICH_FIELDS
import pytest


def focused_count(fields):
    return sum(1 for f in fields if f.focused)


@pytest.mark.parametrize("names", [("A",), ("A", "B"), ADD_FIELDS, ENRICH_FIELDS])
def test_focus_next_n_times_returns_to_start(names):
    """Cycling through every field lands back where it started."""
    fields = FieldSet(names)
    fields.focus(len(names) // 2)
    start = fields.focus_index

    for _ in range(len(names)):
        fields.focus_next()
        assert focused_count(fields) == 1

    assert fields.focus_index == start
    print(f"✓ focus_next x{len(names)} returns to field {start}")


def test_focus_wraps_both_ways():
    fields = FieldSet(["A", "B", "C"])
    assert fields.focus_index == 0

    fields.focus_prev()
    assert fields.focus_index == 2
    assert fields.is_last()

    fields.focus_next()
    assert fields.focus_index == 0
    assert focused_count(fields) == 1

    print("✓ Focus wraps at both ends")


def test_indices_are_taken_modulo():
    fields = FieldSet(["A", "B", "C"])

    fields.focus(7)
    assert fields.focus_index == 1

    fields.set_value(-1, "last")
    assert fields.value_of(2) == "last"
    assert fields.value_of(5) == "last"

    print("✓ Out-of-range indices wrap instead of failing")


def test_set_value_puts_cursor_at_end():
    fields = FieldSet(["Project"])
    fields.set_value(0, "work")

    assert fields.focused.cursor == 4
    assert fields.values() == {"Project": "work"}
    assert fields.index_of("Project") == 0
    assert fields.index_of("Description") == -1

    print("✓ set_value moves the cursor to the end")


def test_line_editing_on_focused_field():
    fields = FieldSet(["Project", "Priority"])
    fields.set_value(0, "wrk")

    fields.move_cursor(-2)       # w|rk
    fields.insert_text("o")      # wo|rk
    assert fields.value_of(0) == "work"
    assert fields.focused.cursor == 2

    fields.cursor_end()
    fields.backspace()
    assert fields.value_of(0) == "wor"

    fields.cursor_home()
    fields.delete()
    assert fields.value_of(0) == "or"

    # Clamped at both ends
    fields.cursor_home()
    fields.backspace()
    fields.move_cursor(-5)
    assert fields.focused.cursor == 0
    fields.move_cursor(50)
    assert fields.focused.cursor == 2
    fields.delete()
    assert fields.value_of(0) == "or"

    # Other fields untouched
    assert fields.value_of(1) == ""

    print("✓ Line editing acts on the focused field only")


def test_empty_fieldset_rejected():
    with pytest.raises(ValueError):
        FieldSet([])

    print("✓ FieldSet needs at least one field")
