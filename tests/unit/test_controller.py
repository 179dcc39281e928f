#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_controller.py
"""Unit tests for MathFieldEditingController.

Tests cover:
- Inserting leaves and function templates
- Moving into, through and out of function arguments
- Backspace across argument boundaries and deleting functions
- Listeners, reentrancy and validation after edits
- Replacing and clearing the document

"""

import pytest

from mathedit.ast import ArgumentSlot, ExpressionTree, Function, Leaf, NavigationResult
from mathedit.controller import MathFieldEditingController
from mathedit.exceptions import FunctionArityError, ReentrantEditError, ValidationError
from mathedit.options import EditorOptions

BRACES2 = [ArgumentSlot.BRACES, ArgumentSlot.BRACES]


def _cursor(controller: MathFieldEditingController) -> str:
    return controller.render(cursor_color="#000000").replace(r"\textcolor{#000000}{\cursor}", "|")


@pytest.mark.unit
class TestEditing:
    """Tests for inserting fragments."""

    def test_initial_state(self, controller):
        """Test a new controller has an empty root holding the cursor."""
        assert controller.is_empty
        assert controller.current_node is controller.root
        assert controller.root.has_cursor
        assert controller.current_editing_value() == r"\Box"
        assert _cursor(controller) == "|"

    def test_add_leaves(self, controller):
        """Test typing tokens into the root."""
        for token in ("x", "+", "2"):
            controller.add_leaf(token)
        assert controller.current_editing_value() == "x+2"
        assert _cursor(controller) == "x+2|"

    def test_add_function_enters_first_argument(self, controller):
        """Test a function template moves the cursor into its first slot."""
        controller.add_function(r"\frac", BRACES2)
        function = controller.root.children[0]
        assert controller.current_node is function.argument_trees[0]
        assert not controller.root.has_cursor
        assert _cursor(controller) == r"\frac{|}{\Box}"

    def test_add_function_slot_names(self, controller):
        """Test slot names are accepted."""
        controller.add_function(r"\sqrt", ["brackets", "braces"])
        assert controller.current_editing_value() == r"\sqrt[\Box]{\Box}"

    def test_add_function_without_slots(self, controller):
        """Test a function without slots is rejected and the document untouched."""
        with pytest.raises(FunctionArityError):
            controller.add_function(r"\frac", [])
        assert controller.is_empty
        assert controller.root.has_cursor

    def test_fraction_round_trip(self, controller):
        """Test typing 1, moving on and typing 2 fills both slots."""
        controller.add_function(r"\frac", BRACES2)
        controller.add_leaf("1")
        assert controller.go_next() is NavigationResult.END
        controller.add_leaf("2")
        assert controller.current_editing_value() == r"\frac{1}{2}"
        assert controller.go_next() is NavigationResult.END
        controller.add_leaf("+")
        assert _cursor(controller) == r"\frac{1}{2}+|"

    def test_current_editing_value_keeps_cursor(self, controller):
        """Test rendering without the glyph leaves the cursor where it was."""
        controller.add_leaf("x")
        controller.current_editing_value()
        assert controller.current_node.has_cursor
        assert controller.current_node.position == 1

    def test_placeholder_option(self):
        """Test an empty document can render as an empty string."""
        controller = MathFieldEditingController(EditorOptions(placeholder_when_empty=False))
        assert controller.current_editing_value() == ""
        assert controller.current_editing_value(placeholder_when_empty=True) == r"\Box"

    def test_render_uses_option_color(self):
        """Test the configured cursor color is used by default."""
        controller = MathFieldEditingController(EditorOptions(cursor_color="red"))
        assert controller.render() == r"\textcolor{#ff0000}{\cursor}"
        assert controller.render(cursor_color="#00f") == r"\textcolor{#0000ff}{\cursor}"

    def test_toggle_page(self, controller):
        """Test the keyboard page flag flips."""
        assert controller.second_page is False
        controller.toggle_page()
        assert controller.second_page is True
        controller.toggle_page()
        assert controller.second_page is False


@pytest.mark.unit
class TestNavigation:
    """Tests for moving the cursor between trees."""

    def test_left_at_root_start(self, controller):
        """Test moving left at the start of the document changes nothing."""
        assert controller.go_back() is NavigationResult.END
        assert controller.current_node is controller.root
        assert controller.root.has_cursor

    def test_left_into_function(self, controller):
        """Test moving left onto a function lands at the end of its last argument."""
        controller.add_function(r"\frac", BRACES2)
        controller.add_leaf("1")
        controller.go_next()
        controller.add_leaf("2")
        controller.go_next()
        assert _cursor(controller) == r"\frac{1}{2}|"

        assert controller.go_back() is NavigationResult.ENTERED_FUNCTION
        assert _cursor(controller) == r"\frac{1}{2|}"

    def test_left_through_arguments(self, controller):
        """Test moving left walks back through each argument and out."""
        controller.add_leaf("x")
        controller.add_function(r"\frac", BRACES2)
        controller.add_leaf("1")
        controller.go_next()

        assert controller.go_back() is NavigationResult.END
        assert _cursor(controller) == r"x\frac{1|}{\Box}"
        controller.go_back()
        assert _cursor(controller) == r"x\frac{|1}{\Box}"
        assert controller.go_back() is NavigationResult.END
        assert _cursor(controller) == r"x|\frac{1}{\Box}"
        assert controller.current_node is controller.root

    def test_right_into_function(self, controller):
        """Test moving right onto a function lands at the start of its first argument."""
        controller.add_function(r"\frac", BRACES2)
        controller.add_leaf("1")
        controller.go_back()
        controller.go_back()
        assert _cursor(controller) == r"|\frac{1}{\Box}"

        assert controller.go_next() is NavigationResult.ENTERED_FUNCTION
        assert _cursor(controller) == r"\frac{|1}{\Box}"

    def test_right_out_of_last_argument(self, controller):
        """Test moving right from the last argument leaves the function."""
        controller.add_function(r"\sqrt", [ArgumentSlot.BRACES])
        controller.add_leaf("2")
        assert controller.go_next() is NavigationResult.END
        assert controller.current_node is controller.root
        assert _cursor(controller) == r"\sqrt{2}|"

    def test_right_at_root_end(self, controller):
        """Test moving right at the end of the document changes nothing."""
        controller.add_leaf("x")
        assert controller.go_next() is NavigationResult.END
        assert _cursor(controller) == "x|"

    def test_nested_functions(self, controller):
        """Test navigating a function inside a function argument."""
        controller.add_function(r"\frac", BRACES2)
        controller.add_function("^", [ArgumentSlot.BRACES])
        controller.add_leaf("2")
        assert _cursor(controller) == r"\frac{^{2|}}{\Box}"
        controller.go_next()
        assert _cursor(controller) == r"\frac{^{2}|}{\Box}"
        controller.go_next()
        assert _cursor(controller) == r"\frac{^{2}}{|}"

    def test_detached_function_rejected(self, controller):
        """Test leaving an argument of a function that is in no tree fails loudly."""
        function = Function(r"\frac", BRACES2)
        controller.current_node.remove_cursor()
        controller.current_node = function.argument_trees[0]
        controller.current_node.set_cursor()
        with pytest.raises(ValidationError):
            controller.go_back()
        assert controller.current_node is function.argument_trees[0]
        assert controller.current_node.has_cursor

    def test_failed_exit_keeps_cursor(self, controller):
        """Test a function removed behind the controller's back leaves the cursor usable."""
        controller.add_function(r"\frac", BRACES2)
        function = controller.root.children[0]
        controller.root.children.clear()
        controller.go_next()
        with pytest.raises(ValidationError, match="not a child"):
            controller.go_next()
        assert controller.current_node is function.argument_trees[1]
        assert controller.current_node.has_cursor
        assert controller.go_back() is NavigationResult.END
        assert controller.current_node is function.argument_trees[0]
        assert controller.current_node.has_cursor
        with pytest.raises(ValidationError):
            controller.go_back(delete_mode=True)
        assert controller.current_node.has_cursor


@pytest.mark.unit
class TestBackspace:
    """Tests for deleting with go_back(delete_mode=True)."""

    def test_delete_leaf(self, controller):
        """Test backspace removes the previous token."""
        controller.add_leaf("x")
        controller.add_leaf("+")
        assert controller.go_back(delete_mode=True) is NavigationResult.SUCCESS
        assert _cursor(controller) == "x|"

    def test_delete_command(self, controller):
        """Test backspace removes a command in one step."""
        controller.add_leaf(r"\sin(")
        controller.go_back(delete_mode=True)
        assert controller.is_empty

    def test_backspace_enters_function(self, controller):
        """Test backspace after a function moves into it instead of deleting it."""
        controller.add_function(r"\frac", BRACES2)
        controller.add_leaf("1")
        controller.go_next()
        controller.add_leaf("2")
        controller.go_next()

        assert controller.go_back(delete_mode=True) is NavigationResult.ENTERED_FUNCTION
        assert _cursor(controller) == r"\frac{1}{2|}"
        controller.go_back(delete_mode=True)
        assert _cursor(controller) == r"\frac{1}{|}"

    def test_backspace_moves_to_previous_argument(self, controller):
        """Test backspace at the start of a later argument moves to the previous one."""
        controller.add_function(r"\frac", BRACES2)
        controller.add_leaf("1")
        controller.go_next()
        assert controller.go_back(delete_mode=True) is NavigationResult.END
        assert _cursor(controller) == r"\frac{1|}{\Box}"

    def test_backspace_in_first_argument_deletes_function(self, controller):
        """Test backspace at the start of the first argument removes the whole function."""
        controller.add_leaf("x")
        controller.add_function(r"\frac", BRACES2)
        controller.add_leaf("1")
        controller.go_back()

        assert controller.go_back(delete_mode=True) is NavigationResult.END
        assert controller.current_node is controller.root
        assert _cursor(controller) == "x|"

    def test_backspace_empty_document(self, controller):
        """Test backspace on an empty document is a no-op."""
        assert controller.go_back(delete_mode=True) is NavigationResult.END
        assert controller.is_empty
        assert controller.root.has_cursor


@pytest.mark.unit
class TestListeners:
    """Tests for change notification."""

    def test_notified_after_each_edit(self, controller):
        """Test listeners run after every change."""
        calls = []
        controller.add_listener(lambda c: calls.append(c.current_editing_value()))
        controller.add_leaf("x")
        controller.add_leaf("y")
        controller.go_back()
        assert calls == ["x", "xy", "xy"]

    def test_not_notified_without_change(self, controller):
        """Test a move that changes nothing does not notify."""
        calls = []
        controller.add_listener(calls.append)
        controller.go_back()
        controller.go_next()
        assert calls == []

    def test_remove_listener(self, controller):
        """Test removed listeners are no longer called."""
        calls = []
        controller.add_listener(calls.append)
        controller.remove_listener(calls.append)
        controller.remove_listener(calls.append)
        controller.add_leaf("x")
        assert calls == []

    def test_edit_during_notification_rejected(self, controller):
        """Test a listener cannot edit the controller it observes."""

        def editing_listener(c):
            c.add_leaf("y")

        controller.add_listener(editing_listener)
        with pytest.raises(ReentrantEditError):
            controller.add_leaf("x")

    def test_notification_flag_reset_after_error(self, controller):
        """Test edits work again after a failing listener."""

        def failing_listener(c):
            raise RuntimeError("boom")

        controller.add_listener(failing_listener)
        with pytest.raises(RuntimeError):
            controller.add_leaf("x")
        controller.remove_listener(failing_listener)
        controller.add_leaf("y")
        assert controller.current_editing_value() == "xy"

    def test_validate_edits(self):
        """Test validation runs after edits when enabled."""
        controller = MathFieldEditingController(EditorOptions(validate_edits=True))
        controller.add_function(r"\frac", BRACES2)
        controller.root.set_cursor()
        with pytest.raises(ValidationError):
            controller.add_leaf("1")


@pytest.mark.unit
class TestDocumentReplacement:
    """Tests for clear() and update_value()."""

    def test_clear(self, controller):
        """Test clearing empties the document and resets the cursor."""
        controller.add_function(r"\frac", BRACES2)
        controller.add_leaf("1")
        controller.clear()
        assert controller.is_empty
        assert controller.current_node is controller.root
        assert _cursor(controller) == "|"

    def test_update_value(self, controller):
        """Test a replacement document gets the cursor at its end."""
        fraction = Function(r"\frac", BRACES2, [ExpressionTree([Leaf("1")]), ExpressionTree([Leaf("2")])])
        value = ExpressionTree([Leaf("x"), Leaf("="), fraction])
        controller.update_value(value)
        assert controller.root is value
        assert controller.current_node is value
        assert _cursor(controller) == r"x=\frac{1}{2}|"

    def test_update_value_drops_stray_cursors(self, controller):
        """Test cursors already set in the replacement are unset first."""
        fraction = Function(r"\frac", BRACES2)
        fraction.argument_trees[0].set_cursor()
        value = ExpressionTree([fraction], position=0)
        value.set_cursor()
        controller.update_value(value)
        assert not fraction.argument_trees[0].has_cursor
        assert value.position == 1
        assert _cursor(controller) == r"\frac{\Box}{\Box}|"

    def test_update_value_rejects_argument_tree(self, controller, frac):
        """Test an argument tree of a function cannot become the root."""
        with pytest.raises(ValidationError, match="document root"):
            controller.update_value(frac.argument_trees[0])
        assert controller.current_node is controller.root
        assert controller.root.has_cursor
        assert controller.go_back() is NavigationResult.END
