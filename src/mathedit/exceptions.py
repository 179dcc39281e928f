#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mathedit library.

This module defines the exception classes raised when the editing engine is
misused. Reaching the edge of a sibling list is not an error: it is reported
through ``NavigationResult.END``. Everything here signals a caller-side
contract violation and is meant to fail loudly.

Exception Hierarchy
-------------------
- MathEditError (base exception)

  - ValidationError (constructor arguments, options, invariants)
    - FunctionArityError (slot / argument tree count problems)

  - CursorStateError (cursor set/unset preconditions)

  - RenderingError (serialization failures)
    - CursorRenderingError (cursor glyph requested without a color)

  - ReentrantEditError (edit call during listener dispatch)

  - ConfigError (configuration file loading)

"""

from typing import Any


class MathEditError(Exception):
    """Base exception class for all mathedit-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MathEditError):
    """Exception raised for invalid arguments, options or tree structure.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class FunctionArityError(ValidationError):
    """Exception raised when a function's slots and argument trees disagree.

    Raised for a function without any argument slot, and for pre-built
    argument trees whose count differs from the slot count.

    Parameters
    ----------
    function_name : str
        Command name of the function being constructed
    slot_count : int
        Number of argument slots requested
    tree_count : int, optional
        Number of pre-built argument trees supplied, if any
    message : str, optional
        Custom error message. If not provided, generates one

    """

    def __init__(
        self,
        function_name: str,
        slot_count: int,
        tree_count: int | None = None,
        message: str | None = None,
    ):
        """Initialize the arity error."""
        if message is None:
            if slot_count == 0:
                message = f"Function '{function_name}' needs at least one argument slot"
            else:
                message = (
                    f"Function '{function_name}' has {slot_count} argument slot(s) "
                    f"but {tree_count} argument tree(s) were supplied"
                )
        super().__init__(message, parameter_name="argument_trees", parameter_value=tree_count)
        self.function_name = function_name
        self.slot_count = slot_count
        self.tree_count = tree_count


class CursorStateError(MathEditError):
    """Exception raised when a cursor operation's precondition does not hold.

    Setting a cursor that is already set, or removing one that is not, means
    the caller lost track of which tree holds the cursor.

    Parameters
    ----------
    message : str
        Description of the violated precondition
    position : int, optional
        Cursor position of the tree at the time of the error

    """

    def __init__(self, message: str, position: int | None = None):
        """Initialize the cursor state error."""
        super().__init__(message)
        self.position = position


class RenderingError(MathEditError):
    """Exception raised when serialization to TeX fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class CursorRenderingError(RenderingError):
    """Exception raised when the cursor glyph is serialized without a color."""

    def __init__(self, message: str | None = None):
        """Initialize the cursor rendering error."""
        super().__init__(message or "Cursor serialized without a cursor color", rendering_stage="cursor")


class ReentrantEditError(MathEditError):
    """Exception raised when an edit is requested while listeners are being notified.

    Edits must be dispatched one at a time; a change listener that edits the
    controller it is observing would mutate the tree mid-notification.
    """


class ConfigError(MathEditError):
    """Exception raised when a configuration file cannot be loaded.

    Parameters
    ----------
    message : str
        Description of the problem
    config_path : str, optional
        Path of the offending configuration file
    original_error : Exception, optional
        The underlying parsing or I/O error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path
