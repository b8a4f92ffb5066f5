#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdcanon library.

This module defines specialized exception classes for the error conditions
that can occur while validating and canonicalizing a Markdown tree.

Exception Hierarchy
-------------------
- MdCanonError (base exception)

  - ValidationError (parameter/option/tree validation)
    - InvalidOptionsError (wrong options class for renderer)
    - MalformedTreeError (tree violates node invariants)

  - RenderingError (output generation failures)
    - OutputWriteError (sink rejected a write)

"""

from typing import Any


class MdCanonError(Exception):
    """Base exception class for all mdcanon-specific errors.

    Catching this will catch all library-specific errors.

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


class ValidationError(MdCanonError):
    """Exception raised for invalid input parameters, options or trees.

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


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options class is provided to a renderer.

    Parameters
    ----------
    renderer_name : str
        Name of the renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        renderer_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{renderer_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.renderer_name = renderer_name
        self.expected_type = expected_type
        self.received_type = received_type


class MalformedTreeError(ValidationError):
    """Exception raised when a document tree violates the node invariants.

    Examples are a list whose children are not list items, a span that
    points outside the source buffer, or a block node nested inside an
    inline container.

    Parameters
    ----------
    message : str
        Description of what is malformed
    node_kind : str, optional
        Kind of the offending node
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    node_kind : str or None
        Kind of the node that failed validation

    """

    def __init__(self, message: str, node_kind: str | None = None, original_error: Exception | None = None):
        """Initialize the malformed tree error."""
        super().__init__(message, parameter_name="document", original_error=original_error)
        self.node_kind = node_kind


class RenderingError(MdCanonError):
    """Exception raised when output rendering fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    Attributes
    ----------
    rendering_stage : str or None
        Where in the rendering process the error occurred

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """Exception raised when the output sink rejects a write.

    Output written before the failure is incomplete and must be discarded.

    Parameters
    ----------
    message : str, optional
        Custom error message. If not provided, uses default message
    bytes_written : int, default 0
        Number of bytes accepted by the sink before the failure
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    bytes_written : int
        Bytes successfully written before the failure

    """

    def __init__(
        self, message: str | None = None, bytes_written: int = 0, original_error: Exception | None = None
    ):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output after {bytes_written} bytes"
            if original_error is not None:
                message += f": {original_error}"
        super().__init__(message, rendering_stage="output_write", original_error=original_error)
        self.bytes_written = bytes_written
