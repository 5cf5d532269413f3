#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the richexport library.

The conversion engine itself recovers from malformed markup instead of
raising; the exceptions below cover what happens around it: rejected
requests, misconfigured renderers, and failures of the binary document
serializer.

Exception Hierarchy
-------------------
- RichExportError (base exception)

  - ValidationError (parameter/option validation)
    - EmptyInputError (no content to convert)
    - InvalidOptionsError (wrong options class for a renderer)
    - UnsupportedTargetError (unknown export target)

  - RenderingError (output generation failures)
    - SerializationError (binary document could not be produced or written)

"""

from __future__ import annotations

from typing import Any


class RichExportError(Exception):
    """Base exception class for all richexport-specific errors.

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


class ValidationError(RichExportError):
    """Exception raised for invalid input parameters or options.

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


class EmptyInputError(ValidationError):
    """Exception raised when an export request carries no content.

    Raised before any conversion starts so that nothing is written.

    """

    def __init__(self, message: str = "No content provided", parameter_name: str = "content"):
        """Initialize the empty input error."""
        super().__init__(message, parameter_name=parameter_name, parameter_value=None)


class InvalidOptionsError(ValidationError):
    """Exception raised when a renderer receives the wrong options class.

    Parameters
    ----------
    converter_name : str
        Name of the renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{converter_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class UnsupportedTargetError(ValidationError):
    """Exception raised when an export target is not registered.

    Parameters
    ----------
    target : str
        The requested target name
    supported_targets : list[str], optional
        Registered target names, used to build the message

    """

    def __init__(self, target: str, supported_targets: list[str] | None = None):
        """Initialize the unsupported target error."""
        message = f"Unsupported export target: {target!r}"
        if supported_targets:
            message += f". Supported targets: {', '.join(supported_targets)}"
        super().__init__(message, parameter_name="target", parameter_value=target)
        self.target = target
        self.supported_targets = supported_targets or []


class RenderingError(RichExportError):
    """Exception raised when output rendering fails.

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


class SerializationError(RenderingError):
    """Exception raised when the binary document serializer fails.

    The export is all-or-nothing: when this is raised no output file exists.

    Parameters
    ----------
    message : str
        Description of the failure
    target : str, optional
        Export target being produced (e.g. ``"docx"``)
    file_path : str, optional
        Output path that was not written
    original_error : Exception, optional
        The underlying exception

    """

    def __init__(
        self,
        message: str,
        target: str | None = None,
        file_path: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the serialization error."""
        super().__init__(message, rendering_stage="serialization", original_error=original_error)
        self.target = target
        self.file_path = file_path


__all__ = [
    "RichExportError",
    "ValidationError",
    "EmptyInputError",
    "InvalidOptionsError",
    "UnsupportedTargetError",
    "RenderingError",
    "SerializationError",
]
