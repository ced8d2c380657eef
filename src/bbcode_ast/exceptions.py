#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the bbcode-ast library.

This module defines specialized exception classes for the error conditions
that can occur while configuring a parser or parsing BBCode. Only strict
parsing raises parse errors; lenient parsing recovers by flattening
malformed markup into text.

Exception Hierarchy
-------------------
- BBCodeAstError (base exception)

  - ValidationError (parameter/option validation)

  - ParsingError (input parsing failures)
    - MismatchedClosingTagError (closing tag does not match the open tag)
    - UnclosedTagsError (input ended with tags still open)

"""

from typing import Any


class BBCodeAstError(Exception):
    """Base exception class for all bbcode-ast errors.

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


class ValidationError(BBCodeAstError):
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


class ParsingError(BBCodeAstError):
    """Exception raised when strict BBCode parsing fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class MismatchedClosingTagError(ParsingError):
    """Exception raised when a closing tag does not match the innermost open tag.

    Parameters
    ----------
    expected : str
        Name of the innermost open node (``#root`` when no tag is open)
    found : str
        Name of the closing tag that was encountered
    position : int, optional
        Index of the ``]`` that completed the closing tag

    """

    def __init__(self, expected: str, found: str, position: int | None = None):
        """Initialize the error with both tag names."""
        message = f"Expected closing tag for '{expected}', found '[/{found}]'"
        if position is not None:
            message += f" at position {position}"
        super().__init__(message + ".", parsing_stage="closing_tag")
        self.expected = expected
        self.found = found
        self.position = position


class UnclosedTagsError(ParsingError):
    """Exception raised when the input ends while tags are still open.

    Parameters
    ----------
    count : int
        Number of tags left open
    innermost_name : str
        Name of the most recently opened, still unclosed tag

    """

    def __init__(self, count: int, innermost_name: str):
        """Initialize the error with the unclosed tag count."""
        super().__init__(
            f"Expected all tags to be closed. Found {count} unclosed tag(s), "
            f"most recently unclosed tag is '{innermost_name}'.",
            parsing_stage="end_of_input",
        )
        self.count = count
        self.innermost_name = innermost_name
