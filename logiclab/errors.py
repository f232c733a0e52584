"""
Error taxonomy for the expression pipeline.

Every error carries enough context (position, length, hint) for a caller
to point at the offending part of the input text.
"""

from typing import Optional


class LogicError(Exception):
    """Base class for all errors raised by the expression pipeline."""

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.position = position

    def to_user_friendly(self, text: str = None) -> str:
        """Format the error for display, adding line/column when text is given."""
        if self.position is None:
            return f"{self.label}: {self.message}"
        if text is None:
            return f"{self.label} at position {self.position}: {self.message}"

        line = text.count("\n", 0, self.position) + 1
        column = self.position - (text.rfind("\n", 0, self.position) + 1) + 1
        return (
            f"{self.label} at position {self.position} "
            f"(line {line}, column {column}): {self.message}"
        )

    @property
    def label(self) -> str:
        return "Error"


class LexicalError(LogicError):
    """An unrecognized character was found while tokenizing."""

    def __init__(self, message: str, position: int, suggestion: Optional[str] = None):
        super().__init__(message, position)
        self.length = 1
        self.suggestion = suggestion

    @property
    def label(self) -> str:
        return "Lexical Error"


class ExpressionSyntaxError(LogicError):
    """The token stream does not match the expression grammar."""

    def __init__(
        self,
        message: str,
        position: int,
        length: int = 0,
        suggestion: Optional[str] = None,
    ):
        super().__init__(message, position)
        self.length = length
        self.suggestion = suggestion

    @property
    def label(self) -> str:
        return "Syntax Error"


class UndefinedVariableError(LogicError, KeyError):
    """Evaluation hit a variable with no binding."""

    def __init__(self, name: str):
        super().__init__(f"Undefined variable: {name}")
        self.name = name

    def __str__(self):
        return self.message


class TooManyVariablesError(LogicError, ValueError):
    """A variable-count cap (truth table or minimization) was exceeded."""

    def __init__(self, count: int, limit: int, operation: str = "truth table"):
        super().__init__(
            f"Too many variables for {operation} ({count}). "
            f"Maximum supported: {limit}"
        )
        self.count = count
        self.limit = limit
        self.operation = operation
