"""
Exception types raised by recordCLI.

Every error derives from RecordCLIError so callers can catch the whole family at
once. Errors that describe a bad value also derive from the matching builtin
(ValueError / TypeError) to keep them usable with generic handlers.
"""

from typing import Any, Iterable


class RecordCLIError(Exception):
    """Base class for all recordCLI errors."""


class ConstraintSyntaxError(RecordCLIError, ValueError):
    """A constraint clause did not split into one or two parts."""

    def __init__(self, delimiter: str, clause: str = ""):
        self.delimiter = delimiter
        self.clause = clause
        super().__init__(f"syntax error: too many '{delimiter}' characters in constraint '{clause}'")


class UnknownDirectiveError(RecordCLIError, ValueError):
    """A constraint clause used a key that is not a recognized directive."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"unknown directive key '{key}'")


class ParameterConstructionError(RecordCLIError, ValueError):
    """Building a Parameter from a record field failed on one of its clauses."""

    def __init__(self, clause: str, field_name: str, reason: Exception):
        self.clause = clause
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"error parsing constraint '{clause}' at field '{field_name}': {reason}")


class UnsupportedTypeError(RecordCLIError, TypeError):
    """A field's declared type cannot be set from the command line."""

    def __init__(self, field_name: str, declared_type: Any):
        self.field_name = field_name
        self.type = declared_type
        super().__init__(f"incompatible type {declared_type!r} for field '{field_name}'")


class ValueParseError(RecordCLIError, ValueError):
    """A raw argument could not be converted to the field's type."""

    def __init__(self, field_name: str, value: str):
        self.field_name = field_name
        self.value = value
        super().__init__(f"invalid integer value '{value}' for field '{field_name}'")


class ArgumentParseError(RecordCLIError):
    """Base class for errors raised while scanning an argument vector."""


class UnknownArgumentError(ArgumentParseError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"unknown argument '{token}'")


class DuplicateArgumentError(ArgumentParseError):
    def __init__(self, token: str, field_name: str):
        self.token = token
        self.field_name = field_name
        super().__init__(f"argument '{token}' given more than once (field '{field_name}')")


class MissingValueError(ArgumentParseError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"argument '{token}' expects a value")


class MissingMandatoryError(ArgumentParseError):
    def __init__(self, names: Iterable[str]):
        self.names = list(names)
        super().__init__(f"missing mandatory arguments: {', '.join(self.names)}")
