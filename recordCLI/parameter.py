"""
Parameter: the command-line view of one record field.

A Parameter is built from a field's name, declared type, position and annotation
string. It knows which tokens select it on the command line, how to coerce a raw
string into the field's type and how to describe itself in help output.
"""

import logging
import re
from typing import Any, Callable, List

from .constraints import (
    DELIMITER,
    DESCRIPTION,
    KNOWN_DIRECTIVES,
    MANDATORY,
    SHORTNAME,
    Directive,
    split_clauses,
    split_constraint,
)
from .exceptions import (
    ConstraintSyntaxError,
    ParameterConstructionError,
    UnknownDirectiveError,
    UnsupportedTypeError,
    ValueParseError,
)
from .fields import FieldAccessor, accessor_at, field_table, record_type_of
from .value_types import ValueType, resolve_value_type, type_name

logger = logging.getLogger(__name__)

LONG_PREFIX = "--"
SHORT_PREFIX = "-"
DEFAULT_ARRAY_DELIMITER = ","
WHITESPACE_DELIMITER = " "

_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1
INT_DIGITS = 19

Setter = Callable[[str], None]


def parse_int(field_name: str, value: str) -> int:
    """
    Parse a base-10 signed 64-bit integer.

    Whitespace, underscores, non-ASCII digits and out-of-range values are rejected.
    """
    if _INTEGER.fullmatch(value) is None or len(value.lstrip("+-").lstrip("0")) > INT_DIGITS:
        raise ValueParseError(field_name, value)
    number = int(value)
    if not INT_MIN <= number <= INT_MAX:
        raise ValueParseError(field_name, value)
    return number


class Parameter:
    """Description of one CLI-bindable record field."""

    def __init__(
            self,
            name: str,
            declared_type: Any,
            index: int,
            annotation: str = "",
            default_description: str = "",
    ):
        """
        Build a Parameter and apply the directives of its annotation.

        Args:
            name: The field identifier, used for the long CLI form
            declared_type: The field's type hint
            index: Position of the field in its record
            annotation: Constraint string, e.g. "shortname:p;mandatory"
            default_description: Description used when no 'description' directive is given

        Raises:
            ParameterConstructionError: if a clause is malformed or uses an unknown key
        """
        self._name = name
        self._short_name = ""
        self._index = index
        self._description = default_description
        self._mandatory = False
        self._used = False
        self._type = declared_type
        self._value_type = resolve_value_type(declared_type)
        self._delimiter = DEFAULT_ARRAY_DELIMITER if self._value_type.is_array else ""

        if annotation == "":
            return

        for clause in split_clauses(annotation):
            try:
                self.apply_directive(split_constraint(clause))
            except (ConstraintSyntaxError, UnknownDirectiveError) as err:
                raise ParameterConstructionError(clause, name, err) from err
        logger.debug("Parameter %s built from annotation %r", name, annotation)

    @classmethod
    def from_field(cls, accessor: FieldAccessor) -> "Parameter":
        """Build a Parameter from a record field table entry."""
        return cls(
            accessor.name,
            accessor.type,
            accessor.index,
            annotation=accessor.annotation,
            default_description=accessor.default_description,
        )

    def apply_directive(self, directive: Directive) -> None:
        """Apply one directive; a later directive for the same key overwrites an earlier one."""
        key, value = directive
        if key not in KNOWN_DIRECTIVES:
            raise UnknownDirectiveError(key)
        if key == DESCRIPTION:
            self._description = value
        elif key == SHORTNAME:
            self._short_name = value
        elif key == MANDATORY:
            self._mandatory = True
        elif key == DELIMITER:
            self._delimiter = value

    @property
    def name(self) -> str:
        return self._name

    @property
    def short_name(self) -> str:
        return self._short_name

    @property
    def index(self) -> int:
        return self._index

    @property
    def description(self) -> str:
        return self._description

    @property
    def mandatory(self) -> bool:
        return self._mandatory

    @property
    def used(self) -> bool:
        """True once the parameter has been matched during a parse pass."""
        return self._used

    def use(self) -> None:
        self._used = True

    @property
    def delimiter(self) -> str:
        return self._delimiter

    @property
    def type(self) -> Any:
        """The declared type of the field."""
        return self._type

    @property
    def value_type(self) -> ValueType:
        return self._value_type

    def is_array_type(self) -> bool:
        return self._value_type.is_array

    def has_short_name(self) -> bool:
        return self._short_name != ""

    def cli_names(self) -> List[str]:
        names = [LONG_PREFIX + self._name.lower()]
        if self.has_short_name():
            names.append(SHORT_PREFIX + self._short_name.lower())
        return names

    def matches(self, token: str) -> bool:
        return token in self.cli_names()

    def split(self, value: str) -> List[str]:
        """Split a raw value on the delimiter; an empty delimiter yields single characters."""
        if self._delimiter == "":
            return list(value)
        return value.split(self._delimiter)

    def setter_callback(self, target: Any) -> Setter:
        """
        Return a function that sets this parameter's field on ``target``.

        The returned setter takes the raw string that followed the matched CLI
        name. Boolean setters ignore it and always store True.

        Args:
            target: The record instance to mutate

        Returns:
            A setter ``(value: str) -> None``

        Raises:
            UnsupportedTypeError: if the field's type is not one of the bindable types
        """
        dispatch = {
            ValueType.BOOL: self._set_bool,
            ValueType.INT: self._set_int,
            ValueType.STRING: self._set_string,
            ValueType.STRING_ARRAY: self._set_string_array,
            ValueType.INT_ARRAY: self._set_int_array,
        }
        if self._value_type not in dispatch:
            raise UnsupportedTypeError(self._name, self._type)
        return dispatch[self._value_type](target)

    def _assign(self, target: Any, value: Any) -> None:
        accessor_at(target, self._index).setter(target, value)

    def _set_bool(self, target: Any) -> Setter:
        def setter(value: str = "") -> None:
            self._assign(target, True)
        return setter

    def _set_int(self, target: Any) -> Setter:
        def setter(value: str) -> None:
            self._assign(target, parse_int(self._name, value))
        return setter

    def _set_string(self, target: Any) -> Setter:
        def setter(value: str) -> None:
            self._assign(target, value)
        return setter

    def _set_string_array(self, target: Any) -> Setter:
        def setter(value: str) -> None:
            self._assign(target, self.split(value))
        return setter

    def _set_int_array(self, target: Any) -> Setter:
        def setter(value: str) -> None:
            # Fully parsed before assignment so a bad element leaves the field untouched
            numbers = [parse_int(self._name, part) for part in self.split(value)]
            self._assign(target, numbers)
        return setter

    def get_help(self) -> str:
        """One help line: names, type, delimiter, mandatory marker and description."""
        parts = [" ".join(self.cli_names()), " ", type_name(self._type, self._value_type), " "]
        if self.is_array_type():
            parts.append("delimiter ")
            if self._delimiter == WHITESPACE_DELIMITER:
                parts.append("whitespace ")
            else:
                parts.append(self._delimiter + " ")
        if self._mandatory:
            parts.append("(mandatory) ")
        if self._description:
            parts.append(": " + self._description)
        parts.append("\r\n")
        return "".join(parts)

    def __repr__(self) -> str:
        return (f"Parameter(name={self._name!r}, short_name={self._short_name!r}, "
                f"index={self._index}, type={self._value_type.value}, mandatory={self._mandatory})")


def parameters_from_record(record: Any) -> List[Parameter]:
    """
    Build a fresh Parameter for every field of a record.

    Args:
        record: A dataclass type or instance

    Returns:
        Parameters in field declaration order
    """
    return [Parameter.from_field(accessor) for accessor in field_table(record_type_of(record))]
