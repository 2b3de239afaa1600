"""
Closed set of field types that can be bound from the command line.

Declared field types are mapped onto ValueType once, so the rest of the package
dispatches on the enum instead of comparing type objects.
"""

from enum import Enum
from typing import Any, get_args, get_origin


class ValueType(Enum):
    BOOL = "bool"
    INT = "int"
    STRING = "str"
    STRING_ARRAY = "list[str]"
    INT_ARRAY = "list[int]"
    UNSUPPORTED = "unsupported"

    @property
    def is_array(self) -> bool:
        return self in (ValueType.STRING_ARRAY, ValueType.INT_ARRAY)


_SCALARS = {
    bool: ValueType.BOOL,
    int: ValueType.INT,
    str: ValueType.STRING,
}

_ARRAYS = {
    str: ValueType.STRING_ARRAY,
    int: ValueType.INT_ARRAY,
}


def resolve_value_type(declared_type: Any) -> ValueType:
    """
    Map a declared field type to its ValueType.

    Accepts both typing generics (List[int]) and builtin generics (list[int]).
    Bare ``list``, ``Optional[...]`` and any other annotation are unsupported.

    Args:
        declared_type: The resolved type hint of a record field

    Returns:
        The matching ValueType, or ValueType.UNSUPPORTED
    """
    # get_origin is None for plain classes (bool, int, str, custom types)
    origin = get_origin(declared_type)
    if origin is None:
        if isinstance(declared_type, type):
            return _SCALARS.get(declared_type, ValueType.UNSUPPORTED)
        return ValueType.UNSUPPORTED

    if origin is list:
        args = get_args(declared_type)
        if len(args) == 1:
            return _ARRAYS.get(args[0], ValueType.UNSUPPORTED)
    return ValueType.UNSUPPORTED


def type_name(declared_type: Any, value_type: ValueType) -> str:
    """Name of a declared type as shown in help output."""
    if value_type is not ValueType.UNSUPPORTED:
        return value_type.value
    return getattr(declared_type, "__name__", None) or repr(declared_type)


__all__ = ["ValueType", "resolve_value_type", "type_name"]
