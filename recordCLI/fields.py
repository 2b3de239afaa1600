"""
Static field tables for record dataclasses.

A record's fields are described once per record type: name, position, resolved
type hint and a setter closure. Parameters refer to fields only by position and
go through this table to mutate a record.
"""

import functools
import logging
from dataclasses import MISSING, fields, is_dataclass
from typing import Any, Callable, Dict, NamedTuple, Tuple, get_type_hints

logger = logging.getLogger(__name__)

METADATA_KEY = "cli"
CONSTRAINTS_ATTR = "CLI_CONSTRAINTS"
DOCS_ATTR = "PARAM_DOCS"


class FieldAccessor(NamedTuple):
    name: str
    index: int
    type: Any
    annotation: str
    default_description: str
    setter: Callable[[Any, Any], None]
    # True when the dataclass constructor needs a value for this field
    required: bool
    init: bool


class PendingRecord:
    """
    Stand-in target that collects field values before the record exists.

    Records whose fields have no defaults cannot be instantiated until every
    required value is known, so setters write into ``values`` instead and the
    record is built afterwards with build().
    """

    def __init__(self, record_type: type):
        self.record_type = record_type_of(record_type)
        self.values: Dict[str, Any] = {}

    def missing_required(self):
        """Accessors of required fields that have not been given a value."""
        return [a for a in field_table(self.record_type) if a.required and a.name not in self.values]

    def build(self) -> Any:
        table = field_table(self.record_type)
        init_values = {a.name: self.values[a.name] for a in table if a.init and a.name in self.values}
        record = self.record_type(**init_values)
        for accessor in table:
            if not accessor.init and accessor.name in self.values:
                setattr(record, accessor.name, self.values[accessor.name])
        return record


def _make_setter(name: str) -> Callable[[Any, Any], None]:
    def setter(record, value):
        if isinstance(record, PendingRecord):
            record.values[name] = value
        else:
            setattr(record, name, value)
    return setter


def record_type_of(record: Any) -> type:
    """Return the dataclass type of a record class or instance."""
    record_type = record if isinstance(record, type) else type(record)
    if not is_dataclass(record_type):
        raise TypeError(f"{record_type.__name__} is not a dataclass")
    return record_type


def annotation_for(record_type: type, field_obj) -> str:
    """
    Find the annotation string of one field.

    Field metadata wins over the class-level CLI_CONSTRAINTS mapping. Fields
    without either have an empty annotation.
    """
    if METADATA_KEY in field_obj.metadata:
        return field_obj.metadata[METADATA_KEY]
    constraints: Dict[str, str] = getattr(record_type, CONSTRAINTS_ATTR, None) or {}
    return constraints.get(field_obj.name, "")


@functools.lru_cache(maxsize=None)
def field_table(record_type: type) -> Tuple[FieldAccessor, ...]:
    """
    Build the accessor table of a dataclass type.

    Args:
        record_type: A dataclass type

    Returns:
        One FieldAccessor per field, in declaration order
    """
    hints = get_type_hints(record_type)
    docs: Dict[str, str] = getattr(record_type, DOCS_ATTR, None) or {}
    table = tuple(
        FieldAccessor(
            name=f.name,
            index=index,
            type=hints.get(f.name, f.type),
            annotation=annotation_for(record_type, f),
            default_description=docs.get(f.name, ""),
            setter=_make_setter(f.name),
            required=f.init and f.default is MISSING and f.default_factory is MISSING,
            init=f.init,
        )
        for index, f in enumerate(fields(record_type))
    )
    logger.debug("Built field table for %s with %d fields", record_type.__name__, len(table))
    return table


def accessor_at(record: Any, index: int) -> FieldAccessor:
    """
    Resolve a field accessor by position against a record instance.

    Raises:
        TypeError: if ``record`` is a class rather than an instance
    """
    if isinstance(record, PendingRecord):
        return field_table(record.record_type)[index]
    if isinstance(record, type):
        raise TypeError(f"expected a {record.__name__} instance, got the class itself")
    return field_table(record_type_of(record))[index]
