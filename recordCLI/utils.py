"""
Utility functions for bound records.

This module turns a record back into its command-line form, either as a
field-name mapping (optionally saved as YAML) or as an argument vector that
RecordArgumentParser would parse into the same values.
"""

from typing import Any, Dict, Iterable, List, Optional
import yaml

from .fields import field_table, record_type_of
from .parameter import parameters_from_record
from .value_types import ValueType


def record_to_dict(record: Any, names: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """
    Collect a record's field values keyed by field name.

    Args:
        record: Record dataclass instance
        names: Field names to keep, e.g. the overrides returned by
               RecordArgumentParser.parse_args_with_overrides (default: all fields)

    Returns:
        Dictionary in field declaration order; list values are copied
    """
    wanted = None if names is None else set(names)
    result = {}
    for accessor in field_table(record_type_of(record)):
        if wanted is not None and accessor.name not in wanted:
            continue
        value = getattr(record, accessor.name)
        result[accessor.name] = list(value) if isinstance(value, list) else value
    return result


def record_to_args(record: Any, names: Optional[Iterable[str]] = None) -> List[str]:
    """
    Rebuild a command line that sets a record's bindable fields.

    Boolean fields appear as a bare flag when True and are left out otherwise.
    Empty lists and fields of unsupported types are left out. List elements are
    joined with the field's delimiter, so elements containing it do not survive.

    Args:
        record: Record dataclass instance
        names: Field names to include (default: all fields)

    Returns:
        Argument vector using each field's long CLI name
    """
    values = record_to_dict(record, names)
    args = []
    for param in parameters_from_record(record):
        if param.name not in values or param.value_type is ValueType.UNSUPPORTED:
            continue
        value = values[param.name]
        if param.value_type is ValueType.BOOL:
            if value:
                args.append(param.cli_names()[0])
            continue
        if param.is_array_type():
            if not value:
                continue
            value = param.delimiter.join(str(item) for item in value)
        args.extend([param.cli_names()[0], str(value)])
    return args


def export_record_to_yaml(record: Any, filepath: str, names: Optional[Iterable[str]] = None) -> None:
    """
    Export a record's field values to a YAML file.

    Args:
        record: Record dataclass instance to export
        filepath: Path to output YAML file
        names: Field names to export (default: all fields)
    """
    record_dict = record_to_dict(record, names)
    with open(filepath, 'w') as f:
        yaml.dump(record_dict, f, default_flow_style=False, sort_keys=False)
