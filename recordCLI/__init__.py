"""
recordCLI - Command-line binding for record dataclasses

A Python package that derives a command-line parser and its help message from a
single dataclass declaration. Each field becomes a parameter whose behaviour is
controlled by a short annotation string:
- description:<text>   help text for the parameter
- shortname:<name>     additional '-<name>' form
- mandatory            the parameter must be given
- delimiter:<char>     separator for list fields (default ',')

Example:
    >>> from dataclasses import dataclass, field
    >>> from typing import List
    >>> from recordCLI import RecordArgumentParser
    >>>
    >>> @dataclass
    >>> class ServerConfig:
    >>>     CLI_CONSTRAINTS = {
    >>>         'hosts': 'description:hosts to serve;delimiter: ',
    >>>     }
    >>>     port: int = field(default=8080, metadata={'cli': 'description:port number;shortname:p;mandatory'})
    >>>     verbose: bool = False
    >>>     hosts: List[str] = field(default_factory=list)
    >>>
    >>> parser = RecordArgumentParser(ServerConfig, prog="server")
    >>> config = parser.parse_args(["-p", "9000", "--verbose", "--hosts", "a b"])
    >>> config.port, config.verbose, config.hosts
    (9000, True, ['a', 'b'])
"""

__version__ = "0.1.0"

from .constraints import Directive, parse_constraints, split_constraint
from .exceptions import (
    RecordCLIError,
    ConstraintSyntaxError,
    UnknownDirectiveError,
    ParameterConstructionError,
    UnsupportedTypeError,
    ValueParseError,
    ArgumentParseError,
    UnknownArgumentError,
    DuplicateArgumentError,
    MissingValueError,
    MissingMandatoryError,
)
from .fields import FieldAccessor, PendingRecord, field_table
from .parameter import Parameter, parameters_from_record
from .parser import ParseSession, RecordArgumentParser
from .utils import record_to_dict, record_to_args, export_record_to_yaml
from .value_types import ValueType, resolve_value_type

__all__ = [
    # Core classes
    'Parameter',
    'ValueType',
    'Directive',

    # Constraint grammar
    'parse_constraints',
    'split_constraint',

    # Record introspection
    'FieldAccessor',
    'PendingRecord',
    'field_table',
    'parameters_from_record',
    'resolve_value_type',

    # Parser
    'RecordArgumentParser',
    'ParseSession',

    # Errors
    'RecordCLIError',
    'ConstraintSyntaxError',
    'UnknownDirectiveError',
    'ParameterConstructionError',
    'UnsupportedTypeError',
    'ValueParseError',
    'ArgumentParseError',
    'UnknownArgumentError',
    'DuplicateArgumentError',
    'MissingValueError',
    'MissingMandatoryError',

    # Utilities
    'record_to_dict',
    'record_to_args',
    'export_record_to_yaml',
]
