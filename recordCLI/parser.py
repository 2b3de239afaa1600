"""
Argument parser that fills a record dataclass from a command line.

RecordArgumentParser walks an argument vector, hands each matched token to the
corresponding Parameter's setter and checks mandatory parameters at the end.
Each call to parse_args builds its own Parameters and ParseSession, so a parser
can be reused for any number of invocations.
"""

import logging
import os
import sys
from typing import Any, List, Optional, Sequence, Set, TextIO, Tuple

from .exceptions import (
    DuplicateArgumentError,
    MissingMandatoryError,
    MissingValueError,
    UnknownArgumentError,
)
from .fields import PendingRecord, record_type_of
from .parameter import Parameter, parameters_from_record
from .value_types import ValueType

logger = logging.getLogger(__name__)

HELP_TOKENS = ("--help", "-h")


class ParseSession:
    """Matched-parameter bookkeeping for a single parse pass, keyed by field name."""

    def __init__(self):
        self.matched: Set[str] = set()
        # field names in the order they were matched
        self.order: List[str] = []

    def is_matched(self, param: Parameter) -> bool:
        return param.name in self.matched

    def mark(self, param: Parameter) -> None:
        self.matched.add(param.name)
        self.order.append(param.name)
        param.use()

    def missing_mandatory(self, params: Sequence[Parameter]) -> List[Parameter]:
        return [p for p in params if p.mandatory and not self.is_matched(p)]


class RecordArgumentParser:
    """
    Command-line parser derived from a record dataclass.

    Example:
        >>> @dataclass
        >>> class ServerConfig:
        >>>     port: int = field(default=8080, metadata={"cli": "shortname:p;mandatory"})
        >>>     hosts: List[str] = field(default_factory=list)
        >>>
        >>> parser = RecordArgumentParser(ServerConfig, prog="server")
        >>> config = parser.parse_args(["-p", "9000", "--hosts", "a,b"])
    """

    def __init__(
            self,
            record_type: type,
            prog: Optional[str] = None,
            description: Optional[str] = None,
            add_help: bool = True,
    ):
        """
        Args:
            record_type: Dataclass whose fields become command-line parameters
            prog: Program name shown in usage (defaults to the basename of sys.argv[0])
            description: Text printed under the usage line
            add_help: If True, '--help' and '-h' print help and exit, unless a field claims them
        """
        self.record_type = record_type_of(record_type)
        self.prog = prog
        self.description = description
        self.add_help = add_help
        # Built eagerly so malformed annotations fail when the parser is created
        parameters_from_record(self.record_type)

    @property
    def parameters(self) -> List[Parameter]:
        """A fresh set of Parameters for the record type."""
        return parameters_from_record(self.record_type)

    def _prog_name(self) -> str:
        if self.prog is not None:
            return self.prog
        return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else self.record_type.__name__

    def parse_args(self, args: Optional[Sequence[str]] = None, namespace: Any = None) -> Any:
        """Parse an argument vector into a record. See parse_args_with_overrides."""
        record, _ = self.parse_args_with_overrides(args, namespace)
        return record

    def parse_args_with_overrides(
            self,
            args: Optional[Sequence[str]] = None,
            namespace: Any = None,
    ) -> Tuple[Any, List[str]]:
        """
        Parse an argument vector into a record.

        Args:
            args: Tokens to parse (defaults to sys.argv[1:])
            namespace: Record instance to fill; if None, a new record is built from the parsed values

        Returns:
            The filled record and the names of the fields set from the command line, in order

        Raises:
            UnknownArgumentError: if a token matches no parameter
            DuplicateArgumentError: if a parameter is given twice
            MissingValueError: if a value-bearing parameter is the last token
            ValueParseError: if a value cannot be converted to the field's type
            UnsupportedTypeError: if a matched field has a type that cannot be set
            MissingMandatoryError: if mandatory parameters were not given
        """
        if args is None:
            args = sys.argv[1:]
        record = PendingRecord(self.record_type) if namespace is None else namespace
        params = self.parameters
        session = ParseSession()

        tokens = list(args)
        position = 0
        while position < len(tokens):
            token = tokens[position]
            param = next((p for p in params if p.matches(token)), None)
            if param is None:
                if self.add_help and token in HELP_TOKENS:
                    self.print_help()
                    raise SystemExit(0)
                raise UnknownArgumentError(token)
            if session.is_matched(param):
                raise DuplicateArgumentError(token, param.name)

            setter = param.setter_callback(record)
            if param.value_type is ValueType.BOOL:
                setter("")
            else:
                position += 1
                if position >= len(tokens):
                    raise MissingValueError(token)
                setter(tokens[position])
            session.mark(param)
            logger.debug("Bound %s from %r", param.name, token)
            position += 1

        missing = session.missing_mandatory(params)
        if missing:
            raise MissingMandatoryError(p.cli_names()[0] for p in missing)
        if isinstance(record, PendingRecord):
            # Fields without a default cannot be left out even when not marked mandatory
            unset = {a.name for a in record.missing_required()}
            if unset:
                raise MissingMandatoryError(p.cli_names()[0] for p in params if p.name in unset)
            return record.build(), list(session.order)
        return record, list(session.order)

    def format_usage(self) -> str:
        return f"usage: {self._prog_name()} [options]\r\n"

    def format_help(self) -> str:
        """Usage line, optional description and one line per parameter."""
        lines = [self.format_usage()]
        if self.description:
            lines.append("\r\n" + self.description + "\r\n")
        lines.append("\r\noptions:\r\n")
        lines.extend("  " + param.get_help() for param in self.parameters)
        return "".join(lines)

    def print_help(self, file: Optional[TextIO] = None) -> None:
        if file is None:
            file = sys.stdout
        file.write(self.format_help())
