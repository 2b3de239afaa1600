"""
Constraint grammar for field annotation strings.

An annotation is a list of clauses separated by ';'. Each clause is either a bare
key (a flag-style directive such as 'mandatory') or a 'key:value' pair:

    "description:port number;shortname:p;mandatory;delimiter:,"
"""

from typing import List, NamedTuple

from .exceptions import ConstraintSyntaxError

CONSTRAINT_DELIMITER = ";"
KEY_VALUE_DELIMITER = ":"

DESCRIPTION = "description"
SHORTNAME = "shortname"
MANDATORY = "mandatory"
DELIMITER = "delimiter"

KNOWN_DIRECTIVES = (DESCRIPTION, SHORTNAME, MANDATORY, DELIMITER)


class Directive(NamedTuple):
    key: str
    value: str


def split_constraint(clause: str) -> Directive:
    """
    Split one clause into a Directive.

    Args:
        clause: A single clause of an annotation string

    Returns:
        Directive with an empty value when the clause has no ':'

    Raises:
        ConstraintSyntaxError: if the clause holds more than one ':'
    """
    parts = clause.split(KEY_VALUE_DELIMITER)
    if len(parts) == 1:
        return Directive(parts[0], "")
    if len(parts) == 2:
        return Directive(parts[0], parts[1])
    raise ConstraintSyntaxError(KEY_VALUE_DELIMITER, clause)


def split_clauses(annotation: str) -> List[str]:
    """Split an annotation string into its clauses, in source order."""
    return annotation.split(CONSTRAINT_DELIMITER)


def parse_constraints(annotation: str) -> List[Directive]:
    """Parse a whole annotation string into one Directive per clause."""
    return [split_constraint(clause) for clause in split_clauses(annotation)]
