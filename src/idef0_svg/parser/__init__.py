"""Statement parsing and the process composition tree."""

from idef0_svg.parser.model import PREDICATE_SIDES, ROOT_NAME, Process, SideKind
from idef0_svg.parser.statements import Statement, parse_statements

__all__ = [
    "PREDICATE_SIDES",
    "ROOT_NAME",
    "Process",
    "SideKind",
    "Statement",
    "parse_statements",
]
