"""Parser for the IDEF0 statement language.

One statement per line, in the form ``Subject verb Object``::

    # comments and blank lines are ignored
    Cook Pizza receives Ingredients
    Cook Pizza is composed of Bake Pizza

Nouns start with anything but a lowercase letter (later words are
capitalised for you); verbs are lowercase words. Uses a line-by-line
regular expression rather than a grammar, since the language is tiny.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from idef0_svg.errors import StatementError

logger = logging.getLogger(__name__)

COMPOSITION = "is composed of"
"""Predicate that nests one process inside another."""

DEPENDENCY_PREDICATES = ("receives", "produces", "respects", "requires")
"""Predicates that attach an ICOM to a process, in I/O/C/M side order."""

PREDICATES = (*DEPENDENCY_PREDICATES, COMPOSITION)

_NOUN = r"[^a-z; ][^; ]*?(?: [^a-z; ][^; ]*?)*"
_VERB = r"[a-z][^ ]*?(?: [a-z][^ ]*?)*"
_STATEMENT_PATTERN = re.compile(rf"^({_NOUN}) ({_VERB}) ({_NOUN})$")
_NOUN_PATTERN = re.compile(rf"^{_NOUN}$")
_VERB_PATTERN = re.compile(rf"^{_VERB}$")
_WORD_START = re.compile(r"(^|\s)[a-z]")


@dataclass(frozen=True)
class Statement:
    """A single subject-predicate-object triple."""

    subject: str
    predicate: str
    object: str
    line_number: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return f"{self.subject} {self.predicate} {self.object}"

    def describe(self) -> str:
        """Return the statement text, prefixed by its line when known."""
        if self.line_number:
            return f"line {self.line_number}: {str(self)!r}"
        return repr(str(self))


def parse_statements(text: str) -> list[Statement]:
    """Parse statement text into a list of Statements.

    Raises StatementError naming the offending line for anything that is
    not a well-formed statement with a recognised verb.
    """
    statements: list[Statement] = []

    for line_number, raw in enumerate(text.split("\n"), start=1):
        line = _squish(raw)
        if not line or line.startswith("#"):
            continue

        match = _STATEMENT_PATTERN.match(line)
        if not match:
            raise StatementError(
                f"Invalid statement on line {line_number}: {line!r}",
                line_number=line_number,
            )

        statements.append(
            assemble(*match.groups(), line_number=line_number)
        )

    logger.debug("Parsed %d statements", len(statements))
    return statements


def assemble(
    subject: str,
    predicate: str,
    obj: str,
    line_number: int = 0,
) -> Statement:
    """Normalise and validate the three parts of a statement."""
    verb = _parse_verb(predicate, line_number)
    if verb not in PREDICATES:
        raise StatementError(
            f"Unknown verb {verb!r} on line {line_number}: expected one of "
            + ", ".join(repr(p) for p in PREDICATES),
            line_number=line_number,
        )
    return Statement(
        subject=_parse_noun(subject, line_number),
        predicate=verb,
        object=_parse_noun(obj, line_number),
        line_number=line_number,
    )


def _squish(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def _parse_noun(text: str, line_number: int) -> str:
    normalised = _WORD_START.sub(lambda m: m.group(0).upper(), _squish(text))
    if not _NOUN_PATTERN.match(normalised):
        raise StatementError(
            f"Invalid noun on line {line_number}: {text!r}",
            line_number=line_number,
        )
    return normalised


def _parse_verb(text: str, line_number: int) -> str:
    normalised = _squish(text).lower()
    if not _VERB_PATTERN.match(normalised):
        raise StatementError(
            f"Invalid verb on line {line_number}: {text!r}",
            line_number=line_number,
        )
    return normalised
