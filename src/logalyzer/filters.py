"""Filter term parsing and line matching."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel

from logalyzer.errors import FilterTermError
from logalyzer.linevec import LineVec, linevec_find

AND_TOKEN = "&&"
OR_TOKEN = "||"


class FilterConnective(StrEnum):
    """How the sub-terms of a filter term are combined."""

    ALL = "all"
    ANY = "any"


class FilterExpression(BaseModel):
    """A parsed filter term."""

    terms: list[str]
    connective: FilterConnective = FilterConnective.ANY


def parse_filter_term(term: str, *, extended: bool) -> FilterExpression:
    """Parse a filter term into sub-terms.

    In extended mode ``a && b`` requires all sub-terms and ``a || b`` any of
    them. Mixing both connectives raises ``FilterTermError``. Sub-terms are
    stripped and empty ones ignored; without a connective the whole term is
    used verbatim.
    """
    if not extended:
        return FilterExpression(terms=[term])

    has_and = AND_TOKEN in term
    has_or = OR_TOKEN in term
    if has_and and has_or:
        msg = f"filter term {term!r} mixes {AND_TOKEN!r} and {OR_TOKEN!r}"
        raise FilterTermError(msg)

    if has_and:
        token, connective = AND_TOKEN, FilterConnective.ALL
    elif has_or:
        token, connective = OR_TOKEN, FilterConnective.ANY
    else:
        return FilterExpression(terms=[term])

    terms = [part.strip() for part in term.split(token)]
    terms = [part for part in terms if part]
    if not terms:
        msg = f"filter term {term!r} has no sub-terms"
        raise FilterTermError(msg)
    return FilterExpression(terms=terms, connective=connective)


def matches_line(
    line: LineVec,
    expression: FilterExpression,
    *,
    match_case: bool = False,
    whole_word: bool = False,
) -> bool:
    """Check whether a line satisfies a parsed filter expression."""
    found = (bool(linevec_find(line, term, match_case, whole_word)) for term in expression.terms)
    if expression.connective == FilterConnective.ALL:
        return all(found)
    return any(found)
