"""Runtime helpers that assemble dynamic SQL fragments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable


@dataclass(frozen=True)
class Cond:
    """A piece of SQL that is used only when ``cond`` holds."""

    cond: bool
    result: str


def if_clause(conds: Iterable[Cond]) -> str:
    """Join the results of the conditions that hold, each trimmed of spaces."""
    clauses = [(c.result if c.cond else "").strip(" ") for c in conds]
    return " " + " ".join(clauses)


def where_clause(conds: Iterable[str]) -> str:
    """Build a WHERE clause, joining bare conditions with AND."""
    return _join_clause(conds, "WHERE", _where_value, " ")


def set_clause(conds: Iterable[str]) -> str:
    """Build a SET clause from assignments, joined by commas."""
    return _join_clause(conds, "SET", _set_value, ",")


def _join_clause(
    conds: Iterable[str], keyword: str, deal: Callable[[str], str], sep: str
) -> str:
    sql = trim_all(sep.join(deal(c) for c in conds))
    if sql:
        sql = f" {keyword} {sql}"
    return sql


def trim_all(text: str) -> str:
    """Strip a leading and a trailing AND/OR/XOR connective or comma."""
    return _trim_right(_trim_left(text))


def _trim_left(text: str) -> str:
    text = text.strip()
    lowercase = text.lower()
    if lowercase.startswith("and "):
        return text[4:]
    if lowercase.startswith("or "):
        return text[3:]
    if lowercase.startswith("xor "):
        return text[4:]
    if lowercase.startswith(","):
        return text[1:]
    return text


def _trim_right(text: str) -> str:
    text = text.strip()
    lowercase = text.lower()
    if lowercase.endswith(" and"):
        return text[:-3]
    if lowercase.endswith(" or"):
        return text[:-2]
    if lowercase.endswith(" xor"):
        return text[:-3]
    if lowercase.endswith(","):
        return text[:-1]
    return text


def _where_value(value: str) -> str:
    value = value.strip(" ")
    lowercase = value.lower()
    if not lowercase:
        return ""
    if lowercase.startswith(("and ", "or ", "xor ")):
        return value
    return "AND " + value


def _set_value(value: str) -> str:
    return value.strip(", ")


def join_where(value: str) -> str:
    """Return ``WHERE <value> `` for a non-empty trimmed value, else an empty string."""
    trimmed = trim_all(value)
    return f"WHERE {trimmed} " if trimmed else ""


def join_set(value: str) -> str:
    """Return ``SET <value> `` for a non-empty trimmed value, else an empty string."""
    trimmed = trim_all(value)
    return f"SET {trimmed} " if trimmed else ""


def join_trim_all(value: str) -> str:
    """Return the trimmed value followed by a space."""
    return trim_all(value) + " "