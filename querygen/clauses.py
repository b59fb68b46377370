"""Pieces of a split SQL template and the code-generating clauses built from them."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Optional

from querygen.model import GEN_KEYWORDS, Status

_TEMPLATE_SEPARATORS = re.compile(r"[: =,]")

_SECTION_TYPES = {
    "if": Status.IF,
    "else": Status.ELSE,
    "for": Status.FOR,
    "where": Status.WHERE,
    "set": Status.SET,
    "end": Status.END,
    "trim": Status.TRIM,
}


@dataclass
class ForRange:
    """The loop header of a ``for`` template."""

    index: str = ""
    value: str = ""
    suffix: str = ""
    range_list: str = ""

    def __str__(self) -> str:
        return f"for {self.index}, {self.value} := range {self.range_list}"


@dataclass
class Part:
    """One chunk of a split SQL template."""

    type: Status = Status.UNKNOWN
    value: str = ""
    for_range: ForRange = field(default_factory=ForRange)
    sql_slice: Optional[Any] = None
    split_list: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        if self.type == Status.FOR:
            return str(self.for_range)
        return self.value

    def is_end(self) -> bool:
        """Return True if this part closes a block."""
        return self.type == Status.END

    def split_template(self) -> None:
        """Split the template text into words on colons, spaces, equals signs and commas."""
        self.split_list = [w for w in _TEMPLATE_SEPARATORS.split(self.value.strip()) if w]

    def check_template(self) -> None:
        """Validate the template and set its type; raise ValueError on bad syntax."""
        if not self.split_list:
            raise ValueError("template is null")
        if GEN_KEYWORDS.contain(self.value):
            raise ValueError("template can not use gen keywords")
        self.section_type(self.split_list[0])
        if self.type == Status.FOR:
            if len(self.split_list) != 5:
                raise ValueError(f"for range syntax error: {self.value}")
            if self.sql_slice is not None and self.sql_slice.has_same_name(self.split_list[2]):
                raise ValueError("cannot use the same value name in different for loops")
            self.for_range.index = self.split_list[1]
            self.for_range.value = self.split_list[2]
            self.for_range.range_list = self.split_list[4]

    def section_type(self, word: str) -> None:
        """Set the type from a template keyword; raise ValueError for unknown ones."""
        try:
            self.type = _SECTION_TYPES[word]
        except KeyError:
            raise ValueError(f"unknown syntax: {word}") from None

    def sql_param_name(self) -> str:
        """Return the value with dots removed, usable as a parameter key."""
        return self.value.replace(".", "")


@dataclass
class _ClauseBase:
    var_name: str = ""
    type: Status = Status.UNKNOWN

    def __str__(self) -> str:
        return self.render()

    def render(self) -> str:  # pragma: no cover - overridden
        raise NotImplementedError


@dataclass
class SQLClause(_ClauseBase):
    """A run of literal SQL and variables written into a builder."""

    value: list[str] = field(default_factory=list)

    def render(self) -> str:
        """Return the concatenated string expression, with one trailing space."""
        sql = "+".join(self.value)
        if sql.startswith('"'):
            sql = '"' + sql.lstrip('" ')
        if not sql.endswith(' "'):
            sql += '+" "'
        return sql.replace('"+"', "")

    def create(self) -> str:
        return f"{self.var_name}.WriteString({self.render()})"

    def finish(self) -> str:
        return f"{self.var_name}.WriteString({self.render()})"


@dataclass
class IfClause(_ClauseBase):
    """A conditional block."""

    value: list[Any] = field(default_factory=list)
    part: Part = field(default_factory=Part)

    def render(self) -> str:
        return self.part.value

    def create(self) -> str:
        return f"{self.render()} {{"

    def finish(self) -> str:
        return "}"


@dataclass
class ElseClause(IfClause):
    """An else branch of a conditional block."""

    def render(self) -> str:
        return self.part.value

    def create(self) -> str:
        return f"}} {self.render()} {{"

    def finish(self) -> str:
        return ""


@dataclass
class WhereClause(_ClauseBase):
    """A WHERE block collected into its own builder."""

    value: list[Any] = field(default_factory=list)

    def render(self) -> str:
        return f"helper.WhereTrim({self.var_name}.String())"

    def create(self) -> str:
        return f"var {self.var_name} strings.Builder"

    def finish(self, name: str) -> str:
        return f"helper.JoinWhereBuilder(&{name},{self.var_name})"


@dataclass
class SetClause(_ClauseBase):
    """A SET block collected into its own builder."""

    value: list[Any] = field(default_factory=list)

    def render(self) -> str:
        return f"helper.SetTrim({self.var_name}.String())"

    def create(self) -> str:
        return f"var {self.var_name} strings.Builder"

    def finish(self, name: str) -> str:
        return f"helper.JoinSetBuilder(&{name},{self.var_name})"


@dataclass
class TrimClause(_ClauseBase):
    """A block whose leading and trailing connectives are trimmed."""

    value: list[Any] = field(default_factory=list)

    def render(self) -> str:
        return f"helper.TrimALL({self.var_name}.String())"

    def create(self) -> str:
        return f"var {self.var_name} strings.Builder"

    def finish(self, name: str) -> str:
        return f"helper.JoinTrimAllBuilder(&{name},{self.var_name})"


@dataclass
class ForClause(_ClauseBase):
    """A loop block."""

    value: list[Any] = field(default_factory=list)
    for_range: ForRange = field(default_factory=ForRange)
    for_part: Part = field(default_factory=Part)

    def render(self) -> str:
        return self.for_part.value + "{"

    def create(self) -> str:
        return self.render()

    def finish(self) -> str:
        return "}"