"""Turns the chunks of a split SQL template into generated builder statements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from querygen.clauses import (
    ElseClause,
    ForClause,
    ForRange,
    IfClause,
    Part,
    SetClause,
    SQLClause,
    TrimClause,
    WhereClause,
)
from querygen.model import Status

Clause = Union[SQLClause, IfClause, ElseClause, WhereClause, SetClause, TrimClause, ForClause]

_PLAIN = (Status.SQL, Status.DATA, Status.VARIABLE)
_ROOT_NAME = "generateSQL"


def _quote(text: str) -> str:
    """Quote text as a double-quoted string literal in generated code."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
    )
    return f'"{escaped}"'


@dataclass
class Section:
    """A split SQL template and the builder statements generated from it."""

    members: list[Part] = field(default_factory=list)
    tmpls: list[str] = field(default_factory=list)
    current_index: int = 0
    clause_total: dict[Status, int] = field(
        default_factory=lambda: {Status.WHERE: 0, Status.SET: 0}
    )
    for_value: list[ForRange] = field(default_factory=list)

    def _next(self) -> Part:
        if self.current_index < len(self.members) - 1:
            self.current_index += 1
            return self.members[self.current_index]
        return Part(type=Status.END)

    def _current(self) -> Part:
        return self.members[self.current_index]

    def sub_index(self) -> None:
        """Step the cursor one chunk back."""
        self.current_index -= 1

    def has_more(self) -> bool:
        """Return True if chunks remain after the current one."""
        return self.current_index < len(self.members) - 1

    def is_null(self) -> bool:
        """Return True if there are no chunks."""
        return not self.members

    def _append_tmpl(self, value: str) -> None:
        self.tmpls.append(value)

    def has_same_name(self, value: str) -> bool:
        """Return True if a for loop already binds ``value``."""
        return any(p.type == Status.FOR and p.for_range.value == value for p in self.members)

    def build_sql(self) -> list[Clause]:
        """Walk the chunks, filling ``tmpls``; return the top-level clauses."""
        if self.is_null():
            raise ValueError("sql is null")
        name = _ROOT_NAME
        res: list[Clause] = []
        while True:
            c = self._current()
            if c.type in _PLAIN:
                sql_clause = self._parse_sql(name)
                res.append(sql_clause)
                self._append_tmpl(sql_clause.finish())
            elif c.type == Status.IF:
                if_clause = self._parse_if(name)
                res.append(if_clause)
                self._append_tmpl(if_clause.finish())
            elif c.type == Status.WHERE:
                where_clause = self._parse_where()
                res.append(where_clause)
                self._append_tmpl(where_clause.finish(name))
            elif c.type == Status.SET:
                set_clause = self._parse_set()
                res.append(set_clause)
                self._append_tmpl(set_clause.finish(name))
            elif c.type == Status.TRIM:
                trim_clause = self._parse_trim()
                res.append(trim_clause)
                self._append_tmpl(trim_clause.finish(name))
            elif c.type == Status.FOR:
                for_clause = self._parse_for(name)
                res.append(for_clause)
                self._append_tmpl(for_clause.finish())
            elif c.type == Status.END:
                pass
            else:
                raise ValueError(f"unknow clause:{c.value}")
            if not self.has_more():
                break
            self._next()
        return res

    def _parse_if(self, name: str) -> IfClause:
        res = IfClause(part=self._current())
        self._append_tmpl(res.create())
        if not self.has_more():
            return res
        c = self._next()
        while True:
            if c.type in _PLAIN:
                sql_clause = self._parse_sql(name)
                res.value.append(sql_clause)
                self._append_tmpl(sql_clause.finish())
            elif c.type == Status.IF:
                if_clause = self._parse_if(name)
                res.value.append(if_clause)
                self._append_tmpl(if_clause.finish())
            elif c.type == Status.WHERE:
                where_clause = self._parse_where()
                res.value.append(where_clause)
                self._append_tmpl(where_clause.finish(name))
            elif c.type == Status.SET:
                set_clause = self._parse_set()
                res.value.append(set_clause)
                self._append_tmpl(set_clause.finish(name))
            elif c.type == Status.ELSE:
                res.value.append(self._parse_else(name))
            elif c.type == Status.FOR:
                for_clause = self._parse_for(name)
                res.value.append(for_clause)
                self._append_tmpl(res.finish())
            elif c.type == Status.TRIM:
                trim_clause = self._parse_trim()
                res.value.append(trim_clause)
                self._append_tmpl(trim_clause.finish(name))
            elif c.type == Status.END:
                return res
            else:
                raise ValueError(f"unknow clause : {c.value}")
            if not self.has_more():
                break
            c = self._next()
        if c.is_end():
            raise ValueError("incomplete SQL,if not end")
        return res

    def _parse_else(self, name: str) -> ElseClause:
        res = ElseClause(part=self._current())
        self._append_tmpl(res.create())
        if not self.has_more():
            return res
        c = self._next()
        while True:
            if c.type in _PLAIN:
                sql_clause = self._parse_sql(name)
                res.value.append(sql_clause)
                self._append_tmpl(sql_clause.create())
            elif c.type == Status.IF:
                if_clause = self._parse_if(name)
                res.value.append(if_clause)
                self._append_tmpl(if_clause.finish())
            elif c.type == Status.WHERE:
                where_clause = self._parse_where()
                res.value.append(where_clause)
                self._append_tmpl(where_clause.finish(name))
            elif c.type == Status.SET:
                set_clause = self._parse_set()
                res.value.append(set_clause)
                self._append_tmpl(set_clause.finish(name))
            elif c.type == Status.ELSE:
                res.value.append(self._parse_else(name))
            elif c.type == Status.FOR:
                for_clause = self._parse_for(name)
                res.value.append(for_clause)
                self._append_tmpl(for_clause.finish())
            elif c.type == Status.TRIM:
                trim_clause = self._parse_trim()
                res.value.append(trim_clause)
                self._append_tmpl(trim_clause.finish(name))
            else:
                self.sub_index()
                return res
            if not self.has_more():
                break
            c = self._next()
        return res

    def _parse_where(self) -> WhereClause:
        c = self._current()
        res = WhereClause(var_name=self.get_name(c.type))
        self._append_tmpl(res.create())
        res.type = c.type
        if not self.has_more():
            return res
        c = self._next()
        while True:
            if c.type in _PLAIN:
                sql_clause = self._parse_sql(res.var_name)
                res.value.append(sql_clause)
                self._append_tmpl(sql_clause.finish())
            elif c.type == Status.IF:
                if_clause = self._parse_if(res.var_name)
                res.value.append(if_clause)
                self._append_tmpl(if_clause.finish())
            elif c.type == Status.FOR:
                for_clause = self._parse_for(res.var_name)
                res.value.append(for_clause)
                self._append_tmpl(for_clause.finish())
            elif c.type == Status.WHERE:
                where_clause = self._parse_where()
                res.value.append(where_clause)
                self._append_tmpl(where_clause.finish(res.var_name))
            elif c.type == Status.TRIM:
                trim_clause = self._parse_trim()
                res.value.append(trim_clause)
                self._append_tmpl(trim_clause.finish(res.var_name))
            elif c.type == Status.END:
                return res
            else:
                raise ValueError(f"unknow clause : {c.value}")
            if not self.has_more():
                break
            c = self._next()
        if c.is_end():
            return res
        raise ValueError("incomplete SQL,where not end")

    def _parse_set(self) -> SetClause:
        c = self._current()
        res = SetClause(var_name=self.get_name(c.type))
        self._append_tmpl(res.create())
        if not self.has_more():
            return res
        c = self._next()
        res.type = c.type
        while True:
            if c.type in _PLAIN:
                sql_clause = self._parse_sql(res.var_name)
                res.value.append(sql_clause)
                self._append_tmpl(sql_clause.finish())
            elif c.type == Status.IF:
                if_clause = self._parse_if(res.var_name)
                res.value.append(if_clause)
                self._append_tmpl(if_clause.finish())
            elif c.type == Status.FOR:
                for_clause = self._parse_for(res.var_name)
                res.value.append(for_clause)
                self._append_tmpl(for_clause.finish())
            elif c.type == Status.WHERE:
                where_clause = self._parse_where()
                res.value.append(where_clause)
                self._append_tmpl(where_clause.finish(res.var_name))
            elif c.type == Status.TRIM:
                trim_clause = self._parse_trim()
                res.value.append(trim_clause)
                self._append_tmpl(trim_clause.finish(res.var_name))
            elif c.type == Status.END:
                return res
            else:
                raise ValueError(f"unknow clause : {c.value}")
            if not self.has_more():
                break
            c = self._next()
        if c.is_end():
            raise ValueError("incomplete SQL,set not end")
        return res

    def _parse_trim(self) -> TrimClause:
        c = self._current()
        res = TrimClause(var_name=self.get_name(c.type))
        self._append_tmpl(res.create())
        if not self.has_more():
            return res
        c = self._next()
        res.type = c.type
        while True:
            if c.type in _PLAIN:
                sql_clause = self._parse_sql(res.var_name)
                res.value.append(sql_clause)
                self._append_tmpl(sql_clause.finish())
            elif c.type == Status.IF:
                if_clause = self._parse_if(res.var_name)
                res.value.append(if_clause)
                self._append_tmpl(if_clause.finish())
            elif c.type == Status.FOR:
                for_clause = self._parse_for(res.var_name)
                res.value.append(for_clause)
                self._append_tmpl(for_clause.finish())
            elif c.type == Status.WHERE:
                where_clause = self._parse_where()
                res.value.append(where_clause)
                self._append_tmpl(where_clause.finish(res.var_name))
            elif c.type == Status.END:
                return res
            else:
                raise ValueError(f"unknow clause : {c.value}")
            if not self.has_more():
                break
            c = self._next()
        if c.is_end():
            raise ValueError("incomplete SQL,set not end")
        return res

    def _parse_for(self, name: str) -> ForClause:
        res = ForClause(for_part=self._current())
        self._append_tmpl(res.create())
        self.for_value.append(res.for_part.for_range)
        if not self.has_more():
            return res
        c = self._next()
        while True:
            if c.type in _PLAIN:
                str_clause = self._parse_sql(name)
                res.value.append(str_clause)
                self._append_tmpl(f"{name}.WriteString({str_clause.render()})")
            elif c.type == Status.IF:
                if_clause = self._parse_if(name)
                res.value.append(if_clause)
                self._append_tmpl(if_clause.finish())
            elif c.type == Status.FOR:
                for_clause = self._parse_for(name)
                res.value.append(for_clause)
                self._append_tmpl(for_clause.finish())
            elif c.type == Status.TRIM:
                trim_clause = self._parse_trim()
                res.value.append(trim_clause)
                self._append_tmpl(trim_clause.finish(name))
            elif c.type == Status.END:
                self.for_value.pop()
                return res
            else:
                raise ValueError(f"unknow clause : {c.value}")
            if not self.has_more():
                break
            c = self._next()
        if c.is_end():
            raise ValueError("incomplete SQL,set not end")
        return res

    def _parse_sql(self, name: str) -> SQLClause:
        res = SQLClause(var_name=name, type=Status.SQL)
        while True:
            c = self._current()
            if c.type in (Status.SQL, Status.VARIABLE):
                res.value.append(c.value)
            elif c.type == Status.DATA:
                self._append_tmpl(f"params = append(params,{c.value})")
                res.value.append('"?"')
            else:
                self.sub_index()
                return res
            if not self.has_more():
                return res
            self._next()

    def check_sql_var(self, param: str, status: Status, method: Any) -> Part:
        """Return the chunk for a template variable, noting data use on ``method``."""
        if status == Status.VARIABLE and param == "table":
            return Part(type=Status.SQL, value=_quote(method.table))
        if status == Status.DATA:
            method.has_for_params = True
        if status == Status.VARIABLE:
            param = f"{method.s}.Quote({param})"
        return Part(type=status, value=param)

    def get_name(self, status: Status) -> str:
        """Return a fresh builder variable name for a block of the given kind."""
        prefixes = {Status.WHERE: "whereSQL", Status.SET: "setSQL", Status.TRIM: "trimSQL"}
        prefix = prefixes.get(status)
        if prefix is None:
            return _ROOT_NAME
        count = self.clause_total.get(status, 0)
        self.clause_total[status] = count + 1
        return f"{prefix}{count}"

    def check_template(self, tmpl: str) -> Part:
        """Parse a ``{{...}}`` template body into a chunk; raise ValueError on bad syntax."""
        part = Part(value=tmpl, sql_slice=self)
        part.split_template()
        part.check_template()
        return part