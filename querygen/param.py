"""Parameters of interface methods and the interfaces that hold them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

_BASE_TYPES = frozenset(
    {
        "string", "byte",
        "int", "int8", "int16", "int32", "int64",
        "uint", "uint8", "uint16", "uint32", "uint64",
        "float64", "float32",
        "bool",
        "time.Time",
    }
)


@dataclass
class Param:
    """A method parameter or result, e.g. ``user model.User``."""

    pkg_path: str = ""
    package: str = ""
    name: str = ""
    type: str = ""
    is_array: bool = False
    is_pointer: bool = False

    def eq(self, other: Param) -> bool:
        """Return True if both name the same type in the same package."""
        return self.package == other.package and self.type == other.type

    def is_error(self) -> bool:
        return self.type == "error"

    def is_gen_m(self) -> bool:
        return self.package == "gen" and self.type == "M"

    def is_gen_rows_affected(self) -> bool:
        return self.package == "gen" and self.type == "RowsAffected"

    def is_map(self) -> bool:
        return self.type.startswith("map[")

    def is_gen_t(self) -> bool:
        return self.package == "gen" and self.type == "T"

    def is_interface(self) -> bool:
        return self.type == "interface{}"

    def is_null(self) -> bool:
        return self.package == "" and self.type == "" and self.name == ""

    def in_main_pkg(self) -> bool:
        return self.package == "main"

    def is_time(self) -> bool:
        return self.package == "time" and self.type == "Time"

    def is_sql_result(self) -> bool:
        return (self.package, self.type) in (("sql", "Result"), ("gen", "SQLResult"))

    def is_sql_row(self) -> bool:
        return (self.package, self.type) in (("sql", "Row"), ("gen", "SQLRow"))

    def is_sql_rows(self) -> bool:
        return (self.package, self.type) in (("sql", "Rows"), ("gen", "SQLRows"))

    def type_name(self) -> str:
        """Return the type with an array marker when the param is a slice."""
        return "[]" + self.type if self.is_array else self.type

    def tmpl_string(self) -> str:
        """Render the param as it appears in a generated signature."""
        parts = []
        if self.name:
            parts.append(self.name + " ")
        if self.is_array:
            parts.append("[]")
        if self.is_pointer:
            parts.append("*")
        if self.package:
            parts.append(self.package + ".")
        parts.append(self.type)
        return "".join(parts)

    def is_base_type(self) -> bool:
        """Return True if the type is a builtin scalar or time.Time."""
        return self.type in _BASE_TYPES


@dataclass
class InterfaceInfo:
    """An interface whose methods describe custom queries."""

    name: str = ""
    doc: str = ""
    methods: list[Any] = field(default_factory=list)
    package: str = ""
    apply_struct: list[str] = field(default_factory=list)

    def match_struct(self, name: str) -> bool:
        """Return True if the interface applies to the named struct."""
        return name in self.apply_struct


def fix_param_package_path(imports: Mapping[str, str], params: Iterable[Param]) -> None:
    """Fill in each param's package path from the import table, in place."""
    for param in params:
        import_path = imports.get(param.package)
        if import_path is not None:
            param.pkg_path = import_path


def params_to_string(params: Iterable[Param]) -> str:
    """Join params as they appear in a generated signature."""
    return ",".join(param.tmpl_string() for param in params)