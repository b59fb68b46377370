"""Configuration of model generation."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from querygen.model import (
    DEFAULT_MODEL_PKG,
    AddMethodOpt,
    CreateFieldOpt,
    FilterFieldOpt,
    ModifyFieldOpt,
    sort_options,
)

NameFunc = Callable[[str], str]


def _base_name(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip("/" + os.sep)
    if not stripped:
        return os.sep
    return os.path.basename(stripped)


@dataclass
class Config:
    """Settings that drive generation of one model."""

    model_pkg: str = ""
    table_prefix: str = ""
    table_name: str = ""
    model_name: str = ""
    import_pkg_paths: list[str] = field(default_factory=list)
    model_opts: list[Any] = field(default_factory=list)

    schema_name_opts: list[Callable[[Any], str]] = field(default_factory=list)
    table_name_ns: Optional[NameFunc] = None
    model_name_ns: Optional[NameFunc] = None
    file_name_ns: Optional[NameFunc] = None

    data_type_map: dict[str, Callable[[Any], str]] = field(default_factory=dict)
    field_nullable: bool = False
    field_coverable: bool = False
    field_signable: bool = False
    field_with_index_tag: bool = False
    field_with_type_tag: bool = False
    field_json_tag_ns: Optional[NameFunc] = None

    modify_opts: list[ModifyFieldOpt] = field(default_factory=list)
    filter_opts: list[FilterFieldOpt] = field(default_factory=list)
    create_opts: list[CreateFieldOpt] = field(default_factory=list)
    method_opts: list[AddMethodOpt] = field(default_factory=list)

    def preprocess(self) -> Config:
        """Fill in defaults and sort the model options by kind; returns self."""
        if not self.model_pkg:
            self.model_pkg = DEFAULT_MODEL_PKG
        self.model_pkg = _base_name(self.model_pkg)
        (
            self.modify_opts,
            self.filter_opts,
            self.create_opts,
            self.method_opts,
        ) = sort_options(self.model_opts)
        return self

    def get_names(self) -> tuple[str, str, str]:
        """Return the table name, struct name and file name for the model."""
        table_name, struct_name = self.table_name, self.model_name
        if self.model_name_ns is not None:
            struct_name = self.model_name_ns(table_name)
        if self.table_name_ns is not None:
            table_name = self.table_name_ns(table_name)
        if not table_name.startswith(self.table_prefix):
            table_name = self.table_prefix + table_name
        file_name = table_name.lower()
        if self.file_name_ns is not None:
            file_name = self.file_name_ns(self.table_name)
        return table_name, struct_name, file_name

    def get_model_methods(self) -> list[Any]:
        """Return the methods supplied by every method option, in order."""
        methods: list[Any] = []
        for opt in self.method_opts:
            methods.extend(opt.methods())
        return methods

    def get_schema_name(self, db: Any) -> str:
        """Return the first non-empty schema name produced by the schema options."""
        for opt in self.schema_name_opts:
            name = opt(db)
            if name:
                return name
        return ""