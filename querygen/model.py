"""Core model types: SQL template statuses, keyword sets, fields and options."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

DEFAULT_MODEL_PKG = "model"

FIELD_OPTION_TYPE = "field"
METHOD_OPTION_TYPE = "method"


class Status(enum.IntEnum):
    """Kind of a chunk of a split SQL template."""

    UNKNOWN = 0
    SQL = 1
    DATA = 2
    VARIABLE = 3
    IF = 4
    ELSE = 5
    WHERE = 6
    SET = 7
    FOR = 8
    END = 9
    TRIM = 10


class SourceCode(enum.IntEnum):
    """Where a model's description came from."""

    STRUCT = 0
    TABLE = 1
    OBJECT = 2


@dataclass(frozen=True)
class KeyWord:
    """A set of reserved words."""

    words: tuple[str, ...] = ()

    def full_match(self, word: str) -> bool:
        """Return True if ``word`` equals one of the keywords."""
        return word in self.words

    def contain(self, text: str) -> bool:
        """Return True if any keyword occurs inside ``text``."""
        return any(item in text for item in self.words)


GORM_KEYWORDS = KeyWord(
    (
        "UnderlyingDB", "UseDB", "UseModel", "UseTable", "Quote", "Debug", "TableName", "WithContext",
        "As", "Not", "Or", "Build", "Columns", "Hints",
        "Distinct", "Omit",
        "Select", "Where", "Order", "Group", "Having", "Limit", "Offset",
        "Join", "LeftJoin", "RightJoin",
        "Save", "Create", "CreateInBatches",
        "Update", "Updates", "UpdateColumn", "UpdateColumns",
        "Find", "FindInBatches", "First", "Take", "Last", "Pluck", "Count",
        "Scan", "ScanRows", "Row", "Rows",
        "Delete", "Unscoped",
        "Scopes",
    )
)

DO_KEYWORDS = KeyWord(("Alias", "TableName", "WithContext"))

GEN_KEYWORDS = KeyWord(("generateSQL", "whereClause", "setClause"))


DEFAULT_DATA_TYPE = "string"


def _tinyint(detail_type: str) -> str:
    if detail_type.strip().startswith("tinyint(1)"):
        return "bool"
    return "int32"


def _const(value: str) -> Callable[[str], str]:
    return lambda _detail: value


_DATA_TYPES: dict[str, Callable[[str], str]] = {
    "numeric": _const("int32"),
    "integer": _const("int32"),
    "int": _const("int32"),
    "smallint": _const("int32"),
    "mediumint": _const("int32"),
    "bigint": _const("int64"),
    "float": _const("float32"),
    "real": _const("float64"),
    "double": _const("float64"),
    "decimal": _const("float64"),
    "char": _const("string"),
    "varchar": _const("string"),
    "tinytext": _const("string"),
    "mediumtext": _const("string"),
    "longtext": _const("string"),
    "binary": _const("[]byte"),
    "varbinary": _const("[]byte"),
    "tinyblob": _const("[]byte"),
    "blob": _const("[]byte"),
    "mediumblob": _const("[]byte"),
    "longblob": _const("[]byte"),
    "text": _const("string"),
    "json": _const("string"),
    "enum": _const("string"),
    "time": _const("time.Time"),
    "date": _const("time.Time"),
    "datetime": _const("time.Time"),
    "timestamp": _const("time.Time"),
    "year": _const("int32"),
    "bit": _const("[]uint8"),
    "boolean": _const("bool"),
    "tinyint": _tinyint,
}


def map_data_type(data_type: str, detail_type: str) -> str:
    """Map a database column type to a generated field type."""
    convert = _DATA_TYPES.get(data_type.lower())
    if convert is None:
        return DEFAULT_DATA_TYPE
    return convert(detail_type)


_TITLED_TYPES = frozenset(
    {
        "string", "bytes",
        "int", "int8", "int16", "int32", "int64",
        "uint", "uint8", "uint16", "uint32", "uint64",
        "float64", "float32",
        "bool",
    }
)


@dataclass
class Field:
    """A field of a generated model."""

    name: str = ""
    type: str = ""
    column_name: str = ""
    column_comment: str = ""
    multiline_comment: bool = False
    tag: dict[str, str] = field(default_factory=dict)
    gorm_tag: dict[str, list[str]] = field(default_factory=dict)
    custom_gen_type: str = ""
    relation: Optional[Any] = None

    def is_relation(self) -> bool:
        """Return True if the field describes a relationship."""
        return self.relation is not None

    def gen_type(self) -> str:
        """Return the name of the query field kind for this field."""
        if self.is_relation():
            return self.type
        if self.custom_gen_type:
            return self.custom_gen_type
        typ = self.type.lstrip("*")
        if typ in _TITLED_TYPES:
            return typ[:1].upper() + typ[1:]
        if typ == "time.Time":
            return "Time"
        if typ in ("json.RawMessage", "[]byte"):
            return "Bytes"
        if typ == "serializer":
            return "Serializer"
        return "Field"

    def escape_keyword(self) -> Field:
        """Escape the name against the default reserved words."""
        return self.escape_keyword_for(GORM_KEYWORDS)

    def escape_keyword_for(self, keywords: KeyWord) -> Field:
        """Append an underscore to the name if it is a reserved word."""
        if keywords.full_match(self.name):
            self.name += "_"
        return self


class SQLBuffer:
    """Accumulates SQL text, collapsing runs of whitespace into one space."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def __len__(self) -> int:
        return sum(len(part) for part in self._parts)

    def __str__(self) -> str:
        return "".join(self._parts)

    def write(self, text: str) -> None:
        """Append text verbatim."""
        if text:
            self._parts.append(text)

    def write_sql(self, char: str) -> None:
        """Append a character, turning newlines, tabs and spaces into a single space."""
        if char in ("\n", "\t", " "):
            if not self._parts or not self._parts[-1].endswith(" "):
                self._parts.append(" ")
        else:
            self.write(char)

    def dump(self) -> str:
        """Return the buffered text and clear the buffer."""
        text = "".join(self._parts)
        self._parts.clear()
        return text


FieldOperator = Callable[[Field], Optional[Field]]


@dataclass(frozen=True)
class _FieldOption:
    operator: FieldOperator

    def __call__(self, fld: Optional[Field]) -> Optional[Field]:
        return self.operator(fld)

    def option_type(self) -> str:
        return FIELD_OPTION_TYPE


class ModifyFieldOpt(_FieldOption):
    """Option that rewrites a field."""

    def option_type(self) -> str:
        return FIELD_OPTION_TYPE


class FilterFieldOpt(_FieldOption):
    """Option that drops a field by returning None."""

    def option_type(self) -> str:
        return FIELD_OPTION_TYPE


class CreateFieldOpt(_FieldOption):
    """Option that creates an extra field."""

    def option_type(self) -> str:
        return FIELD_OPTION_TYPE


@dataclass(frozen=True)
class AddMethodOpt:
    """Option that supplies custom methods for a model."""

    provider: Callable[[], Iterable[Any]]

    def option_type(self) -> str:
        return METHOD_OPTION_TYPE

    def methods(self) -> list[Any]:
        """Return the methods supplied by this option."""
        return list(self.provider())


def sort_options(
    opts: Iterable[Any],
) -> tuple[list[ModifyFieldOpt], list[FilterFieldOpt], list[CreateFieldOpt], list[AddMethodOpt]]:
    """Split options by kind, keeping their order; unknown options are ignored."""
    modify: list[ModifyFieldOpt] = []
    filters: list[FilterFieldOpt] = []
    create: list[CreateFieldOpt] = []
    methods: list[AddMethodOpt] = []
    for opt in opts:
        if isinstance(opt, ModifyFieldOpt):
            modify.append(opt)
        elif isinstance(opt, FilterFieldOpt):
            filters.append(opt)
        elif isinstance(opt, CreateFieldOpt):
            create.append(opt)
        elif isinstance(opt, AddMethodOpt):
            methods.append(opt)
    return modify, filters, create, methods