"""Ordered import lists for generated files."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import chain


@dataclass(frozen=True)
class ImportList:
    """An immutable list of quoted import paths; empty entries separate groups."""

    paths: tuple[str, ...] = ()

    def add(self, *args: str) -> ImportList:
        """Return a new list with the given paths appended, followed by a separator.

        Paths are quoted unless already quoted; paths already present are skipped.
        """
        added: list[str] = []
        for raw in args:
            path = raw.strip()
            if not path:
                added.append("")
                continue
            if not path.endswith('"'):
                path = f'"{path}"'
            if path not in self.paths:
                added.append(path)
        added.append("")
        return ImportList(self.paths + tuple(added))


def _grouped(*groups: tuple[str, ...]) -> ImportList:
    """Build a list from groups of paths, separated by blank entries."""
    joined = chain.from_iterable(
        (("",) if index else ()) + group for index, group in enumerate(groups)
    )
    return ImportList().add(*joined)


_ORM = "gorm.io/gorm"
_GEN = "gorm.io/gen"

IMPORT_LIST = _grouped(
    ("context", "database/sql", "strings"),
    (_ORM, f"{_ORM}/schema", f"{_ORM}/clause"),
    (_GEN, f"{_GEN}/field", f"{_GEN}/helper"),
    ("gorm.io/plugin/dbresolver",),
)

UNIT_TEST_IMPORT_LIST = _grouped(
    ("context", "fmt", "strconv", "testing"),
    ("gorm.io/driver/sqlite", _ORM),
)