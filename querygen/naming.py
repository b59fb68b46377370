"""Name helpers and field option application used during generation."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from querygen.model import Field

_MODEL_NAME = re.compile(r"\w+", re.ASCII)

_NAME_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_."
)


def is_capitalize(s: str) -> bool:
    """Return True if the first character is an ASCII capital letter."""
    return bool(s) and "A" <= s[0] <= "Z"


def is_end(char: str) -> bool:
    """Return True if ``char`` cannot be part of a template variable name."""
    return char not in _NAME_CHARS


def del_pointer_sym(name: str) -> str:
    """Strip leading pointer markers."""
    return name.lstrip("*")


def get_package_name(full_name: str) -> str:
    """Return the package part of a qualified type name."""
    return del_pointer_sym(full_name).split(".")[0]


def get_pure_name(s: str) -> str:
    """Return the lower-cased first letter of a type name."""
    return del_pointer_sym(s).lower()[0]


def get_struct_name(t: str) -> str:
    """Return the last dotted component of a type name."""
    return t.split(".")[-1]


def uncapitalize(s: str) -> str:
    """Lower-case the first character."""
    if not s:
        return ""
    return s[:1].lower() + s[1:]


def check_struct_name(name: str) -> None:
    """Raise ValueError if ``name`` is not a valid exported model name."""
    if not name:
        return
    if not _MODEL_NAME.fullmatch(name):
        raise ValueError("model name cannot contains invalid character")
    if not "A" <= name[0] <= "Z":
        raise ValueError("model name must be initial capital")


def filter_field(field: Field, opts: Iterable) -> Optional[Field]:
    """Return None if any filter option rejects the field, else the field."""
    for opt in opts:
        if opt(field) is None:
            return None
    return field


def modify_field(field: Field, opts: Iterable) -> Optional[Field]:
    """Apply each modify option in turn and return the result."""
    for opt in opts:
        field = opt(field)
    return field