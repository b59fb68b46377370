"""Model descriptions supplied directly by the user instead of a database table."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ObjectField:
    """A field of a user-described model."""

    name: str = ""
    type: str = ""
    column_name: str = ""
    gorm_tag: str = ""
    json_tag: str = ""
    tag: dict[str, str] = field(default_factory=dict)
    comment: str = ""


@dataclass
class Object:
    """A user-described model."""

    table_name: str = ""
    struct_name: str = ""
    file_name: str = ""
    import_pkg_paths: list[str] = field(default_factory=list)
    fields: list[ObjectField] = field(default_factory=list)


def check_object(obj: Object) -> None:
    """Raise ValueError if the object lacks a struct name or a field lacks name or type."""
    if not obj.struct_name:
        raise ValueError("object's struct name cannot be empty")
    for fld in obj.fields:
        if not fld.name:
            raise ValueError(f"object {obj.struct_name}'s field name cannot be empty")
        if not fld.type:
            raise ValueError(f"object {obj.struct_name}'s field type cannot be empty")