"""Custom methods bound to generated model structs."""

from __future__ import annotations

from dataclasses import dataclass, field

from querygen.param import Param, params_to_string


def default_method_table_name(struct_name: str) -> Method:
    """Return the default ``TableName`` method for a model struct."""
    return Method(
        receiver=Param(is_pointer=True, type=struct_name),
        method_name="TableName",
        doc=f"TableName {struct_name}'s table name ",
        result=[Param(type="string")],
        body=f"{{\n\treturn TableName{struct_name}\n}} ",
    )


@dataclass
class Method:
    """A method attached to a query struct or a model struct."""

    receiver: Param = field(default_factory=Param)
    method_name: str = ""
    doc: str = ""
    params: list[Param] = field(default_factory=list)
    result: list[Param] = field(default_factory=list)
    body: str = ""

    def func_sign(self) -> str:
        """Return the method's signature without the receiver."""
        return f"{self.method_name}({self.get_param_in_tmpl()}) ({self.get_result_param_in_tmpl()})"

    def get_base_struct_tmpl(self) -> str:
        """Return the receiver as it appears in generated code."""
        return self.receiver.tmpl_string()

    def get_param_in_tmpl(self) -> str:
        """Return the parameter list as it appears in generated code."""
        return params_to_string(self.params)

    def get_result_param_in_tmpl(self) -> str:
        """Return the result list as it appears in generated code."""
        return params_to_string(self.result)

    def doc_comment(self) -> str:
        """Return the doc text with a comment marker after each line break."""
        return self.doc.strip().replace("\n", "\n//")


@dataclass
class DIYMethods:
    """User-defined methods to be bound to a model struct."""

    base_struct_type: str = ""
    method_name: str = ""
    pkg_path: str = ""
    methods: list[Method] = field(default_factory=list)

    def parse_path(self, path: str) -> None:
        """Fill package path, struct and method name from a qualified method value name.

        The path looks like ``pkg/path.(*Struct).Method-fm``.
        """
        parts = path.split(".")
        if len(parts) < 3:
            raise ValueError("parser diy method error")
        self.pkg_path = ".".join(parts[:-2])
        method_name = parts[-1]
        self.method_name = method_name[: len(method_name) - 3]
        self.base_struct_type = parts[-2].strip("()*")