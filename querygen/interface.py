"""Custom query methods declared on interfaces, checked and split into SQL chunks."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from querygen.clauses import Part
from querygen.model import GORM_KEYWORDS, Field, SQLBuffer, Status
from querygen.naming import is_end
from querygen.param import Param, params_to_string
from querygen.section import Section

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def _quote(text: str) -> str:
    """Return ``text`` as a double-quoted literal for generated code."""
    out = []
    for ch in text:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\x{ord(ch):02x}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def _incomplete(sql: str) -> ValueError:
    return ValueError(f"incomplete SQL:{sql}")


@dataclass
class InterfaceMethod:
    """A method of a query interface, turned into a generated query method."""

    doc: str = ""
    s: str = ""
    origin_struct: Param = field(default_factory=Param)
    target_struct: str = ""
    method_name: str = ""
    params: list[Param] = field(default_factory=list)
    result: list[Param] = field(default_factory=list)
    result_data: Param = field(default_factory=Param)
    section: Optional[Section] = None
    sql_params: list[Param] = field(default_factory=list)
    sql_string: str = ""
    gorm_option: str = ""
    table: str = ""
    interface_name: str = ""
    package: str = ""
    has_for_params: bool = False

    def func_sign(self) -> str:
        """Return the generated method's signature."""
        return f"{self.method_name}({self.get_param_in_tmpl()}) ({self.get_result_param_in_tmpl()})"

    def has_sql_data(self) -> bool:
        """Return True if the generated code needs a params list."""
        return bool(self.sql_params) or self.has_for_params

    def has_got_point(self) -> bool:
        """Return True if the result is passed by address."""
        return not self.has_need_new_result()

    def has_need_new_result(self) -> bool:
        """Return True if the result must be allocated before use."""
        data = self.result_data
        return not data.is_array and ((data.is_null() and data.is_time()) or data.is_map())

    def gorm_run_method_name(self) -> str:
        """Return ``Find`` for slice results and ``Take`` otherwise."""
        return "Find" if self.result_data.is_array else "Take"

    def return_sql_result(self) -> bool:
        return any(res.is_sql_result() for res in self.result)

    def return_sql_row(self) -> bool:
        return any(res.is_sql_row() for res in self.result)

    def return_sql_rows(self) -> bool:
        return any(res.is_sql_rows() for res in self.result)

    def return_nothing(self) -> bool:
        """Return True if neither an error nor a row count is returned."""
        return not any(res.is_error() or res.name == "rowsAffected" for res in self.result)

    def return_rows_affected(self) -> bool:
        return any(res.name == "rowsAffected" for res in self.result)

    def return_error(self) -> bool:
        return any(res.is_error() for res in self.result)

    def is_repeat_from_different_interface(self, new_method: InterfaceMethod) -> bool:
        """Return True if another interface declares the same method for the same struct."""
        return (
            self.method_name == new_method.method_name
            and self.interface_name != new_method.interface_name
            and self.target_struct == new_method.target_struct
        )

    def is_repeat_from_same_interface(self, new_method: InterfaceMethod) -> bool:
        """Return True if the same interface declares the method again for the same struct."""
        return (
            self.method_name == new_method.method_name
            and self.interface_name == new_method.interface_name
            and self.target_struct == new_method.target_struct
        )

    def get_param_in_tmpl(self) -> str:
        return params_to_string(self.params)

    def get_result_param_in_tmpl(self) -> str:
        return params_to_string(self.result)

    def sql_param_name(self, param: str) -> str:
        """Return the params-map key for a SQL variable."""
        return param.replace(".", "")

    def doc_comment(self) -> str:
        """Return the doc text with a comment marker on every line."""
        return self.doc.strip().replace("\n", "\n// ").replace("//  ", "// ")

    def check_method(
        self,
        methods: Iterable[InterfaceMethod],
        model_struct_name: str,
        fields: Iterable[Field],
    ) -> None:
        """Raise ValueError if the method name clashes with a keyword, method or field."""
        if GORM_KEYWORDS.full_match(self.method_name):
            raise ValueError(f"can not use keyword as method name:{self.method_name}")
        for method in methods:
            if self.is_repeat_from_different_interface(method):
                raise ValueError(
                    "can not generate method with the same name from different interface:"
                    f"[{self.interface_name}.{self.method_name}] and "
                    f"[{method.interface_name}.{method.method_name}]"
                )
        for fld in fields:
            if fld.name == self.method_name:
                raise ValueError(
                    "can not generate method same name with struct field:"
                    f"[{self.interface_name}.{self.method_name}] and "
                    f"[{model_struct_name}.{fld.name}]"
                )

    def check_params(self, params: Iterable[Param]) -> None:
        """Resolve placeholder types of the parameters; raise ValueError on bad ones."""
        checked: list[Param] = []
        for original in params:
            param = replace(original)
            if param.package == "UNDEFINED":
                param.package = self.package
            elif param.is_error() or param.is_null():
                raise ValueError(
                    f"type error on interface [{self.interface_name}] param: [{param.name}]"
                )
            elif param.is_gen_m():
                param.type = "map[string]interface{}"
                param.package = ""
            elif param.is_gen_t():
                param.type = self.origin_struct.type
                param.package = self.origin_struct.package
            checked.append(param)
        self.params = checked

    def check_result(self, result: Iterable[Param]) -> None:
        """Resolve and name the results, choosing how the query runs; raise ValueError on bad ones."""
        where = f"[{self.interface_name}.{self.method_name}]"
        checked: list[Param] = []
        has_error = False
        for original in result:
            param = replace(original)
            if param.package == "UNDEFINED":
                param.package = self.package
            if param.is_gen_m():
                param.type = "map[string]interface{}"
                param.package = ""
            if param.in_main_pkg():
                raise ValueError(f"query method cannot return struct of main package in {where}")
            if param.is_error():
                if has_error:
                    raise ValueError(f"query method cannot return more than 1 error value in {where}")
                param.name = "err"
                has_error = True
            elif param.eq(self.origin_struct) or param.is_gen_t():
                if not self.result_data.is_null():
                    raise ValueError(f"query method cannot return more than 1 data value in {where}")
                param.name = "result"
                param.type = self.origin_struct.type
                param.package = self.origin_struct.package
                self.result_data = param
            elif param.is_interface():
                raise ValueError(f"query method can not return interface in {where}")
            elif param.is_gen_rows_affected():
                param.type = "int64"
                param.package = ""
                param.name = "rowsAffected"
                self.gorm_option = "Exec"
            elif param.is_sql_result():
                param.type = "Result"
                param.package = "sql"
                param.name = "result"
                self.gorm_option = "Statement.ConnPool.ExecContext"
            elif param.is_sql_row():
                param.type = "Row"
                param.package = "sql"
                param.name = "row"
                self.gorm_option = "Raw"
                param.is_pointer = True
            elif param.is_sql_rows():
                param.type = "Rows"
                param.package = "sql"
                param.name = "rows"
                self.gorm_option = "Raw"
                param.is_pointer = True
            else:
                if not self.result_data.is_null():
                    raise ValueError(f"query method cannot return more than 1 data value in {where}")
                if not param.package and not (param.is_base_type() or param.is_map() or param.is_time()):
                    param.package = self.package
                param.name = "result"
                self.result_data = param
            checked.append(param)
        self.result = checked

    def check_sql(self) -> None:
        """Take the SQL from the doc comment and split it; raise ValueError on bad SQL."""
        self.sql_string = self._parse_doc_string()
        try:
            self.sql_state_check_and_split()
        except ValueError as err:
            raise ValueError(
                f"interface {self.interface_name} member method {self.method_name} check sql err:{err}"
            ) from err

    def _parse_doc_string(self) -> str:
        doc = self._get_sql_doc_string().strip()
        lower = doc.lower()
        if lower.startswith("sql("):
            doc = doc[4:-1]
            self.gorm_option = "Raw" if not self.result_data.is_null() else "Exec"
        elif lower.startswith("where("):
            doc = doc[6:-1]
            self.gorm_option = "Where"
        else:
            self.gorm_option = "Raw" if not self.result_data.is_null() else "Exec"
        if len(doc) >= 2 and doc.startswith('"') and doc.endswith('"'):
            doc = doc[1:-1]
        elif doc == '"':
            doc = ""
        return doc

    def _get_sql_doc_string(self) -> str:
        doc = self.doc.strip()
        index = doc.find("\n\n")
        if index != -1:
            if self.method_name in doc[index + 2:]:
                doc = doc[:index]
            else:
                doc = doc[index + 2:]
        if self.method_name and doc.startswith(self.method_name):
            doc = doc[len(self.method_name):]
        return doc

    def sql_state_check_and_split(self) -> None:
        """Split ``sql_string`` into literal, variable and template chunks in ``section``."""
        sql = self.sql_string
        n = len(sql)
        section = Section()
        self.section = section
        buf = SQLBuffer()

        def flush_sql() -> None:
            clause = buf.dump()
            if clause.strip():
                section.members.append(Part(type=Status.SQL, value=_quote(clause)))

        def copy_quoted(i: int, quote: str) -> int:
            # sql[i] is the opening quote; returns the index of the closing one.
            buf.write(sql[i])
            i += 1
            while True:
                if i >= n:
                    raise _incomplete(sql)
                buf.write(sql[i])
                if sql[i] == quote and sql[i - 1] != "\\":
                    return i
                i += 1

        i = 0
        while i < n:
            b = sql[i]
            if b in ('"', "'"):
                i = copy_quoted(i, b)
            elif b == "\\":
                if i + 1 < n and sql[i + 1] == "@":
                    i += 1
                    buf.write_sql(sql[i])
                else:
                    buf.write_sql(b)
            elif b in ("{", "@"):
                flush_sql()
                if i + 1 >= n:
                    raise _incomplete(sql)
                if b == "{" and sql[i + 1] == "{":
                    i += 2
                    while True:
                        if i >= n:
                            raise _incomplete(sql)
                        if sql[i] == '"':
                            i = copy_quoted(i, '"') + 1
                        if i + 1 >= n:
                            raise _incomplete(sql)
                        if sql[i] == "}" and sql[i + 1] == "}":
                            i += 1
                            clause = buf.dump()
                            try:
                                part = section.check_template(clause)
                            except ValueError as err:
                                raise ValueError(
                                    f"sql [{sql}] dynamic template {clause} err:{err}"
                                ) from err
                            section.members.append(part)
                            break
                        buf.write_sql(sql[i])
                        i += 1
                if b == "@":
                    i += 1
                    status = Status.DATA
                    if sql[i] == "@":
                        i += 1
                        status = Status.VARIABLE
                    while True:
                        if i >= n or is_end(sql[i]):
                            var = buf.dump()
                            section.members.append(section.check_sql_var(var, status, self))
                            i -= 1
                            break
                        buf.write_sql(sql[i])
                        i += 1
            else:
                buf.write_sql(b)
            i += 1
        flush_sql()

    def _check_sql_var_by_params(self, param: str, status: Status) -> Part:
        struct_name = param.split(".")[0]
        for p in self.params:
            if p.name != struct_name:
                continue
            if p.name != param:
                p = Param(name=param, type="string")
            if status == Status.DATA:
                if not self._is_param_exist(param):
                    self.sql_params.append(p)
            elif status == Status.VARIABLE:
                if p.type != "string" or p.is_array:
                    raise ValueError(f"variable name must be string :{param} type is {p.type_name()}")
                param = f"{self.s}.Quote({param})"
            return Part(type=status, value=param)
        if param == "table":
            return Part(type=Status.SQL, value=_quote(self.table))
        raise ValueError(f"unknow variable param:{param}")

    def _is_param_exist(self, param_name: str) -> bool:
        return any(p.name == param_name for p in self.sql_params)

    def get_test_param_in_tmpl(self) -> str:
        """Return the argument list used by the generated unit test."""
        args = []
        for i, param in enumerate(self.params):
            typ = param.type
            if param.package:
                typ = f"{param.package}.{typ}"
            if param.is_array:
                typ = "[]" + typ
            if param.is_pointer:
                typ = "*" + typ
            args.append(f"tt.Input.Args[{i}].({typ})")
        return ",".join(args)

    def get_test_result_param_in_tmpl(self) -> str:
        """Return the result variable names used by the generated unit test."""
        return ",".join(f"res{i}" for i in range(1, len(self.result) + 1))

    def get_assert_in_tmpl(self) -> str:
        """Return one assertion line per result for the generated unit test."""
        name = _quote(self.method_name)
        return "\n".join(
            f"assert(t, {name}, res{i + 1}, tt.Expectation.Ret[{i}])" for i in range(len(self.result))
        )