# querygen

Building blocks for generating query code from model descriptions and from SQL
templates written in method doc comments. It has no runtime dependencies.

## Modules

- `querygen.model`: `Field` (a generated model field, with `gen_type()` and
  keyword escaping), `map_data_type()` for mapping a column type such as
  `bigint` or `tinyint(1)` to a field type, `KeyWord` and the keyword sets
  `GORM_KEYWORDS`, `DO_KEYWORDS`, `GEN_KEYWORDS`, the `Status` of template
  parts, `SourceCode`, the whitespace-collapsing `SQLBuffer`, and the options
  `ModifyFieldOpt`, `FilterFieldOpt`, `CreateFieldOpt`, `AddMethodOpt` with
  `sort_options()`.
- `querygen.param`: `Param`, a method parameter or result, with type checks
  and `tmpl_string()`; `InterfaceInfo`; `fix_param_package_path()` and
  `params_to_string()`.
- `querygen.method`: `Method`, `DIYMethods` (with `parse_path()`) and
  `default_method_table_name()`.
- `querygen.naming`: name helpers (`uncapitalize`, `get_struct_name`,
  `get_package_name`, ...), `check_struct_name()`, which raises `ValueError`
  for an invalid model name, and `filter_field()` / `modify_field()`.
- `querygen.imports`: `ImportList`, an immutable, ordered, de-duplicated list
  of quoted import paths, and the ready-made `IMPORT_LIST` and
  `UNIT_TEST_IMPORT_LIST`.
- `querygen.pool`: `Pool`, a token pool that bounds concurrent work
  (`wait`, `done`, `num`, `size`, `wait_all`, `async_wait_all`). A negative
  size disables it.
- `querygen.config`: `Config`, with `preprocess()`, `get_names()`,
  `get_model_methods()` and `get_schema_name()`.
- `querygen.sqlhelper`: helpers that assemble `WHERE` and `SET` clauses and
  trim dangling `AND`, `OR`, `XOR` and commas (`where_clause`, `set_clause`,
  `if_clause` with `Cond`, `trim_all`, `join_where`, `join_set`,
  `join_trim_all`).
- `querygen.objects`: `Object`, `ObjectField` and `check_object()`.
- `querygen.clauses`: template parts (`Part`, `ForRange`) and the clause
  classes (`SQLClause`, `IfClause`, `ElseClause`, `WhereClause`, `SetClause`,
  `TrimClause`, `ForClause`) that render generated code lines.
- `querygen.section`: `Section`, which walks the parts of a split template and
  collects generated code lines in `tmpls`.
- `querygen.interface`: `InterfaceMethod`, which checks a method's parameters,
  results and SQL template and splits the template into a `Section`.

Invalid input is reported by raising `ValueError`.

## Template syntax

A method's SQL is taken from its doc comment:

```
select * from @@table {{where}}{{if id > 0}} id>@id{{end}}{{end}}
```

- `@name` binds a value as a query argument (`?`).
- `@@name` inserts `<receiver>.Quote(name)`; `@@table` inserts the method's
  table name.
- `{{if ...}}`, `{{else}}`, `{{where}}`, `{{set}}`, `{{trim}}` and
  `{{for i, v := range list}}` open blocks closed by `{{end}}`.

## Examples

```python
from querygen.sqlhelper import where_clause, set_clause

where_clause(["id = 1", "or name = 'a'"])   # " WHERE id = 1 or name = 'a'"
set_clause(["name = ?,", "age = ?"])        # " SET name = ?,age = ?"
```

```python
from querygen.interface import InterfaceMethod

method = InterfaceMethod(table="users", sql_string="select * from @@table")
method.sql_state_check_and_split()
method.section.build_sql()
method.section.tmpls   # ['generateSQL.WriteString("select * from users ")']
```

## What it does not do

The package does not connect to a database or read table schemas, does not
parse source files to find interfaces or methods, does not render or write
generated files, and has no command-line tool. It provides the pieces that
such a generator is built from.

## Tests

```
pip install -e .[test]
pytest
```