from types import SimpleNamespace

import pytest

from querygen.clauses import Part
from querygen.model import Status
from querygen.section import Section


def sql(value):
    return Part(type=Status.SQL, value=value)


def data(value):
    return Part(type=Status.DATA, value=value)


def build(items):
    section = Section()
    for item in items:
        if isinstance(item, Part):
            section.members.append(item)
        else:
            section.members.append(section.check_template(item))
    return section


def test_empty_section_raises():
    with pytest.raises(ValueError, match="sql is null"):
        Section().build_sql()


def test_plain_sql():
    section = build([sql('"select * from "'), sql('"users"')])
    section.build_sql()
    assert section.tmpls == ['generateSQL.WriteString("select * from users ")']


def test_where_block():
    section = build([
        sql('"select * from "'), sql('"users"'), "where", sql('" id>"'), data("id"), "end",
    ])
    section.build_sql()
    assert section.tmpls == [
        'generateSQL.WriteString("select * from users ")',
        "var whereSQL0 strings.Builder",
        "params = append(params,id)",
        'whereSQL0.WriteString("id>? ")',
        "helper.JoinWhereBuilder(&generateSQL,whereSQL0)",
    ]


def test_where_with_if():
    section = build([
        sql('"select * from "'), sql('"users"'), "where", "if id > 0",
        sql('" id>"'), data("id"), "end", "end",
    ])
    section.build_sql()
    assert section.tmpls == [
        'generateSQL.WriteString("select * from users ")',
        "var whereSQL0 strings.Builder",
        "if id > 0 {",
        "params = append(params,id)",
        'whereSQL0.WriteString("id>? ")',
        "}",
        "helper.JoinWhereBuilder(&generateSQL,whereSQL0)",
    ]


def test_set_block():
    section = build([
        sql('"update "'), sql('"users"'), "set", 'if name != ""', sql('"name="'), data("name"),
        "end", sql('","'), "if id>0", sql('"id="'), data("id"), "end", "end",
        sql('" where id="'), data("id"),
    ])
    section.build_sql()
    assert section.tmpls == [
        'generateSQL.WriteString("update users ")',
        "var setSQL0 strings.Builder",
        'if name != "" {',
        "params = append(params,name)",
        'setSQL0.WriteString("name=? ")',
        "}",
        'setSQL0.WriteString(", ")',
        "if id>0 {",
        "params = append(params,id)",
        'setSQL0.WriteString("id=? ")',
        "}",
        "helper.JoinSetBuilder(&generateSQL,setSQL0)",
        "params = append(params,id)",
        'generateSQL.WriteString("where id=? ")',
    ]


def test_for_block():
    section = build([
        sql('"select * from "'), sql('"users"'), "where", "for _, name := range names",
        sql('"name="'), data("name"), "end", "end",
    ])
    section.build_sql()
    assert section.tmpls == [
        'generateSQL.WriteString("select * from users ")',
        "var whereSQL0 strings.Builder",
        "for _, name := range names{",
        "params = append(params,name)",
        'whereSQL0.WriteString("name=? ")',
        "}",
        "helper.JoinWhereBuilder(&generateSQL,whereSQL0)",
    ]
    assert section.for_value == []


def test_if_else_order():
    section = build(["if x", sql('"a"'), "else", sql('"b"'), "end"])
    clauses = section.build_sql()
    assert len(clauses) == 1
    assert section.tmpls[0] == "if x {"
    assert section.tmpls[-1] == "}"
    else_at = section.tmpls.index("} else {")
    assert 0 < else_at < len(section.tmpls) - 1


def test_unclosed_where_raises():
    section = build(["where", sql('"id=1"')])
    with pytest.raises(ValueError, match="where not end"):
        section.build_sql()


def test_get_name_counters():
    section = Section()
    assert section.get_name(Status.WHERE) == "whereSQL0"
    assert section.get_name(Status.WHERE) == "whereSQL1"
    assert section.get_name(Status.SET) == "setSQL0"
    assert section.get_name(Status.TRIM) == "trimSQL0"
    assert section.get_name(Status.IF) == "generateSQL"


@pytest.mark.parametrize(
    "tmpl,message",
    [
        ("", "template is null"),
        ("foo bar", "unknown syntax"),
        ("for a in b", "for range syntax error"),
        ("if generateSQL", "gen keywords"),
    ],
)
def test_check_template_errors(tmpl, message):
    with pytest.raises(ValueError, match=message):
        Section().check_template(tmpl)


def test_check_template_for_range():
    section = Section()
    part = section.check_template("for i, v := range list")
    assert part.type == Status.FOR
    assert (part.for_range.index, part.for_range.value, part.for_range.range_list) == ("i", "v", "list")
    section.members.append(part)
    assert section.has_same_name("v")
    with pytest.raises(ValueError, match="same value name"):
        section.check_template("for j, v := range other")


def test_cursor_helpers():
    section = build([sql('"a"'), sql('"b"')])
    assert not section.is_null()
    assert section.has_more()
    section.current_index = 1
    assert not section.has_more()
    section.sub_index()
    assert section.current_index == 0
    assert Section().is_null()


def test_check_sql_var():
    method = SimpleNamespace(table="users", s="u", has_for_params=False)
    section = Section()
    table = section.check_sql_var("table", Status.VARIABLE, method)
    assert (table.type, table.value) == (Status.SQL, '"users"')
    assert method.has_for_params is False
    column = section.check_sql_var("col", Status.VARIABLE, method)
    assert (column.type, column.value) == (Status.VARIABLE, "u.Quote(col)")
    value = section.check_sql_var("id", Status.DATA, method)
    assert (value.type, value.value) == (Status.DATA, "id")
    assert method.has_for_params is True