import pytest

from querygen.clauses import (
    ElseClause,
    ForClause,
    ForRange,
    IfClause,
    Part,
    SetClause,
    SQLClause,
    TrimClause,
    WhereClause,
)
from querygen.model import Status


class _Names:
    def __init__(self, taken=()):
        self.taken = set(taken)

    def has_same_name(self, value):
        return value in self.taken


def _checked(text, taken=()):
    part = Part(value=text, sql_slice=_Names(taken))
    part.split_template()
    part.check_template()
    return part


def test_sql_clause_merges_literals():
    clause = SQLClause(var_name="generateSQL", value=['"select * from "', '"users"'])
    assert clause.render() == '"select * from users "'
    assert clause.finish() == 'generateSQL.WriteString("select * from users ")'
    assert clause.create() == clause.finish()


def test_sql_clause_trims_leading_space():
    clause = SQLClause(var_name="whereSQL0", value=['" id>"', '"?"'])
    assert clause.finish() == 'whereSQL0.WriteString("id>? ")'


def test_sql_clause_keeps_single_trailing_space():
    clause = SQLClause(var_name="generateSQL", value=['"update users "'])
    assert clause.render().endswith(' "')
    assert clause.render().count(" \"") == 1


def test_where_clause_code():
    clause = WhereClause(var_name="whereSQL0")
    assert clause.create() == "var whereSQL0 strings.Builder"
    assert clause.finish("generateSQL") == "helper.JoinWhereBuilder(&generateSQL,whereSQL0)"
    assert "whereSQL0" in clause.render()


def test_set_clause_code():
    clause = SetClause(var_name="setSQL0")
    assert clause.create() == "var setSQL0 strings.Builder"
    assert clause.finish("generateSQL") == "helper.JoinSetBuilder(&generateSQL,setSQL0)"


def test_trim_clause_code():
    clause = TrimClause(var_name="trimSQL0")
    assert clause.create() == "var trimSQL0 strings.Builder"
    assert clause.finish("generateSQL") == "helper.JoinTrimAllBuilder(&generateSQL,trimSQL0)"


def test_if_clause_code():
    clause = IfClause(part=Part(type=Status.IF, value="if id > 0"))
    assert clause.create() == "if id > 0 {"
    assert clause.finish() == "}"


def test_else_clause_code():
    clause = ElseClause(part=Part(type=Status.ELSE, value="else"))
    assert clause.create() == "} else {"
    assert clause.finish() == ""


def test_for_clause_code():
    clause = ForClause(for_part=Part(type=Status.FOR, value="for _, name := range names"))
    assert clause.create() == "for _, name := range names{"
    assert clause.finish() == "}"


def test_check_template_for_loop():
    text = "for _, name := range names"
    part = _checked(text)
    assert part.type == Status.FOR
    assert part.for_range.index == "_"
    assert part.for_range.value == "name"
    assert part.for_range.range_list == "names"
    assert str(part) == text


@pytest.mark.parametrize(
    "text, status",
    [
        ("where", Status.WHERE),
        ("set", Status.SET),
        ("if id > 0", Status.IF),
        ("else", Status.ELSE),
        ("end", Status.END),
        ("trim", Status.TRIM),
    ],
)
def test_check_template_types(text, status):
    part = _checked(text)
    assert part.type == status
    assert str(part) == text


def test_check_template_unknown_syntax():
    with pytest.raises(ValueError, match="unknown syntax: foo"):
        _checked("foo bar")


def test_check_template_empty():
    with pytest.raises(ValueError, match="template is null"):
        _checked("   ")


def test_check_template_gen_keyword():
    with pytest.raises(ValueError, match="gen keywords"):
        _checked("if generateSQL")


def test_check_template_bad_for_syntax():
    with pytest.raises(ValueError, match="for range syntax error"):
        _checked("for name in names")


def test_check_template_duplicate_loop_value():
    with pytest.raises(ValueError, match="same value name"):
        _checked("for _, name := range names", taken=["name"])


def test_part_is_end_and_param_name():
    assert Part(type=Status.END).is_end()
    assert not Part(type=Status.IF).is_end()
    assert Part(value="user.name").sql_param_name() == "username"


def test_for_range_string():
    rng = ForRange(index="i", value="v", range_list="items")
    part = Part(type=Status.FOR, value="ignored", for_range=rng)
    assert str(part) == str(rng)
    assert str(rng).startswith("for i, v")