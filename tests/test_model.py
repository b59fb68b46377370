import pytest

from querygen.model import (
    AddMethodOpt,
    CreateFieldOpt,
    Field,
    FilterFieldOpt,
    GEN_KEYWORDS,
    GORM_KEYWORDS,
    KeyWord,
    ModifyFieldOpt,
    SQLBuffer,
    map_data_type,
    sort_options,
)


def test_full_match_is_exact():
    assert GORM_KEYWORDS.full_match("Where")
    assert not GORM_KEYWORDS.full_match("where")
    assert not GORM_KEYWORDS.full_match("WhereX")


def test_contain_finds_substring():
    assert GEN_KEYWORDS.contain("if generateSQL != nil")
    assert not GEN_KEYWORDS.contain("if id > 0")


def test_custom_keyword_set():
    kw = KeyWord(("Foo",))
    assert kw.full_match("Foo")
    assert kw.contain("xFoox")
    assert not kw.contain("foo")


@pytest.mark.parametrize(
    "data_type,detail,expected",
    [
        ("bigint", "", "int64"),
        ("VARCHAR", "", "string"),
        ("tinyint", "tinyint(1)", "bool"),
        ("tinyint", "  tinyint(1) unsigned", "bool"),
        ("tinyint", "tinyint(4)", "int32"),
        ("datetime", "", "time.Time"),
        ("blob", "", "[]byte"),
        ("no_such_type", "", "string"),
    ],
)
def test_map_data_type(data_type, detail, expected):
    assert map_data_type(data_type, detail) == expected


@pytest.mark.parametrize(
    "typ,expected",
    [
        ("time.Time", "Time"),
        ("*time.Time", "Time"),
        ("[]byte", "Bytes"),
        ("json.RawMessage", "Bytes"),
        ("serializer", "Serializer"),
        ("custom.Thing", "Field"),
    ],
)
def test_gen_type_fixed_names(typ, expected):
    assert Field(type=typ).gen_type() == expected


@pytest.mark.parametrize("typ", ["string", "int64", "uint8", "float32", "bool", "bytes"])
def test_gen_type_titles_basic_types(typ):
    result = Field(type="*" + typ).gen_type()
    assert result.lower() == typ
    assert result[0].isupper()


def test_gen_type_relation_and_custom():
    assert Field(type="model.User", relation=object()).gen_type() == "model.User"
    assert Field(type="string", custom_gen_type="Custom").gen_type() == "Custom"


def test_is_relation():
    assert Field(relation=object()).is_relation()
    assert not Field().is_relation()


def test_escape_keyword():
    f = Field(name="Where")
    assert f.escape_keyword() is f
    assert f.name == "Where_"
    g = Field(name="Age").escape_keyword()
    assert g.name == "Age"


def test_escape_keyword_for_custom_set():
    f = Field(name="Alias").escape_keyword_for(KeyWord(("Alias",)))
    assert f.name == "Alias_"


def test_sql_buffer_collapses_whitespace():
    buf = SQLBuffer()
    for ch in "a\n\t b":
        buf.write_sql(ch)
    assert buf.dump() == "a b"
    assert buf.dump() == ""
    assert len(buf) == 0


def test_sql_buffer_leading_whitespace_and_write():
    buf = SQLBuffer()
    buf.write_sql("\n")
    buf.write_sql(" ")
    buf.write('"x y"')
    buf.write_sql(" ")
    buf.write_sql(" ")
    assert str(buf) == ' "x y" '
    assert len(buf) == 7


def test_option_types_and_sorting():
    modify = ModifyFieldOpt(lambda f: f)
    filt = FilterFieldOpt(lambda f: None)
    create = CreateFieldOpt(lambda f: Field(name="Extra"))
    add = AddMethodOpt(lambda: ["m1", "m2"])
    assert modify.option_type() == "field"
    assert filt.option_type() == "field"
    assert create.option_type() == "field"
    assert add.option_type() == "method"
    result = sort_options([add, create, filt, modify, "ignored", modify])
    assert result == ([modify, modify], [filt], [create], [add])


def test_options_apply():
    f = Field(name="a")
    assert ModifyFieldOpt(lambda x: x.escape_keyword())(f) is f
    assert FilterFieldOpt(lambda x: None)(f) is None
    assert CreateFieldOpt(lambda x: Field(name="made"))(None).name == "made"
    assert AddMethodOpt(lambda: iter(["x"])).methods() == ["x"]