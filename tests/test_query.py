import pytest

from megatron.filtering import RelationError
from megatron.query import (
    Condition,
    Query,
    QueryError,
    evaluate_condition,
    parse_query,
    process_query,
    select_relation,
    tokenize,
)
from megatron.schema import load_schema

SCHEMA = ["PassengerId", "int", "Name", "string", "Fare", "float"]


@pytest.fixture
def workspace(tmp_path):
    (tmp_path / "schema").mkdir()
    (tmp_path / "data").mkdir()
    (tmp_path / "output").mkdir()
    (tmp_path / "schema" / "schema.txt").write_text(
        "titanic#PassengerId#int#Name#string#Fare#float\n"
    )
    (tmp_path / "data" / "titanic.csv").write_text(
        "PassengerId,Name,Fare\n1,Ann,7.25\n2,Bob,71.5\n3,Cid,8.05\n"
    )
    (tmp_path / "output" / "titanic.txt").write_text("1#Ann#7.25\n2#Bob#71.5\n")
    return tmp_path


def test_tokenize_splits_on_whitespace():
    assert tokenize("  & SELECT\t*  FROM x #\n") == ["&", "SELECT", "*", "FROM", "x", "#"]


def test_parse_query_with_where_and_output():
    query = parse_query("& SELECT * FROM titanic WHERE age >= 18 | adults #")
    assert query == Query("titanic", "adults", Condition("age", ">=", "18"))


def test_parse_query_plain():
    query = parse_query("& SELECT * FROM titanic #")
    assert query.table == "titanic"
    assert query.output == ""
    assert query.where is None


def test_parse_query_incomplete_where_is_ignored():
    query = parse_query("& SELECT * FROM titanic WHERE age >=")
    assert query.where is None


@pytest.mark.parametrize(
    "command",
    ["& SELECT * FROM #", "& PICK * FROM titanic #", "& SELECT * INTO titanic #"],
)
def test_parse_query_rejects_malformed(command):
    with pytest.raises(QueryError):
        parse_query(command)


def test_evaluate_int_condition():
    assert evaluate_condition(SCHEMA, ["5", "Ann", "1.0"], "PassengerId", ">=", "3")
    assert not evaluate_condition(SCHEMA, ["2", "Ann", "1.0"], "PassengerId", ">=", "3")


def test_evaluate_int_uses_leading_digits():
    assert evaluate_condition(SCHEMA, ["30abc", "Ann", "1.0"], "PassengerId", "==", "30")


def test_evaluate_int_unparsable_is_false():
    assert not evaluate_condition(SCHEMA, ["abc", "Ann", "1.0"], "PassengerId", "!=", "3")


def test_evaluate_float_condition():
    assert evaluate_condition(SCHEMA, ["1", "Ann", "71.5"], "Fare", ">", "10")
    assert not evaluate_condition(SCHEMA, ["1", "Ann", "7.25"], "Fare", ">", "10")


def test_evaluate_string_ordering():
    assert evaluate_condition(SCHEMA, ["1", "Ann", "1"], "Name", "<", "Bob")
    assert evaluate_condition(SCHEMA, ["1", "Ann", "1"], "Name", "==", "Ann")


def test_evaluate_missing_column_and_short_row():
    assert not evaluate_condition(SCHEMA, ["1", "Ann", "1"], "Age", "==", "1")
    assert not evaluate_condition(SCHEMA, ["1"], "Fare", "==", "1")


def test_evaluate_unknown_operator_is_false():
    assert not evaluate_condition(SCHEMA, ["1", "Ann", "1"], "PassengerId", "~", "1")


def test_process_query_prints_matches(workspace, capsys):
    result = process_query("& SELECT * FROM titanic WHERE Fare > 8 #", workspace)
    assert result == ["2,Bob,71.5", "3,Cid,8.05"]
    assert "2,Bob,71.5" in capsys.readouterr().out


def test_process_query_without_where_keeps_header(workspace):
    result = process_query("& SELECT * FROM titanic #", workspace)
    assert result[0] == "PassengerId,Name,Fare"
    assert len(result) == 4


def test_process_query_creates_table(workspace, capsys):
    result = process_query("& SELECT * FROM titanic WHERE Name == Bob | bobs #", workspace)
    assert result == ["2,Bob,71.5"]
    assert (workspace / "output" / "bobs.txt").read_text() == "2,Bob,71.5\n"
    assert load_schema(workspace / "schema" / "schema.txt", "bobs") == SCHEMA
    assert "New table 'bobs' created." in capsys.readouterr().out


def test_process_query_missing_data(workspace):
    with pytest.raises(QueryError):
        process_query("& SELECT * FROM nothing #", workspace)


def test_select_relation_prints_and_returns(workspace, capsys):
    lines = select_relation("titanic", workspace)
    assert lines == ["1#Ann#7.25", "2#Bob#71.5"]
    size = (workspace / "output" / "titanic.txt").stat().st_size
    assert f"[INFO] File size: {size} bytes" in capsys.readouterr().out


def test_select_relation_unknown_schema(workspace):
    with pytest.raises(RelationError):
        select_relation("nothing", workspace)


def test_select_relation_missing_data(workspace):
    with (workspace / "schema" / "schema.txt").open("a") as handle:
        handle.write("ghost#a#int\n")
    with pytest.raises(RelationError):
        select_relation("ghost", workspace)


def test_select_relation_missing_catalogue(tmp_path):
    with pytest.raises(RelationError):
        select_relation("titanic", tmp_path)