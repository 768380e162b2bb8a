import pytest

from megatron.filtering import RelationError, compare, filter_relation, is_number


@pytest.mark.parametrize(
    "text, expected",
    [("123", True), ("", False), ("-5", False), ("1.5", False), ("12a", False)],
)
def test_is_number(text, expected):
    assert is_number(text) is expected


@pytest.mark.parametrize(
    "lhs, rhs, op, type_name, expected",
    [
        ("30", "18", ">=", "int", True),
        ("18", "18", ">=", "int", True),
        ("17", "18", ">=", "int", False),
        ("5", "5", "!=", "int", False),
        ("abc", "18", ">", "int", False),
        ("-5", "3", "<", "int", False),
        ("1.5", "2", "<", "float", True),
        ("2.5", "2.5", "==", "float", True),
        ("12abc", "12", "==", "float", True),
        ("bob", "bob", "==", "string", True),
        ("bob", "ann", "!=", "string", True),
        ("bob", "ann", ">", "string", False),
        ("3", "2", "~", "int", False),
    ],
)
def test_compare(lhs, rhs, op, type_name, expected):
    assert compare(lhs, rhs, op, type_name) is expected


def test_compare_float_without_number_raises():
    with pytest.raises(ValueError):
        compare("abc", "1.0", "<", "float")


@pytest.fixture
def root(tmp_path):
    (tmp_path / "schema").mkdir()
    (tmp_path / "output").mkdir()
    (tmp_path / "schema" / "schema.txt").write_text(
        "people#name#string#age#int\n", encoding="utf-8"
    )
    (tmp_path / "output" / "people.txt").write_text(
        "ann#31\nbob#17\ncid#45\nbad\n", encoding="utf-8"
    )
    return tmp_path


def test_filter_relation_writes_matching_rows(root, capsys):
    result = filter_relation("people", "age", ">=", "30", "adults", root)
    assert result == root / "output" / "adults.txt"
    assert result.read_text(encoding="utf-8") == "ann#31\ncid#45\n"
    assert "[INFO] Filtered relation saved as 'adults'." in capsys.readouterr().out


def test_filter_relation_appends_schema(root):
    filter_relation("people", "name", "==", "bob", "bobs", root)
    schema = (root / "schema" / "schema.txt").read_text(encoding="utf-8")
    assert schema.splitlines() == ["people#name#string#age#int", "bobs#name#string#age#int"]
    assert (root / "output" / "bobs.txt").read_text(encoding="utf-8") == "bob#17\n"


def test_filtered_relation_can_be_filtered_again(root):
    filter_relation("people", "age", ">=", "30", "adults", root)
    result = filter_relation("adults", "age", "<", "40", "young_adults", root)
    assert result.read_text(encoding="utf-8") == "ann#31\n"


def test_unknown_attribute(root):
    with pytest.raises(RelationError, match="Attribute not found"):
        filter_relation("people", "height", ">", "1", "tall", root)


def test_unknown_relation_schema(root):
    (root / "output" / "ghosts.txt").write_text("x#1\n", encoding="utf-8")
    with pytest.raises(RelationError, match="ghosts"):
        filter_relation("ghosts", "age", ">", "1", "out", root)


def test_missing_data_file(root):
    with pytest.raises(RelationError, match="not found"):
        filter_relation("cars", "age", ">", "1", "out", root)
    assert not (root / "output" / "out.txt").exists()