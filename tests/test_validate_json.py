from j2c.errors import EmptyInputError, InputNotFoundError, MalformedJsonError
from j2c.validation import validate_json_source, validate_json_text


def test_valid_object_stats():
    result = validate_json_text('{\n  "a": 1,\n  "b": [1, 2]\n}')
    assert result.is_valid
    assert result.exit_code == 0
    assert result.stats == {"type": "object", "properties": 2, "lines": 4}


def test_valid_array_stats():
    result = validate_json_text('[{"a": 1}, {"a": 2}, 3]')
    assert result.stats["type"] == "array"
    assert result.stats["items"] == 3
    assert "properties" not in result.stats


def test_scalar_document_is_valid():
    result = validate_json_text("42")
    assert result.is_valid
    assert result.stats["type"] == "number"


def test_empty_text_is_error():
    result = validate_json_text("  \n")
    assert not result.is_valid
    assert isinstance(result.errors[0], EmptyInputError)
    assert result.exit_code == 1


def test_syntax_error_reports_parser_message():
    result = validate_json_text('{"a": }')
    assert not result.is_valid
    error = result.errors[0]
    assert isinstance(error, MalformedJsonError)
    assert str(error).startswith("Invalid JSON:")


def test_empty_key_warning_only_when_asked():
    text = '{"": 1, "b": 2}'
    assert validate_json_text(text).warnings == []

    result = validate_json_text(text, check_empty_keys=True)
    assert result.is_valid
    assert len(result.warnings) == 1
    assert "empty string as property name" in result.warnings[0]


def test_source_missing_file(tmp_path):
    result = validate_json_source(str(tmp_path / "nope.json"))
    assert not result.is_valid
    assert isinstance(result.errors[0], InputNotFoundError)


def test_source_file_size(tmp_path):
    path = tmp_path / "data.json"
    path.write_text('{"a": 1}', encoding="utf-8")
    result = validate_json_source(str(path))
    assert result.is_valid
    assert result.stats["size_kb"] == 1
    assert result.summary().endswith("VALID (0 warnings)")


def test_nan_and_infinity_are_invalid():
    for text in ("[NaN]", '{"x": Infinity}'):
        result = validate_json_text(text)
        assert not result.is_valid
        assert isinstance(result.errors[0], MalformedJsonError)


def test_source_undecodable_bytes(tmp_path):
    path = tmp_path / "bad.json"
    path.write_bytes(b'{"a": "\xff\xfe"}')
    result = validate_json_source(str(path))
    assert not result.is_valid
    assert isinstance(result.errors[0], MalformedJsonError)
    assert result.summary().endswith("1 errors, 0 warnings")
