import pytest

from tovably.blob import (
    CollectingReporter,
    RawAbsent,
    RawParsed,
    RawString,
    decode_blob,
    decode_mapping,
    decode_sequence,
    tag_raw,
)

MALFORMED_INPUTS = [
    None,
    "",
    "   ",
    "not json",
    "{broken",
    "[1, 2",
    "null",
    "42",
    '"a string"',
    "true",
    42,
    3.5,
    True,
    object(),
]


def test_tag_raw_variants():
    assert tag_raw(None) == RawAbsent()
    assert tag_raw("") == RawAbsent()
    assert tag_raw("  \n") == RawAbsent()
    assert tag_raw('{"a": 1}') == RawString('{"a": 1}')
    assert tag_raw([1]) == RawParsed([1])


@pytest.mark.parametrize("value", MALFORMED_INPUTS + ['{"a": 1}'])
def test_decode_sequence_always_returns_list(value):
    result = decode_sequence(value, reporter=CollectingReporter())
    assert isinstance(result, list)


@pytest.mark.parametrize("value", MALFORMED_INPUTS + ["[1, 2, 3]"])
def test_decode_mapping_always_returns_dict(value):
    result = decode_mapping(value, reporter=CollectingReporter())
    assert isinstance(result, dict)


def test_decode_sequence_from_json_string():
    assert decode_sequence('[{"id": 1}, {"id": 2}]') == [{"id": 1}, {"id": 2}]


def test_decode_mapping_from_json_string():
    assert decode_mapping('{"bold": 55}') == {"bold": 55}


def test_already_decoded_values_are_returned_as_is():
    items = [{"id": 1}]
    profile = {"friendly": 50}
    assert decode_sequence(items) is items
    assert decode_mapping(profile) is profile


def test_tuple_becomes_list():
    assert decode_sequence(({"id": 1},)) == [{"id": 1}]


def test_normalizer_is_idempotent():
    once = decode_sequence('[{"id": 1}]')
    assert decode_sequence(once) is once

    mapping = decode_mapping('{"direct": 75}')
    assert decode_mapping(mapping) is mapping


def test_wrong_shape_json_falls_back_and_reports():
    reporter = CollectingReporter()
    assert decode_sequence('{"title": "x"}', reporter=reporter, label="campaign contents") == []
    assert reporter.messages == ["Unexpected campaign contents shape (expected sequence)"]
    assert reporter.reports[0][1] == "dict"


def test_wrong_shape_object_falls_back_and_reports():
    reporter = CollectingReporter()
    assert decode_mapping([1, 2], reporter=reporter) == {}
    assert len(reporter) == 1


def test_invalid_json_reports_decode_error():
    reporter = CollectingReporter()
    assert decode_mapping("{oops", reporter=reporter, label="tone profile") == {}
    message, error = reporter.reports[0]
    assert message == "Error parsing tone profile"
    assert isinstance(error, ValueError)


def test_absent_values_are_not_reported():
    reporter = CollectingReporter()
    decode_sequence(None, reporter=reporter)
    decode_mapping("", reporter=reporter)
    assert len(reporter) == 0


def test_default_reporter_prints(capsys):
    decode_sequence("nope")
    assert "Error parsing sequence" in capsys.readouterr().out


def test_collecting_reporter_forwards():
    forwarded = []
    reporter = CollectingReporter(forward=lambda message, error=None: forwarded.append(message))
    decode_mapping("[]", reporter=reporter)
    assert forwarded == reporter.messages


def test_unknown_shape_is_rejected():
    with pytest.raises(ValueError):
        decode_blob("[]", "set")


@pytest.mark.parametrize("decode", [decode_sequence, decode_mapping])
def test_deeply_nested_json_falls_back(decode):
    reporter = CollectingReporter()
    nested = "[" * 100000 + "]" * 100000
    result = decode(nested, reporter=reporter, label="contents")
    assert result in ([], {})
    assert reporter.messages == ["Error parsing contents"]
    assert isinstance(reporter.reports[0][1], RecursionError)
