import pytest

from hishtory.version import ParsedVersion, parse_version_string


@pytest.mark.parametrize(
    "text, expected",
    [
        ("v0.200", ParsedVersion(0, 200)),
        ("v1.200", ParsedVersion(1, 200)),
        ("v1.0", ParsedVersion(1, 0)),
        ("v0.216", ParsedVersion(0, 216)),
        ("v123.456", ParsedVersion(123, 456)),
    ],
)
def test_parse_version_string(text, expected):
    assert parse_version_string(text) == expected


@pytest.mark.parametrize("text", ["", "0.200", "v0", "v0.1 v0.2", "version"])
def test_parse_version_string_rejects(text):
    with pytest.raises(ValueError):
        parse_version_string(text)


@pytest.mark.parametrize(
    "left, right, expected",
    [
        (ParsedVersion(0, 200), ParsedVersion(0, 200), False),
        (ParsedVersion(1, 200), ParsedVersion(1, 200), False),
        (ParsedVersion(0, 201), ParsedVersion(0, 200), False),
        (ParsedVersion(1, 0), ParsedVersion(0, 200), False),
        (ParsedVersion(0, 199), ParsedVersion(0, 200), True),
        (ParsedVersion(0, 200), ParsedVersion(0, 205), True),
        (ParsedVersion(1, 200), ParsedVersion(1, 205), True),
        (ParsedVersion(0, 200), ParsedVersion(1, 1), True),
    ],
)
def test_version_less_than(left, right, expected):
    assert left.less_than(right) is expected
    assert (left < right) is expected


@pytest.mark.parametrize(
    "left, right, expected",
    [
        (ParsedVersion(0, 200), ParsedVersion(0, 200), False),
        (ParsedVersion(1, 200), ParsedVersion(1, 200), False),
        (ParsedVersion(0, 201), ParsedVersion(0, 200), True),
        (ParsedVersion(1, 0), ParsedVersion(0, 200), True),
        (ParsedVersion(1, 1), ParsedVersion(1, 0), True),
        (ParsedVersion(0, 199), ParsedVersion(0, 200), False),
        (ParsedVersion(0, 200), ParsedVersion(0, 205), False),
        (ParsedVersion(1, 200), ParsedVersion(1, 205), False),
        (ParsedVersion(0, 200), ParsedVersion(1, 1), False),
    ],
)
def test_version_greater_than(left, right, expected):
    assert left.greater_than(right) is expected
    assert (left > right) is expected


def test_str_round_trips_through_parse():
    version = ParsedVersion(0, 216)
    assert str(version) == "v0.216"
    assert parse_version_string(str(version)) == version


def test_decrement():
    assert ParsedVersion(0, 216).decrement() == ParsedVersion(0, 215)
    assert ParsedVersion(0, 216).decrement().less_than(ParsedVersion(0, 216))


@pytest.mark.parametrize("minor", [0, 1])
def test_decrement_too_small(minor):
    with pytest.raises(ValueError):
        ParsedVersion(1, minor).decrement()