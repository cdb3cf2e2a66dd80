import pytest

from podtato.durations import InvalidDuration, parse_duration


@pytest.mark.parametrize(
    "text,seconds",
    [
        ("0", 0.0),
        ("5s", 5.0),
        ("300ms", 0.3),
        ("1.5s", 1.5),
        ("2m", 120.0),
        ("1h2m3s", 3723.0),
        ("250us", 0.00025),
        ("-1s", -1.0),
        ("+10s", 10.0),
    ],
)
def test_parse_duration(text, seconds):
    assert parse_duration(text) == pytest.approx(seconds)


@pytest.mark.parametrize("text", ["", "5", "five", "5 s", "s", "1x", "-", "1s2"])
def test_parse_duration_rejects_malformed(text):
    with pytest.raises(InvalidDuration):
        parse_duration(text)


def test_invalid_duration_is_value_error():
    with pytest.raises(ValueError):
        parse_duration("soon")
