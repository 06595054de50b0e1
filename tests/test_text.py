import pytest

from toolkit import EmptyInputError, EmptySlugError, SlugifyError, random_string, slugify
from toolkit.core.config import RANDOM_STRING_SOURCE


def test_random_string_source_has_64_symbols():
    assert len(RANDOM_STRING_SOURCE) == 64
    assert len(set(RANDOM_STRING_SOURCE)) == 64


@pytest.mark.parametrize("length", [0, 1, 10, 25, 257])
def test_random_string_length(length):
    s = random_string(length)
    assert len(s) == length
    assert set(s) <= set(RANDOM_STRING_SOURCE)


def test_random_string_empty():
    assert random_string(0) == ""


def test_random_string_varies():
    assert len({random_string(25) for _ in range(20)}) == 20


def test_random_string_negative_length():
    with pytest.raises(ValueError):
        random_string(-1)


@pytest.mark.parametrize("value, expected", [
    (" hello world ", "hello-world"),
    (" hello   world ", "hello-world"),
    ("Hugo, what the *!&~ are YOU UP to Dawg?", "hugo-what-the-are-you-up-to-dawg"),
    ("now is the time 123", "now-is-the-time-123"),
    ("--already-slugged--", "already-slugged"),
])
def test_slugify(value, expected):
    assert slugify(value) == expected


@pytest.mark.parametrize("value", ["", "  "])
def test_slugify_empty_input(value):
    with pytest.raises(EmptyInputError, match="empty string not permitted"):
        slugify(value)


@pytest.mark.parametrize("value", ["&+=^", "こんにちは"])
def test_slugify_empty_result(value):
    with pytest.raises(EmptySlugError, match="slugified string is empty"):
        slugify(value)


def test_slugify_errors_are_value_errors():
    with pytest.raises(ValueError):
        slugify("!!!")
    assert issubclass(EmptyInputError, SlugifyError)
