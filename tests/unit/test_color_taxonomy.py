import pytest

from hair_advisor.core.parsing.color_taxonomy import (
    COLOR_KEYWORDS,
    COLOR_TAXONOMY,
    find_color_keyword,
    lookup_color,
)


@pytest.mark.parametrize("phrase,canonical", [
    ("dark brown", "Dark Brown"),
    ("DARK BROWN", "Dark Brown"),
    ("**Dark Brown**.", "Dark Brown"),
    ("dark brown hair", "Dark Brown"),
    ("Grey", "Gray"),
    ("Châtain clair", "Light Brown"),
    ("chatain clair", "Light Brown"),
    ("blond vénitien", "Strawberry Blonde"),
    ("أشقر", "Blonde"),
    ("اشقر", "Blonde"),
    ("بني داكن", "Dark Brown"),
    ("البني", "Brown"),
])
def test_lookup_color_matches_aliases(phrase, canonical):
    entry = lookup_color(phrase)

    assert entry is not None
    assert entry.canonical_name == canonical


def test_lookup_returns_hex_and_reference_note():
    entry = lookup_color("dark brown")

    assert entry.hex == "#3B2A22"
    assert entry.reference_note == "Similar to level 3 shades (3.0 Dark Brown)"


@pytest.mark.parametrize("phrase", ["lavender", "", "   ", "#5D4037"])
def test_lookup_misses_return_none(phrase):
    assert lookup_color(phrase) is None


def test_taxonomy_is_read_only():
    with pytest.raises(TypeError):
        COLOR_TAXONOMY["teal"] = COLOR_TAXONOMY["black"]


def test_every_keyword_resolves_in_taxonomy():
    for keyword in COLOR_KEYWORDS:
        assert lookup_color(keyword) is not None, keyword


@pytest.mark.parametrize("text,expected", [
    ("The hair is a deep auburn tone", "auburn"),
    ("Black roots with brown lengths", "black"),
    ("Des cheveux châtain foncé", "chatain"),
    ("شعر بني لامع", "بني"),
    ("اللون البني الداكن", "بني"),
    ("شعر كثيف والبني", "بني"),
    ("البنية قوية", None),
    ("البنية قوية واللون أحمر", "أحمر"),
    ("صبغة بالأسود", "أسود"),
    ("A reddish tint", None),
    ("", None),
])
def test_find_color_keyword(text, expected):
    assert find_color_keyword(text) == expected
