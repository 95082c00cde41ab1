"""Tests for slug generation."""

import re

from khuwani_tracker.services.slugs import generate_slug, random_suffix, slugify


def test_slugify_normalizes_name() -> None:
    assert slugify("  Haji   Abdul Rehman ") == "haji-abdul-rehman"


def test_slugify_drops_punctuation_and_repeated_hyphens() -> None:
    assert slugify("Mrs. Khan -- (late)!") == "mrs-khan-late"


def test_slugify_drops_non_ascii_letters() -> None:
    assert slugify("محمد Ali") == "ali"


def test_generate_slug_appends_base36_suffix() -> None:
    slug = generate_slug("Haji Abdul Rehman")

    assert re.fullmatch(r"haji-abdul-rehman-[0-9a-z]{5}", slug)


def test_generate_slug_uses_injected_choice() -> None:
    slug = generate_slug("Haji Abdul Rehman", choice=lambda _alphabet: "x")

    assert slug == "haji-abdul-rehman-xxxxx"


def test_generate_slug_without_usable_characters_is_suffix_only() -> None:
    slug = generate_slug("!!!", choice=lambda _alphabet: "a")

    assert slug == "aaaaa"


def test_random_suffix_varies() -> None:
    suffixes = {random_suffix() for _ in range(50)}

    assert len(suffixes) > 1
