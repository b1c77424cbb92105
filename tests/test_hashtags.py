"""Tests for hashtag parsing."""

from clipgraph.utils.hashtags import extract_hashtags, normalize_hashtag


def test_extracts_lowercase_tags_in_order():
    assert extract_hashtags("Sunset at the #Beach with #friends #beach") == ["beach", "friends"]


def test_empty_caption():
    assert extract_hashtags(None) == []
    assert extract_hashtags("") == []
    assert extract_hashtags("no tags here") == []


def test_tag_stops_at_punctuation():
    assert extract_hashtags("#dance! #fyp,#viral") == ["dance", "fyp", "viral"]


def test_normalize():
    assert normalize_hashtag("#Dance") == "dance"
    assert normalize_hashtag("  FYP ") == "fyp"
    assert normalize_hashtag("#") == ""
