"""Tests for MIME allow-list matching."""

from validation.mime_match import match_mime_type


def test_wildcard_accepts_same_discrete_type():
    assert match_mime_type("image/png", ["image/*"]) is True
    assert match_mime_type("image/jpeg", ["image/*"]) is True


def test_wildcard_rejects_other_discrete_type():
    assert match_mime_type("application/pdf", ["image/*"]) is False


def test_exact_match():
    assert match_mime_type("text/plain", ["text/plain"]) is True


def test_exact_pattern_rejects_sibling_type():
    assert match_mime_type("text/html", ["text/plain"]) is False


def test_any_pattern_in_list_accepts():
    allowed = ["application/pdf", "image/*", "text/plain"]
    assert match_mime_type("image/webp", allowed) is True
    assert match_mime_type("text/plain", allowed) is True
    assert match_mime_type("application/zip", allowed) is False


def test_wildcard_does_not_match_prefix_of_discrete_type():
    """'image/*' must not accept 'imagex/png'."""
    assert match_mime_type("imagex/png", ["image/*"]) is False


def test_missing_type_never_matches():
    assert match_mime_type(None, ["image/*", "text/plain"]) is False
    assert match_mime_type("", ["image/*"]) is False


def test_type_without_slash_only_matches_exactly():
    assert match_mime_type("image", ["image/*"]) is False
    assert match_mime_type("image", ["image"]) is True


def test_bare_wildcard_is_not_a_discrete_pattern():
    """'/*' has no discrete part and accepts nothing."""
    assert match_mime_type("image/png", ["/*"]) is False


def test_empty_allow_list_rejects():
    assert match_mime_type("image/png", []) is False
