from wiki.api.links import extract_wikilinks
from wiki.api.titles import normalize_title


def test_extract_wikilinks_simple():
    md = "This links to [[Alpha]] and [[Beta Gamma]]."
    assert extract_wikilinks(md) == ["Alpha", "Beta Gamma"]


def test_extract_wikilinks_ignores_broken():
    md = "Mismatched [[link and normal text, and nested [[Inner]] ok] text [[Z]]"
    # Our simple regex matches well-formed [[...]] only
    assert extract_wikilinks(md)[-1] == "Z"


def test_extract_wikilinks_without_markers():
    assert extract_wikilinks("") == []
    assert extract_wikilinks(None) == []
    assert extract_wikilinks("plain [link](http://example.com) and [single] brackets") == []


def test_extract_wikilinks_unclosed_marker_is_ignored():
    assert extract_wikilinks("dangling [[Never Closed and more text") == []
    assert extract_wikilinks("[[Open] half closed") == []


def test_extract_wikilinks_dedupes_case_and_whitespace_variants():
    md = "[[Existing Article]] then [[  existing article ]] then [[EXISTING ARTICLE]]"
    assert extract_wikilinks(md) == ["Existing Article"]


def test_extract_wikilinks_trims_and_skips_blank():
    assert extract_wikilinks("[[  Padded  ]] and [[   ]]") == ["Padded"]


def test_normalize_title():
    assert normalize_title("  Existing Article  ") == "existing article"
    assert normalize_title("") == ""
    assert normalize_title(None) == ""
    # Inner whitespace is kept.
    assert normalize_title("Two  Spaces") != normalize_title("Two Spaces")


def test_normalize_title_casefolds():
    assert normalize_title("Straße") == normalize_title("  STRASSE ")
    assert normalize_title("Getting Started") == normalize_title("getting started")
    assert normalize_title("Alpha") != normalize_title("Beta")
    assert normalize_title("  ") == ""
