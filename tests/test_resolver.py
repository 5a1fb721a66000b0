"""Entity resolution against a newest-first catalog snapshot."""

from ai_mode.resolver import find_matching_entry, normalize_title


def test_normalize_title():
    assert normalize_title("  The Room ") == "the room"
    assert normalize_title(None) == ""


def test_exact_match_is_case_insensitive(catalog):
    match = find_matching_entry("the room", catalog)
    assert match is not None
    assert match.id == "m1"
    assert match.status == "Finished"


def test_exact_match_beats_more_recent_substring(catalog):
    # "The Batman 2" is newer and contains "batman", but "Batman" is exact
    assert find_matching_entry("Batman", catalog).id == "m2"


def test_substring_either_direction(catalog):
    assert find_matching_entry("Room", catalog).id == "m1"
    assert find_matching_entry("The Room (2003)", catalog).id == "m1"


def test_best_similarity_wins_over_recency():
    snapshot = [
        {"id": "long", "title": "Dune Part Two Extended Edition"},
        {"id": "short", "title": "Dune Part Two"},
    ]
    assert find_matching_entry("dune part", snapshot).id == "short"


def test_ties_go_to_most_recent():
    snapshot = [
        {"id": "new", "title": "Dune A"},
        {"id": "old", "title": "Dune B"},
    ]
    assert find_matching_entry("dune", snapshot).id == "new"


def test_no_match(catalog):
    assert find_matching_entry("Inception", catalog) is None


def test_empty_title_never_matches(catalog):
    assert find_matching_entry("   ", catalog) is None
    assert find_matching_entry("", [{"id": "x", "title": ""}]) is None


def test_does_not_mutate_catalog(catalog):
    before = [dict(e) for e in catalog]
    find_matching_entry("batman", catalog)
    assert catalog == before
