"""Unit tests for fuzzy task matching."""

import pytest

from hausgeist.core.fuzzy_match import find_best_match
from tests.unit.factories import make_task


@pytest.fixture
def candidates():
    return [
        make_task("1", "Brush teeth (morning)"),
        make_task("2", "Brush teeth"),
        make_task("3", "Tidy toys"),
        make_task("4", "Help set table"),
    ]


@pytest.mark.unit
class TestFindBestMatch:
    """Resolution order of find_best_match."""

    def test_exact_match_beats_contains(self, candidates):
        assert find_best_match("brush TEETH", candidates).id == "2"

    def test_title_contains_identifier(self, candidates):
        assert find_best_match("teeth", candidates).id == "1"

    def test_identifier_contains_title(self, candidates):
        assert find_best_match("tidy toys in the living room", candidates).id == "3"

    def test_word_overlap(self, candidates):
        # "brushing" partially matches "brush"; "teeth" matches exactly
        assert find_best_match("brushing my teeth", candidates).id == "1"

    def test_word_overlap_prefers_higher_score(self, candidates):
        assert find_best_match("setting the table", candidates).id == "4"

    def test_word_overlap_tie_keeps_first(self):
        tasks = [make_task("1", "Feed cat"), make_task("2", "Feed dog")]

        assert find_best_match("feeding", tasks).id == "1"

    def test_no_overlap_returns_none(self, candidates):
        assert find_best_match("walk the dog", candidates) is None

    def test_empty_identifier_returns_none(self, candidates):
        assert find_best_match("", candidates) is None

    def test_empty_candidates_returns_none(self):
        assert find_best_match("brush teeth", []) is None

    def test_every_verbatim_title_resolves_to_itself(self, candidates):
        for task in candidates:
            assert find_best_match(task.title, candidates).title == task.title
