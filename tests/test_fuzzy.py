"""Tests for fuzzy matching and ranking."""

from gx.ui.fuzzy import EXACT_MATCH_SCORE, best_match, filter_matches, fuzzy_match, match_score, rank


class TestFuzzyMatch:
    def test_empty_pattern_matches(self):
        assert fuzzy_match("", "anything") == (True, 0)

    def test_substring_scores_by_position(self):
        assert fuzzy_match("feat", "feature/x") == (True, 0)
        assert fuzzy_match("feat", "my-feature") == (True, 3)

    def test_scattered_characters_match(self):
        matched, _ = fuzzy_match("fbr", "feature/branch")
        assert matched

    def test_out_of_order_does_not_match(self):
        matched, _ = fuzzy_match("zyx", "xyz")
        assert not matched

    def test_case_insensitive(self):
        matched, score = fuzzy_match("MAIN", "main")
        assert matched
        assert score == 0

    def test_dash_counts_as_word_boundary(self):
        """A run starting right after a "-" scores like one after "/"."""
        assert fuzzy_match("lgn", "feat-login") == (True, 5)
        assert fuzzy_match("lgn", "feat/login") == (True, 5)
        assert fuzzy_match("lgn", "featxlogin") == (True, 15)


class TestMatchScore:
    def test_exact_case_insensitive_beats_everything(self):
        assert match_score("Main", "main") == EXACT_MATCH_SCORE

    def test_no_match_is_none(self):
        assert match_score("xyz", "main") is None


class TestRank:
    """Test ranking of candidate lists."""

    def test_exact_match_ranks_first(self):
        """Typing 'Main' puts 'main' ahead of longer branches containing it."""
        candidates = ["feature/main-page", "main-backup", "main"]
        assert rank("Main", candidates)[0] == "main"

    def test_excludes_non_matching(self):
        assert rank("dev", ["main", "develop", "release"]) == ["develop"]

    def test_dash_boundary_ranks_first(self):
        assert rank("lgn", ["featxlogin", "feat-login"]) == ["feat-login", "featxlogin"]

    def test_ties_keep_input_order(self):
        assert rank("x", ["ax", "bx", "cx"]) == ["ax", "bx", "cx"]

    def test_empty_query_keeps_everything_in_order(self):
        assert rank("", ["b", "a", "c"]) == ["b", "a", "c"]

    def test_custom_key(self):
        items = [("1", "main"), ("2", "develop")]
        assert rank("dev", items, key=lambda item: item[1]) == [("2", "develop")]


class TestFilterMatches:
    def test_keeps_input_order(self):
        candidates = ["fix typo in readme", "readme", "add readme section"]
        assert filter_matches("readme", candidates) == candidates

    def test_drops_non_matching(self):
        assert filter_matches("zz", ["a", "b"]) == []


class TestBestMatch:
    def test_picks_best(self):
        assert best_match("develop", ["feature/develop-docs", "develop"]) == "develop"

    def test_empty_query_is_none(self):
        assert best_match("", ["main"]) is None

    def test_nothing_matches(self):
        assert best_match("zzz", ["main", "develop"]) is None
