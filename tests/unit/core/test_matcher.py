"""Unit tests for directory/application name matching."""

import pytest
from dirsweep.core.matcher import find_owner, matches, significant_words


class TestSignificantWords:
    """Tests for significant_words."""

    def test_splits_on_separators(self) -> None:
        """Spaces, hyphens, underscores and dots all split words."""
        assert significant_words("Steam Client-Helper_tool.data") == [
            "steam",
            "client",
            "helper",
            "tool",
            "data",
        ]

    def test_drops_short_words(self) -> None:
        """Words of three characters or fewer are ignored."""
        assert significant_words("The Big Game Studio") == ["game", "studio"]

    def test_casefolds(self) -> None:
        """Words are returned case-folded."""
        assert significant_words("JetBrains") == ["jetbrains"]

    def test_empty_name(self) -> None:
        """An empty name has no words."""
        assert significant_words("") == []


class TestMatches:
    """Tests for the matches predicate."""

    def test_candidate_contained_in_owner(self) -> None:
        """'Steam' is contained in 'Steam Client'."""
        assert matches("Steam", "Steam Client") is True

    def test_owner_contained_in_candidate(self) -> None:
        """'Discord' is contained in 'discordcanary'."""
        assert matches("discordcanary", "Discord") is True

    def test_case_insensitive(self) -> None:
        """Comparison ignores case."""
        assert matches("JETBRAINS", "jetbrains toolbox") is True

    def test_reverse_dns_identifier(self) -> None:
        """A directory named after the app matches its reverse-DNS ID."""
        assert matches("firefox", "org.mozilla.firefox") is True

    def test_word_level_fallback(self) -> None:
        """Names sharing a significant word match."""
        assert matches("Blender Foundation", "blender-lts") is True

    def test_word_substring_in_either_direction(self) -> None:
        """A word contained in another word counts as a match."""
        assert matches("Steam", "Steamworks SDK") is True

    def test_short_words_do_not_match(self) -> None:
        """Words of three characters or fewer never trigger the fallback."""
        assert matches("The Foo", "foo-bar the") is False

    def test_unrelated_names(self) -> None:
        """Unrelated names do not match."""
        assert matches("OldGameEngine", "Firefox") is False

    @pytest.mark.parametrize(("candidate", "owner"), [("", "Steam"), ("Steam", ""), ("  ", "x")])
    def test_blank_names_never_match(self, candidate: str, owner: str) -> None:
        """A blank name on either side never matches."""
        assert matches(candidate, owner) is False


class TestFindOwner:
    """Tests for find_owner."""

    def test_returns_first_match_in_order(self) -> None:
        """The first matching installed name wins."""
        installed = ["Firefox", "Steam Client", "Steamworks SDK"]
        assert find_owner("Steam", installed) == "Steam Client"

    def test_order_changes_owner(self) -> None:
        """Reordering the installed names changes which owner is reported."""
        installed = ["Steamworks SDK", "Steam Client"]
        assert find_owner("Steam", installed) == "Steamworks SDK"

    def test_no_match_returns_none(self) -> None:
        """None is returned when nothing matches."""
        assert find_owner("OldGameEngine", ["Firefox", "Thunderbird"]) is None

    def test_skips_blank_installed_names(self) -> None:
        """Blank installed names are skipped instead of matching everything."""
        assert find_owner("OldGameEngine", ["", "   "]) is None

    def test_empty_installed_list(self) -> None:
        """An empty installed list never produces an owner."""
        assert find_owner("Steam", []) is None
