"""Unit tests for text normalisation utilities."""

from cinecatalog.utils.text import (
    collapse_whitespace,
    escape_like,
    social_handle,
    title_case,
    unique_strings,
)


class TestTitleCase:
    def test_capitalises_each_word(self) -> None:
        assert title_case("ciencia ficción") == "Ciencia Ficción"

    def test_lowers_the_rest_of_each_word(self) -> None:
        assert title_case("martin SCORSESE") == "Martin Scorsese"

    def test_collapses_whitespace(self) -> None:
        assert title_case("  estados   unidos ") == "Estados Unidos"

    def test_keeps_accented_initials(self) -> None:
        assert title_case("álex de la iglesia") == "Álex De La Iglesia"

    def test_empty_string(self) -> None:
        assert title_case("") == ""


class TestCollapseWhitespace:
    def test_collapses_tabs_and_newlines(self) -> None:
        assert collapse_whitespace(" The\tGodfather \n Part II ") == "The Godfather Part II"


class TestUniqueStrings:
    def test_preserves_first_seen_order(self) -> None:
        assert unique_strings(["b", "a", "b"]) == ["b", "a"]

    def test_lower_makes_comparison_case_insensitive(self) -> None:
        assert unique_strings(["Acción", "acción ", "ACCIÓN"], lower=True) == ["acción"]

    def test_drops_blank_entries(self) -> None:
        assert unique_strings(["", "  ", "x"]) == ["x"]

    def test_none_gives_empty_list(self) -> None:
        assert unique_strings(None) == []


class TestSocialHandle:
    def test_adds_missing_at(self) -> None:
        assert social_handle("nolan") == "@nolan"

    def test_keeps_existing_at(self) -> None:
        assert social_handle(" @nolan ") == "@nolan"

    def test_passes_through_empty(self) -> None:
        assert social_handle(None) is None
        assert social_handle("") == ""


class TestEscapeLike:
    def test_escapes_wildcards(self) -> None:
        assert escape_like("50%_off") == "50\\%\\_off"

    def test_escapes_backslash_first(self) -> None:
        assert escape_like("a\\b%") == "a\\\\b\\%"

    def test_plain_text_unchanged(self) -> None:
        assert escape_like("Amélie") == "Amélie"
