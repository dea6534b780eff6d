"""
Test suite for the word rules.

Covers every rejection kind the local rules can produce:
- TooShort, InvalidCharacter, WrongStart, LetterNotOnBoard
- SameSideAdjacent, DuplicateWord, LetterAlreadyUsed
plus the order the rules are applied in and incremental letter checks.
"""

import pytest
from src.verifiers import (
    Board,
    validate_word,
    validate_next_letter,
    normalize_word,
    describe_rejection,
)
from src.verifiers.rules import check_side_adjacency


BOARD = Board(
    top=("A", "T", "E"),
    left=("M", "P", "S"),
    right=("R", "O", "N"),
    bottom=("C", "I", "D"),
)


class TestBoardModel:
    """Test the board's side lookup."""

    def test_side_lookup(self):
        """Every letter maps to the side it was placed on."""
        assert BOARD.side_of("A") == "top"
        assert BOARD.side_of("M") == "left"
        assert BOARD.side_of("O") == "right"
        assert BOARD.side_of("D") == "bottom"

    def test_side_lookup_unknown_letter(self):
        """Letters that are not on the board have no side."""
        assert BOARD.side_of("Z") is None
        assert "Z" not in BOARD
        assert "A" in BOARD

    def test_letters_in_board_order(self):
        assert BOARD.letters == ["A", "T", "E", "M", "P", "S", "R", "O", "N", "C", "I", "D"]

    def test_board_is_immutable(self):
        with pytest.raises(Exception):
            BOARD.top = ("X", "Y", "Z")

    def test_letter_on_two_sides_rejected(self):
        """A letter may only sit on one side, or the lookup would be ambiguous."""
        with pytest.raises(ValueError, match="more than one side"):
            Board(
                top=("A", "T", "E"),
                left=("A", "P", "S"),
                right=("R", "O", "N"),
                bottom=("C", "I", "D"),
            )

    def test_uneven_sides_rejected(self):
        with pytest.raises(ValueError):
            Board(
                top=("A", "T", "E"),
                left=("M", "P"),
                right=("R", "O", "N"),
                bottom=("C", "I", "D"),
            )

    def test_non_letter_rejected(self):
        with pytest.raises(ValueError):
            Board(
                top=("a", "T", "E"),
                left=("M", "P", "S"),
                right=("R", "O", "N"),
                bottom=("C", "I", "D"),
            )


class TestValidWords:
    """Words that pass every local rule."""

    def test_first_word(self):
        """MOIST alternates sides all the way through."""
        assert validate_word("MOIST", BOARD) is None

    def test_chained_word(self):
        """A word starting with the required letter passes."""
        assert validate_word("TOAST", BOARD, used_words=["MOIST"], required_start="T") is None

    def test_minimum_length_word(self):
        assert validate_word("SCAM", BOARD) is None


class TestRejections:
    """Each rule produces its own rejection kind."""

    def test_too_short(self):
        rejection = validate_word("AT", BOARD)
        assert rejection.kind == "TooShort"

    def test_empty_word(self):
        rejection = validate_word("", BOARD)
        assert rejection.kind == "TooShort"

    def test_custom_minimum_length(self):
        """Minimum length is configurable."""
        assert validate_word("SCAM", BOARD, min_length=5).kind == "TooShort"

    def test_invalid_character(self):
        rejection = validate_word("MO1ST", BOARD)
        assert rejection.kind == "InvalidCharacter"
        assert rejection.letters == ["1"]

    def test_lowercase_is_invalid_before_normalizing(self):
        """Rules expect normalized uppercase input."""
        assert validate_word("moist", BOARD).kind == "InvalidCharacter"

    def test_wrong_start(self):
        rejection = validate_word("SCAM", BOARD, required_start="T")
        assert rejection.kind == "WrongStart"
        assert rejection.letters == ["T"]
        assert rejection.message == 'Word must start with "T"'

    def test_letter_not_on_board(self):
        rejection = validate_word("MOIZT", BOARD)
        assert rejection.kind == "LetterNotOnBoard"
        assert rejection.letters == ["Z"]

    def test_letter_not_on_board_reports_each_letter_once(self):
        rejection = validate_word("ZZXA", BOARD)
        assert rejection.letters == ["Z", "X"]

    def test_same_side_adjacent(self):
        """T-O-R-N: O and R are both on the right side."""
        rejection = validate_word("TORN", BOARD, required_start="T")
        assert rejection.kind == "SameSideAdjacent"
        assert rejection.letters == ["O", "R"]

    def test_repeated_letter_is_same_side(self):
        """A doubled letter is two letters from the same side."""
        assert validate_word("MOOT", BOARD).kind == "SameSideAdjacent"

    def test_duplicate_word(self):
        rejection = validate_word("TOAST", BOARD, used_words=["MOIST", "TOAST"], required_start="T")
        assert rejection.kind == "DuplicateWord"
        assert "TOAST" in rejection.message

    def test_letter_reuse_blocked(self):
        """With reuse disabled, letters from earlier words are refused."""
        rejection = validate_word(
            "TOAST", BOARD,
            used_words=["MOIST"],
            required_start="T",
            used_letters={"M", "O", "I", "S", "T"},
        )
        assert rejection.kind == "LetterAlreadyUsed"
        assert rejection.letters == ["O", "S", "T"]

    def test_chain_letter_exempt_from_reuse(self):
        """The required start letter may always be reused."""
        rejection = validate_word(
            "TRACE", BOARD,
            used_words=["MOIST"],
            required_start="T",
            used_letters={"M", "O", "I", "S", "T"},
        )
        assert rejection is None

    def test_reuse_allowed_by_default(self):
        assert validate_word("TOAST", BOARD, used_words=["MOIST"], required_start="T") is None


class TestRuleOrder:
    """The first failing rule is the one reported."""

    def test_length_before_characters(self):
        assert validate_word("1", BOARD).kind == "TooShort"

    def test_characters_before_start(self):
        assert validate_word("T0AST", BOARD, required_start="M").kind == "InvalidCharacter"

    def test_start_before_board(self):
        assert validate_word("ZOOM", BOARD, required_start="T").kind == "WrongStart"

    def test_board_before_adjacency(self):
        assert validate_word("TORNZ", BOARD).kind == "LetterNotOnBoard"

    def test_adjacency_before_duplicate(self):
        assert validate_word("TORN", BOARD, used_words=["TORN"]).kind == "SameSideAdjacent"

    def test_adjacency_check_can_be_skipped(self):
        """Words built letter by letter skip the redundant side check."""
        assert validate_word("TORN", BOARD, check_adjacency=False) is None

    def test_rejection_is_idempotent(self):
        """Validating the same bad word twice gives the same answer."""
        first = validate_word("TORN", BOARD)
        second = validate_word("TORN", BOARD)
        assert first == second


class TestSideLookupConsistency:
    """A board whose lookup disagrees with its letters is a defect."""

    def test_corrupt_lookup_raises(self):
        board = Board(
            top=("A", "T", "E"),
            left=("M", "P", "S"),
            right=("R", "O", "N"),
            bottom=("C", "I", "D"),
        )
        del board._side_of["O"]
        with pytest.raises(AssertionError):
            check_side_adjacency("MOIST", board)


class TestNextLetter:
    """Incremental checks while a word is being built."""

    def test_first_letter_any_side(self):
        assert validate_next_letter("", "M", BOARD) is None

    def test_first_letter_must_match_chain(self):
        rejection = validate_next_letter("", "M", BOARD, required_start="T")
        assert rejection.kind == "WrongStart"

    def test_next_letter_other_side(self):
        assert validate_next_letter("M", "O", BOARD) is None

    def test_next_letter_same_side(self):
        rejection = validate_next_letter("MO", "R", BOARD)
        assert rejection.kind == "SameSideAdjacent"
        assert rejection.letters == ["O", "R"]

    def test_same_letter_twice(self):
        assert validate_next_letter("M", "M", BOARD).kind == "SameSideAdjacent"

    def test_letter_off_board(self):
        assert validate_next_letter("M", "Z", BOARD).kind == "LetterNotOnBoard"

    def test_not_a_letter(self):
        assert validate_next_letter("M", "7", BOARD).kind == "InvalidCharacter"
        assert validate_next_letter("M", "", BOARD).kind == "InvalidCharacter"

    def test_used_letter_blocked(self):
        rejection = validate_next_letter("T", "O", BOARD, required_start="T", used_letters={"O", "T"})
        assert rejection.kind == "LetterAlreadyUsed"


class TestHelpers:
    """Normalization and messages."""

    @pytest.mark.parametrize("raw,expected", [
        ("moist", "MOIST"),
        ("  Moist \n", "MOIST"),
        ("", ""),
        (None, ""),
    ])
    def test_normalize_word(self, raw, expected):
        assert normalize_word(raw) == expected

    def test_messages(self):
        assert describe_rejection("TooShort") == "Too short"
        assert describe_rejection("NotFound") == "Not in word list"
        assert describe_rejection("SameSideAdjacent") == "Cannot use two letters from the same side consecutively"
        assert describe_rejection("DuplicateWord", word="MOIST") == 'Word "MOIST" has already been used'
