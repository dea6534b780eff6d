"""
Word rules for the letter box.

Rules are applied in a fixed order and the first violation wins:
1. Minimum length
2. Uppercase letters only
3. Chaining (must start with the previous word's last letter)
4. Every letter is on the board
5. No two consecutive letters from the same side
6. Word not already played
7. No letter reuse across words (only when reuse is disabled)

None of these need the dictionary, so a word is only sent to the
oracle once all of them pass.
"""

import re
from typing import Collection, List, Optional, Sequence

from .models import Board, RejectionKind, WordRejection


MIN_WORD_LENGTH = 3

_WORD_PATTERN = re.compile(r'^[A-Z]+$')


def normalize_word(word: str) -> str:
    """Strip whitespace and uppercase a submitted word."""
    return (word or "").strip().upper()


def describe_rejection(
    kind: RejectionKind,
    word: str = "",
    letters: Sequence[str] = (),
) -> str:
    """User-facing message for a rejection kind."""
    if kind == "TooShort":
        return "Too short"
    if kind == "InvalidCharacter":
        return "Only the letters A-Z can be used"
    if kind == "WrongStart":
        return f'Word must start with "{letters[0]}"' if letters else "Word must start with the last letter of the previous word"
    if kind == "LetterNotOnBoard":
        return f"Not available on the board: {', '.join(letters)}" if letters else "Not available on the board"
    if kind == "SameSideAdjacent":
        return "Cannot use two letters from the same side consecutively"
    if kind == "DuplicateWord":
        return f'Word "{word}" has already been used'
    if kind == "LetterAlreadyUsed":
        return f"Letters already used: {', '.join(letters)}"
    if kind == "NotFound":
        return "Not in word list"
    if kind == "OracleUnavailable":
        return "Error checking word validity. Check connection?"
    if kind == "SubmissionPending":
        return "Still checking the previous word"
    if kind == "Superseded":
        return "Word changed while it was being checked"
    return kind


def _reject(kind: RejectionKind, word: str = "", letters: Sequence[str] = ()) -> WordRejection:
    return WordRejection(
        kind=kind,
        message=describe_rejection(kind, word, letters),
        letters=list(letters),
    )


def check_length(word: str, min_length: int = MIN_WORD_LENGTH) -> Optional[WordRejection]:
    if len(word) < min_length:
        return _reject("TooShort", word)
    return None


def check_characters(word: str) -> Optional[WordRejection]:
    if not _WORD_PATTERN.match(word):
        bad = sorted({c for c in word if not ('A' <= c <= 'Z')})
        return _reject("InvalidCharacter", word, bad)
    return None


def check_start(word: str, required_start: Optional[str]) -> Optional[WordRejection]:
    if required_start and word[:1] != required_start:
        return _reject("WrongStart", word, [required_start])
    return None


def check_on_board(word: str, board: Board) -> Optional[WordRejection]:
    missing: List[str] = []
    for letter in word:
        if letter not in board and letter not in missing:
            missing.append(letter)
    if missing:
        return _reject("LetterNotOnBoard", word, missing)
    return None


def check_side_adjacency(word: str, board: Board) -> Optional[WordRejection]:
    """
    Check that consecutive letters sit on different sides.

    Expects every letter to be on the board already; a letter missing from
    the side lookup at this point means the board is corrupt.
    """
    for a, b in zip(word, word[1:]):
        side_a = board.side_of(a)
        side_b = board.side_of(b)
        if side_a is None or side_b is None:
            raise AssertionError(
                f"Side lookup out of sync with board for '{word}' ({a}, {b})"
            )
        if side_a == side_b:
            return _reject("SameSideAdjacent", word, [a, b])
    return None


def check_duplicate(word: str, used_words: Collection[str]) -> Optional[WordRejection]:
    if word in used_words:
        return _reject("DuplicateWord", word)
    return None


def check_letter_reuse(
    word: str,
    used_letters: Collection[str],
    required_start: Optional[str],
) -> Optional[WordRejection]:
    """Reject letters used by earlier words; the chain letter is exempt."""
    rest = word[1:] if required_start else word
    reused: List[str] = []
    for letter in rest:
        if letter in used_letters and letter not in reused:
            reused.append(letter)
    if reused:
        return _reject("LetterAlreadyUsed", word, reused)
    return None


def validate_word(
    word: str,
    board: Board,
    used_words: Collection[str] = (),
    required_start: Optional[str] = None,
    min_length: int = MIN_WORD_LENGTH,
    used_letters: Optional[Collection[str]] = None,
    check_adjacency: bool = True,
) -> Optional[WordRejection]:
    """
    Apply all local rules to a normalized word.

    Args:
        word: Uppercase candidate word
        board: The current board
        used_words: Words already accepted on this board
        required_start: Letter the word has to start with, if any
        min_length: Minimum word length
        used_letters: Letters blocked by earlier words; None allows reuse
        check_adjacency: Re-check the side rule (skipped for words built
            letter by letter, which were checked as they were built)

    Returns:
        The first rule violation, or None if the word passes every rule
    """
    rejection = (
        check_length(word, min_length)
        or check_characters(word)
        or check_start(word, required_start)
        or check_on_board(word, board)
    )
    if rejection:
        return rejection

    if check_adjacency:
        rejection = check_side_adjacency(word, board)
        if rejection:
            return rejection

    rejection = check_duplicate(word, used_words)
    if rejection:
        return rejection

    if used_letters is not None:
        return check_letter_reuse(word, used_letters, required_start)
    return None


def validate_next_letter(
    candidate: str,
    letter: str,
    board: Board,
    required_start: Optional[str] = None,
    used_letters: Optional[Collection[str]] = None,
) -> Optional[WordRejection]:
    """
    Check one letter about to be appended to a word under construction.

    Args:
        candidate: Letters chosen so far
        letter: Uppercase letter being added
        board: The current board
        required_start: Letter the word has to start with, if any
        used_letters: Letters blocked by earlier words; None allows reuse

    Returns:
        The rule violation, or None if the letter may be added
    """
    if len(letter) != 1:
        return _reject("InvalidCharacter", candidate + letter, [letter])
    rejection = check_characters(letter) or check_on_board(letter, board)
    if rejection:
        return rejection

    if not candidate:
        return check_start(letter, required_start)

    previous = candidate[-1]
    if board.side_of(previous) == board.side_of(letter):
        return _reject("SameSideAdjacent", candidate + letter, [previous, letter])

    if used_letters is not None and letter in used_letters:
        return _reject("LetterAlreadyUsed", candidate + letter, [letter])
    return None
