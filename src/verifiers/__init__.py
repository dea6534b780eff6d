"""Word and board verification for the letter box."""

from .rules import (
    MIN_WORD_LENGTH,
    validate_word,
    validate_next_letter,
    normalize_word,
    describe_rejection,
)
from .models import (
    SIDE_NAMES,
    Board,
    GenerationFailure,
    ValidationError,
    ValidationResult,
    WordRejection,
    SubmissionResult,
    LetterResult,
    RejectionKind,
    LookupResult,
)
from .parsing import parse_custom_board, split_sides
from .dictionary import DictionaryOracle, HttpDictionaryOracle, WordListOracle

__all__ = [
    # Rules
    "MIN_WORD_LENGTH",
    "validate_word",
    "validate_next_letter",
    "normalize_word",
    "describe_rejection",
    # Models
    "SIDE_NAMES",
    "Board",
    "GenerationFailure",
    "ValidationError",
    "ValidationResult",
    "WordRejection",
    "SubmissionResult",
    "LetterResult",
    "RejectionKind",
    "LookupResult",
    # Parsing
    "parse_custom_board",
    "split_sides",
    # Dictionary
    "DictionaryOracle",
    "HttpDictionaryOracle",
    "WordListOracle",
]
