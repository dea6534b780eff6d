"""
Pydantic models for the game layer.

Configuration and mutable game state live here. The board itself is a
verifier model (src.verifiers.models.Board) since the word rules need it.
"""

from typing import Dict, List, Optional, Literal, Set, Union
from pydantic import BaseModel, Field, field_validator, model_validator

from ..verifiers.models import Board, SIDE_NAMES


# Letters a board is drawn from, with draw weights
LETTER_POOL: Dict[str, int] = {letter: 1 for letter in "ABCDEFGHIJKLMNOPRSTUVWY"}

VOWELS = "AEIOU"

Phase = Literal["idle", "building", "submitted"]


class DictionaryConfig(BaseModel):
    """Which dictionary oracle a session uses."""
    source: Literal["api", "word_list"] = "api"
    word_list: Optional[str] = None  # Path to a newline-separated word list
    base_url: Optional[str] = None
    timeout: float = Field(default=5.0, gt=0)

    @model_validator(mode="after")
    def word_list_needs_path(self) -> "DictionaryConfig":
        if self.source == "word_list" and not self.word_list:
            raise ValueError("dictionary.word_list is required when source is 'word_list'")
        return self


class GameConfig(BaseModel):
    """
    Configuration for a game session.

    The letter pool may be given as a mapping of letter -> weight or as a
    string, where repeating a letter raises its weight ("AAEIO..." makes A
    twice as likely as the others).
    """
    letter_pool: Dict[str, int] = Field(default_factory=lambda: dict(LETTER_POOL))
    vowels: str = VOWELS
    required_letters: int = Field(default=12, ge=4)
    per_side: int = Field(default=3, ge=1)
    min_total_vowels: int = Field(default=3, ge=0)
    max_vowels_per_side: int = Field(default=2, ge=0)
    max_attempts: int = Field(default=200, ge=1)
    min_word_length: int = Field(default=3, ge=1)
    seed: Optional[int] = None
    allow_letter_reuse: bool = True
    require_full_chain_validation: bool = True
    dictionary: DictionaryConfig = Field(default_factory=DictionaryConfig)

    @field_validator("letter_pool", mode="before")
    @classmethod
    def parse_pool(cls, value: Union[str, Dict[str, int]]) -> Dict[str, int]:
        if isinstance(value, str):
            pool: Dict[str, int] = {}
            for letter in value.upper():
                if not letter.isspace():
                    pool[letter] = pool.get(letter, 0) + 1
            return pool
        return {str(k).upper(): v for k, v in value.items()}

    @field_validator("letter_pool")
    @classmethod
    def check_pool(cls, value: Dict[str, int]) -> Dict[str, int]:
        for letter, weight in value.items():
            if len(letter) != 1 or not ('A' <= letter <= 'Z'):
                raise ValueError(f"Pool entry {letter!r} is not a single letter A-Z")
            if weight < 1:
                raise ValueError(f"Pool weight for {letter!r} must be at least 1")
        return value

    @field_validator("vowels")
    @classmethod
    def upper_vowels(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def check_shape(self) -> "GameConfig":
        if self.required_letters != len(SIDE_NAMES) * self.per_side:
            raise ValueError(
                f"required_letters ({self.required_letters}) must equal "
                f"{len(SIDE_NAMES)} sides x per_side ({self.per_side})"
            )
        return self


class GameState(BaseModel):
    """
    Progress on the current board.

    Attributes:
        used_words: Accepted words, in play order
        next_letter: Letter the next word must start with (None before the first word)
        used_letters: Every letter that appears in an accepted word
    """
    used_words: List[str] = Field(default_factory=list)
    next_letter: Optional[str] = None
    used_letters: Set[str] = Field(default_factory=set)

    def commit(self, word: str) -> None:
        """Record an accepted word and chain the next one off its last letter."""
        self.used_words.append(word)
        self.used_letters.update(word)
        self.next_letter = word[-1]

    def clear(self) -> None:
        """Forget all progress."""
        self.used_words = []
        self.next_letter = None
        self.used_letters = set()

    def available_letters(self, board: Board, allow_reuse: bool = True) -> List[str]:
        """Letters that can still appear in the next word."""
        if allow_reuse:
            return board.letters
        return [
            letter for letter in board.letters
            if letter not in self.used_letters or letter == self.next_letter
        ]

    def is_solved(self, board: Board) -> bool:
        """True once every board letter has been used."""
        return all(letter in self.used_letters for letter in board.letters)
