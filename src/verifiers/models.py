"""Data models for board and word verification."""

from typing import Dict, List, Optional, Literal, Tuple
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator


SIDE_NAMES: Tuple[str, ...] = ("top", "left", "right", "bottom")

# Why a submitted word was turned down
RejectionKind = Literal[
    "TooShort",
    "InvalidCharacter",
    "WrongStart",
    "LetterNotOnBoard",
    "SameSideAdjacent",
    "DuplicateWord",
    "LetterAlreadyUsed",
    "NotFound",
    "OracleUnavailable",
    "SubmissionPending",
    "Superseded",
]

# Tri-state answer of a dictionary oracle
LookupResult = Literal["exists", "not_found", "unavailable"]


class Board(BaseModel):
    """
    Immutable letter box: four sides of letters.

    The letter -> side lookup is computed once when the board is built,
    so side queries during validation are constant time.
    """

    model_config = ConfigDict(frozen=True)

    top: Tuple[str, ...]
    left: Tuple[str, ...]
    right: Tuple[str, ...]
    bottom: Tuple[str, ...]
    _side_of: Dict[str, str] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def check_letters(self) -> "Board":
        """Letters are unique A-Z and every side has the same non-zero length."""
        seen = set()
        per_side = len(self.top)
        for name, letters in self.sides.items():
            if not letters or len(letters) != per_side:
                raise ValueError(f"Side '{name}' has {len(letters)} letters, expected {per_side or 'at least 1'}")
            for letter in letters:
                if len(letter) != 1 or not ('A' <= letter <= 'Z'):
                    raise ValueError(f"Side '{name}' holds {letter!r}, expected a letter A-Z")
                if letter in seen:
                    raise ValueError(f"Letter {letter!r} appears on more than one side")
                seen.add(letter)
        return self

    def model_post_init(self, __context) -> None:
        """Build the side lookup."""
        for name, letters in self.sides.items():
            for letter in letters:
                self._side_of[letter] = name

    @classmethod
    def from_sides(cls, sides: Dict[str, List[str]]) -> "Board":
        """Create a board from a side name -> letters mapping."""
        return cls(**{name: tuple(sides[name]) for name in SIDE_NAMES})

    @property
    def sides(self) -> Dict[str, Tuple[str, ...]]:
        """Sides in board order."""
        return {
            "top": self.top,
            "left": self.left,
            "right": self.right,
            "bottom": self.bottom,
        }

    @property
    def letters(self) -> List[str]:
        """All letters on the board, side by side."""
        return [letter for side in self.sides.values() for letter in side]

    def side_of(self, letter: str) -> Optional[str]:
        """Name of the side holding `letter`, or None if it is not on the board."""
        return self._side_of.get(letter)

    def __contains__(self, letter: str) -> bool:
        return letter in self._side_of


class GenerationFailure(BaseModel):
    """Board generation ran out of attempts."""
    phase: Literal["pool", "selection", "assignment"]
    attempts: int = 0
    message: str


class ValidationError(BaseModel):
    """A single problem found in a custom board."""
    code: str
    message: str
    side: Optional[str] = None
    letters: List[str] = Field(default_factory=list)


class ValidationResult(BaseModel):
    """Result of validating a custom board."""
    valid: bool
    errors: List[ValidationError] = Field(default_factory=list)


class WordRejection(BaseModel):
    """A local rule violation for a candidate word."""
    kind: RejectionKind
    message: str
    letters: List[str] = Field(default_factory=list)  # Offending letters, if any


class SubmissionResult(BaseModel):
    """Outcome of submitting a word to the game."""
    accepted: bool
    word: str = ""
    rejection: Optional[RejectionKind] = None
    letters: List[str] = Field(default_factory=list)
    message: str = ""
    next_letter: Optional[str] = None

    @classmethod
    def reject(cls, word: str, rejection: WordRejection) -> "SubmissionResult":
        """Build a rejected result from a rule violation."""
        return cls(
            accepted=False,
            word=word,
            rejection=rejection.kind,
            letters=rejection.letters,
            message=rejection.message,
        )


class LetterResult(BaseModel):
    """Outcome of adding one letter to the word being built."""
    accepted: bool
    candidate: str = ""
    rejection: Optional[RejectionKind] = None
    message: str = ""
