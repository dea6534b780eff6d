"""
Game session: the letter box state machine.

A GameSession owns one board, the progress made on it, and the word the
player is building. The shell drives it through a handful of calls
(select_letter, submit_word, clear_progress, restart, ...) and renders
whatever they return. Nothing here touches a UI.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
from pydantic import BaseModel, ConfigDict, Field

from ..verifiers.dictionary import DictionaryOracle, HttpDictionaryOracle, WordListOracle
from ..verifiers.models import (
    Board,
    GenerationFailure,
    LetterResult,
    SubmissionResult,
    ValidationResult,
)
from ..verifiers.rules import (
    describe_rejection,
    normalize_word,
    validate_next_letter,
    validate_word,
)
from .board import BoardGenerator, SideInput
from .models import DictionaryConfig, GameConfig, GameState, Phase


logger = logging.getLogger(__name__)


class BoardGenerationError(Exception):
    """Raised when a session needs a new board and none could be generated."""

    def __init__(self, failure: GenerationFailure):
        super().__init__(failure.message)
        self.failure = failure


def build_oracle(config: DictionaryConfig) -> DictionaryOracle:
    """Create the dictionary oracle described by a DictionaryConfig."""
    if config.source == "word_list":
        return WordListOracle.from_file(config.word_list)

    params: Dict[str, Any] = {"timeout": config.timeout}
    if config.base_url:
        params["base_url"] = config.base_url
    return HttpDictionaryOracle(**params)


class GameSession(BaseModel):
    """
    One game on one board.

    Submissions are serialized: while a word is waiting on the dictionary
    oracle, further submissions are turned away with SubmissionPending.
    Every call that changes the word being built or the game itself moves
    the session to a new epoch, and an oracle answer that comes back for an
    older epoch is dropped (Superseded) instead of being applied.

    Attributes:
        config: Session configuration
        oracle: Dictionary oracle used to confirm words
        board: The current board
        state: Words played on the current board

    The word being built is read-only from outside (the candidate
    property); only the letter-building calls and submissions change it.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: GameConfig = Field(default_factory=GameConfig)
    oracle: DictionaryOracle
    board: Board
    state: GameState = Field(default_factory=GameState)
    _generator: BoardGenerator = None
    _candidate: str = ""
    _pending: Optional[str] = None
    _epoch: int = 0

    def model_post_init(self, __context) -> None:
        """Set up the board generator after model creation."""
        self._generator = BoardGenerator(seed=self.config.seed)

    @classmethod
    def create(
        cls,
        config: Optional[GameConfig] = None,
        oracle: Optional[DictionaryOracle] = None,
        board: Optional[Board] = None,
        **config_kwargs: Any
    ) -> "GameSession":
        """
        Factory method to start a session on a fresh board.

        Args:
            config: Optional GameConfig instance
            oracle: Dictionary oracle (built from config.dictionary if omitted)
            board: Board to play on (generated if omitted)
            **config_kwargs: Config parameters if config not provided

        Returns:
            A new GameSession

        Raises:
            BoardGenerationError: If no board could be generated
        """
        if config is None:
            config = GameConfig(**config_kwargs)
        if oracle is None:
            oracle = build_oracle(config.dictionary)

        generator = BoardGenerator(seed=config.seed)
        if board is None:
            result = generator.generate_from_config(config)
            if isinstance(result, GenerationFailure):
                raise BoardGenerationError(result)
            board = result

        session = cls(config=config, oracle=oracle, board=board)
        session._generator = generator
        return session

    # -- Board lifecycle ----------------------------------------------------

    def generate_board(self, config: Optional[GameConfig] = None) -> Union[Board, GenerationFailure]:
        """
        Replace the board with a newly generated one.

        A new config, if given, replaces the session config when generation
        succeeds. On failure the current board and progress are kept.
        """
        config = config or self.config
        result = self._generator.generate_from_config(config)
        if isinstance(result, GenerationFailure):
            return result

        self.config = config
        self._new_board(result)
        return result

    def set_custom_board(
        self,
        sides: Union[Mapping[str, SideInput], Sequence[SideInput]],
    ) -> Union[Board, ValidationResult]:
        """Replace the board with player-supplied letters, if they are valid."""
        result = BoardGenerator.set_custom_from_config(sides, self.config)
        if isinstance(result, ValidationResult):
            logger.debug("Custom board rejected: %s", [e.code for e in result.errors])
            return result

        self._new_board(result)
        return result

    def restart(self) -> Board:
        """
        Start over on a new random board.

        Raises:
            BoardGenerationError: If generation fails; the old board is kept
        """
        result = self.generate_board()
        if isinstance(result, GenerationFailure):
            raise BoardGenerationError(result)
        return result

    def clear_progress(self) -> None:
        """Forget the words played on this board but keep its letters."""
        self.state.clear()
        self._candidate = ""
        self._epoch += 1

    def _new_board(self, board: Board) -> None:
        self.board = board
        self.state = GameState()
        self._candidate = ""
        self._epoch += 1

    # -- Building a word letter by letter -------------------------------------

    def select_letter(self, letter: str) -> LetterResult:
        """Append a letter to the word being built, if the rules allow it."""
        letter = normalize_word(letter)
        rejection = validate_next_letter(
            self.candidate,
            letter,
            self.board,
            required_start=self.state.next_letter,
            used_letters=self._blocked_letters,
        )
        if rejection:
            return LetterResult(
                accepted=False,
                candidate=self.candidate,
                rejection=rejection.kind,
                message=rejection.message,
            )

        self._candidate += letter
        self._epoch += 1
        return LetterResult(accepted=True, candidate=self.candidate)

    def delete_last_letter(self) -> LetterResult:
        """Remove the last chosen letter; the required start letter stays."""
        seed = self.state.next_letter
        if len(self.candidate) > 1 or (self.candidate and not seed):
            self._candidate = self._candidate[:-1]
            self._epoch += 1
            return LetterResult(accepted=True, candidate=self.candidate)

        if self.candidate and seed:
            return LetterResult(
                accepted=False,
                candidate=self.candidate,
                rejection="WrongStart",
                message=describe_rejection("WrongStart", letters=[seed]),
            )
        return LetterResult(accepted=False, candidate=self.candidate, message="Nothing to delete")

    def clear_candidate(self) -> None:
        """Drop the word being built, back to the required start letter if any."""
        self._candidate = self.state.next_letter or ""
        self._epoch += 1

    # -- Submitting ---------------------------------------------------------

    async def submit_word(self, candidate: Optional[str] = None) -> SubmissionResult:
        """
        Submit a word for validation.

        A typed word takes precedence, even a blank one. Only when no word
        is passed is the word built with select_letter submitted. Local
        rules are checked first and the oracle is only asked about words
        that pass all of them.

        Args:
            candidate: Typed word, or None to submit the built word

        Returns:
            SubmissionResult describing acceptance or the rejection reason
        """
        typed = candidate is not None
        word = normalize_word(candidate) if typed else self._candidate

        if self._pending is not None:
            return SubmissionResult(
                accepted=False,
                word=word,
                rejection="SubmissionPending",
                message=describe_rejection("SubmissionPending"),
            )

        # Built words had the side rule checked letter by letter already
        check_adjacency = typed or self.config.require_full_chain_validation

        rejection = validate_word(
            word,
            self.board,
            used_words=self.state.used_words,
            required_start=self.state.next_letter,
            min_length=self.config.min_word_length,
            used_letters=self._blocked_letters,
            check_adjacency=check_adjacency,
        )
        if rejection:
            logger.debug("Rejected %r: %s", word, rejection.kind)
            return SubmissionResult.reject(word, rejection)

        epoch = self._epoch
        self._pending = word
        try:
            lookup = await self.oracle.lookup(word.lower())
        finally:
            self._pending = None

        if epoch != self._epoch:
            logger.info("Discarding stale dictionary answer for %r", word)
            return SubmissionResult(
                accepted=False,
                word=word,
                rejection="Superseded",
                message=describe_rejection("Superseded"),
            )

        if lookup == "not_found":
            return SubmissionResult(
                accepted=False,
                word=word,
                rejection="NotFound",
                message=describe_rejection("NotFound"),
            )
        if lookup == "unavailable":
            return SubmissionResult(
                accepted=False,
                word=word,
                rejection="OracleUnavailable",
                message=describe_rejection("OracleUnavailable"),
            )

        self.state.commit(word)
        self._candidate = self.state.next_letter
        logger.debug("Accepted %r, next word starts with %s", word, self.state.next_letter)
        return SubmissionResult(accepted=True, word=word, next_letter=self.state.next_letter)

    # -- Introspection ------------------------------------------------------

    @property
    def candidate(self) -> str:
        """Letters chosen so far for the next word."""
        return self._candidate

    @property
    def _blocked_letters(self) -> Optional[set]:
        """Letters earlier words used up, or None when reuse is allowed."""
        if self.config.allow_letter_reuse:
            return None
        return self.state.used_letters

    @property
    def phase(self) -> Phase:
        """Where the session is in the idle -> building -> submitted cycle."""
        if self._pending is not None:
            return "submitted"
        seed_length = 1 if self.state.next_letter else 0
        if len(self.candidate) > seed_length:
            return "building"
        return "idle"

    @property
    def available_letters(self) -> List[str]:
        """Letters that can still appear in the next word."""
        return self.state.available_letters(self.board, self.config.allow_letter_reuse)

    @property
    def is_solved(self) -> bool:
        """True once every letter on the board has been used."""
        return self.state.is_solved(self.board)

    def get_state(self) -> Dict:
        """
        Get the current session state as a dictionary.

        Useful for display and logging.
        """
        return {
            "sides": {name: list(letters) for name, letters in self.board.sides.items()},
            "used_words": list(self.state.used_words),
            "next_letter": self.state.next_letter,
            "available_letters": self.available_letters,
            "candidate": self.candidate,
            "phase": self.phase,
            "is_solved": self.is_solved,
        }
