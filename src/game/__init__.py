"""Game layer for the letter box: board generation and the session state machine."""

from .models import (
    DictionaryConfig,
    GameConfig,
    GameState,
    Phase,
    LETTER_POOL,
    VOWELS,
)
from .board import BoardGenerator, count_vowels
from .session import GameSession, BoardGenerationError, build_oracle

__all__ = [
    "DictionaryConfig",
    "GameConfig",
    "GameState",
    "Phase",
    "LETTER_POOL",
    "VOWELS",
    "BoardGenerator",
    "count_vowels",
    "GameSession",
    "BoardGenerationError",
    "build_oracle",
]
