import logging
import random
from typing import Dict, List, Mapping, Optional, Sequence, Union
from pydantic import BaseModel, ConfigDict

from ..verifiers.models import (
    SIDE_NAMES,
    Board,
    GenerationFailure,
    ValidationError,
    ValidationResult,
)
from .models import GameConfig, LETTER_POOL, VOWELS


logger = logging.getLogger(__name__)

SideInput = Union[str, Sequence[str]]


def count_vowels(letters: Sequence[str], vowels: str = VOWELS) -> int:
    """Count the vowels in a sequence of uppercase letters."""
    return sum(1 for letter in letters if letter in vowels)


class BoardGenerator(BaseModel):
    """
    Builds letter boxes that satisfy the vowel constraints.

    Generation runs in two phases. Selection draws a set of unique letters
    with enough vowels overall; assignment shuffles that set onto the four
    sides until no side carries too many vowels. A selection that cannot be
    assigned is thrown away and a new one is drawn. Every loop is bounded
    by the attempt budget, and running out returns a GenerationFailure
    rather than a board that breaks the rules.

    Attributes:
        seed: Optional random seed for reproducibility
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    seed: Optional[int] = None
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.seed)

    def generate(
        self,
        pool: Optional[Mapping[str, int]] = None,
        required_letters: int = 12,
        per_side: int = 3,
        min_total_vowels: int = 3,
        max_vowels_per_side: int = 2,
        max_attempts: int = 200,
        vowels: str = VOWELS,
    ) -> Union[Board, GenerationFailure]:
        """
        Generate a random board.

        Args:
            pool: Letter -> draw weight (defaults to LETTER_POOL)
            required_letters: Letters on the board, 4 x per_side
            per_side: Letters on each side
            min_total_vowels: Lower bound on vowels across the board
            max_vowels_per_side: Upper bound on vowels on any side
            max_attempts: Budget for each retry loop
            vowels: Letters that count as vowels

        Returns:
            A Board, or a GenerationFailure naming the phase that ran out
        """
        pool = dict(pool if pool is not None else LETTER_POOL)

        if required_letters != len(SIDE_NAMES) * per_side:
            return GenerationFailure(
                phase="pool",
                message=f"{required_letters} letters cannot be split into {len(SIDE_NAMES)} sides of {per_side}",
            )

        if len(pool) < required_letters:
            return GenerationFailure(
                phase="pool",
                message=f"Letter pool has {len(pool)} letters, {required_letters} needed",
            )

        for _ in range(max_attempts):
            selected = self._select(pool, required_letters, min_total_vowels, vowels, max_attempts)
            if selected is None:
                logger.warning(
                    "No selection with %d+ vowels after %d draws", min_total_vowels, max_attempts
                )
                return GenerationFailure(
                    phase="selection",
                    attempts=max_attempts,
                    message=f"Failed to draw {required_letters} letters with {min_total_vowels}+ vowels",
                )

            sides = self._assign(selected, per_side, max_vowels_per_side, vowels, max_attempts)
            if sides is not None:
                board = Board.from_sides(sides)
                logger.debug(
                    "New letters generated: %s (vowels total: %d)",
                    board.sides, count_vowels(selected, vowels)
                )
                return board

        logger.warning("Failed to generate a valid board after %d attempts", max_attempts)
        return GenerationFailure(
            phase="assignment",
            attempts=max_attempts,
            message=f"Failed to place letters with at most {max_vowels_per_side} vowels per side",
        )

    def generate_from_config(self, config: GameConfig) -> Union[Board, GenerationFailure]:
        """Generate a board using the constraints from a GameConfig."""
        return self.generate(
            pool=config.letter_pool,
            required_letters=config.required_letters,
            per_side=config.per_side,
            min_total_vowels=config.min_total_vowels,
            max_vowels_per_side=config.max_vowels_per_side,
            max_attempts=config.max_attempts,
            vowels=config.vowels,
        )

    def _draw(self, pool: Mapping[str, int], count: int) -> List[str]:
        """Draw `count` unique letters, favouring letters with higher weight."""
        bag = [letter for letter, weight in pool.items() for _ in range(weight)]
        self._rng.shuffle(bag)

        picked: List[str] = []
        for letter in bag:
            if letter not in picked:
                picked.append(letter)
                if len(picked) == count:
                    break
        return picked

    def _select(
        self,
        pool: Mapping[str, int],
        count: int,
        min_vowels: int,
        vowels: str,
        max_attempts: int,
    ) -> Optional[List[str]]:
        for _ in range(max_attempts):
            letters = self._draw(pool, count)
            if count_vowels(letters, vowels) >= min_vowels:
                return letters
        return None

    def _assign(
        self,
        letters: List[str],
        per_side: int,
        max_vowels: int,
        vowels: str,
        max_attempts: int,
    ) -> Optional[Dict[str, List[str]]]:
        # Too many vowels to spread over the sides at all
        if count_vowels(letters, vowels) > max_vowels * len(SIDE_NAMES):
            return None

        letters = list(letters)
        for _ in range(max_attempts):
            self._rng.shuffle(letters)
            sides = {
                name: letters[i * per_side:(i + 1) * per_side]
                for i, name in enumerate(SIDE_NAMES)
            }
            if all(count_vowels(side, vowels) <= max_vowels for side in sides.values()):
                return sides
        return None

    @staticmethod
    def set_custom(
        sides: Union[Mapping[str, SideInput], Sequence[SideInput]],
        per_side: int = 3,
        min_total_vowels: int = 3,
        max_vowels_per_side: int = 2,
        vowels: str = VOWELS,
    ) -> Union[Board, ValidationResult]:
        """
        Build a board from letters supplied by the player.

        Sides may be given as a mapping of side name -> letters or as four
        letter groups in board order (top, left, right, bottom). Each group
        is a string ("ATE") or a sequence of letters. Case is ignored.

        Returns:
            The Board, or a ValidationResult listing every problem found
        """
        if isinstance(sides, Mapping):
            sides = {str(name).strip().lower(): group for name, group in sides.items()}
            unknown = [name for name in sides if name not in SIDE_NAMES]
            if unknown or len(sides) != len(SIDE_NAMES):
                return ValidationResult(valid=False, errors=[ValidationError(
                    code="WRONG_SIDE_COUNT",
                    message=f"Expected sides {', '.join(SIDE_NAMES)}, got {', '.join(sides) or 'none'}"
                )])
            groups = [sides[name] for name in SIDE_NAMES]
        else:
            groups = list(sides)
            if len(groups) != len(SIDE_NAMES):
                return ValidationResult(valid=False, errors=[ValidationError(
                    code="WRONG_SIDE_COUNT",
                    message=f"Expected {len(SIDE_NAMES)} sides, got {len(groups)}"
                )])

        errors: List[ValidationError] = []
        normalized: Dict[str, List[str]] = {}
        seen: List[str] = []
        duplicates: List[str] = []

        for name, group in zip(SIDE_NAMES, groups):
            letters = [str(c).strip().upper() for c in group if str(c).strip()]
            normalized[name] = letters

            if len(letters) != per_side:
                errors.append(ValidationError(
                    code="WRONG_SIDE_LENGTH",
                    message=f"Side '{name}' has {len(letters)} letters, expected {per_side}",
                    side=name,
                    letters=letters
                ))

            bad = [c for c in letters if len(c) != 1 or not ('A' <= c <= 'Z')]
            if bad:
                errors.append(ValidationError(
                    code="INVALID_CHARACTER",
                    message=f"Side '{name}' contains non-letters: {', '.join(bad)}",
                    side=name,
                    letters=bad
                ))

            side_vowels = count_vowels(letters, vowels)
            if side_vowels > max_vowels_per_side:
                errors.append(ValidationError(
                    code="TOO_MANY_VOWELS_ON_SIDE",
                    message=f"Side '{name}' has {side_vowels} vowels, at most {max_vowels_per_side} allowed",
                    side=name,
                    letters=[c for c in letters if c in vowels]
                ))

            for letter in letters:
                if letter in seen and letter not in duplicates:
                    duplicates.append(letter)
                seen.append(letter)

        if duplicates:
            errors.append(ValidationError(
                code="DUPLICATE_LETTER",
                message=f"Letters used more than once: {', '.join(duplicates)}",
                letters=duplicates
            ))

        total_vowels = count_vowels(seen, vowels)
        if total_vowels < min_total_vowels:
            errors.append(ValidationError(
                code="TOO_FEW_VOWELS",
                message=f"Board has {total_vowels} vowels, at least {min_total_vowels} needed"
            ))

        if errors:
            return ValidationResult(valid=False, errors=errors)
        return Board.from_sides(normalized)

    @staticmethod
    def set_custom_from_config(
        sides: Union[Mapping[str, SideInput], Sequence[SideInput]],
        config: GameConfig,
    ) -> Union[Board, ValidationResult]:
        """Validate custom letters against the constraints from a GameConfig."""
        return BoardGenerator.set_custom(
            sides,
            per_side=config.per_side,
            min_total_vowels=config.min_total_vowels,
            max_vowels_per_side=config.max_vowels_per_side,
            vowels=config.vowels,
        )
