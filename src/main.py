"""
Terminal front end for the letter box.

Usage:
    python -m src.main
    python -m src.main config.yaml --verbose
    python -m src.main --letters "ATE MPS RON CID" --word-list words.txt

At the prompt, type a word to submit it, or one of:
    +LETTERS   choose letters one at a time (e.g. +MOI)
    -          delete the last chosen letter
    !          submit the chosen letters
    :clear     forget the words played on this board
    :restart   play a new random board
    :letters   play custom letters, e.g. :letters ATE MPS RON CID
    :retry     resubmit the last word after a dictionary error
    :state     show the game state
    :quit      leave
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import yaml

from .game import BoardGenerationError, GameConfig, GameSession
from .utils import render_board
from .verifiers import SubmissionResult, ValidationResult, parse_custom_board


def load_config(config_path: str) -> GameConfig:
    """Load game configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)


def apply_overrides(config: GameConfig, args: argparse.Namespace) -> GameConfig:
    """Fold command line options into the loaded config."""
    updates = {}
    if args.seed is not None:
        updates["seed"] = args.seed
    if args.no_letter_reuse:
        updates["allow_letter_reuse"] = False
    if args.word_list:
        updates["dictionary"] = config.dictionary.model_copy(
            update={"source": "word_list", "word_list": args.word_list}
        )
    if not updates:
        return config
    return GameConfig(**{**config.model_dump(), **updates})


def format_result(result: SubmissionResult) -> str:
    """One line describing a submission result."""
    if result.accepted:
        return f"{result.word} accepted. Next word starts with {result.next_letter}."
    return f"{result.word or '(empty)'}: {result.message}"


def show_board(session: GameSession) -> None:
    print()
    print(render_board(session.board, session.state.used_letters))
    print()
    if session.state.used_words:
        print("Used words: " + ", ".join(session.state.used_words))


def show_custom_errors(result: ValidationResult) -> None:
    for error in result.errors:
        print(f"  {error.message}")


async def play(session: GameSession) -> None:
    """Read commands until :quit or end of input."""
    show_board(session)
    last_word: Optional[str] = None

    while True:
        prompt = f"[{session.candidate}] > " if session.candidate else "> "
        try:
            line = (await asyncio.to_thread(input, prompt)).strip()
        except EOFError:
            print()
            break

        if not line:
            continue

        if line == ":quit":
            break
        elif line == ":clear":
            session.clear_progress()
            show_board(session)
        elif line == ":restart":
            try:
                session.restart()
            except BoardGenerationError as e:
                print(f"Error generating new board: {e}. Please try again.")
                continue
            print("New board ready")
            show_board(session)
        elif line.startswith(":letters"):
            sides, errors = parse_custom_board(line[len(":letters"):])
            if errors:
                show_custom_errors(ValidationResult(valid=False, errors=errors))
                continue
            result = session.set_custom_board(sides)
            if isinstance(result, ValidationResult):
                show_custom_errors(result)
                continue
            show_board(session)
        elif line == ":state":
            for key, value in session.get_state().items():
                print(f"  {key}: {value}")
        elif line == ":retry":
            if last_word is None:
                print("Nothing to retry")
                continue
            result = await session.submit_word(last_word)
            if result.rejection != "OracleUnavailable":
                last_word = None
            print(format_result(result))
            if result.accepted:
                show_board(session)
        elif line == "-":
            letter_result = session.delete_last_letter()
            if not letter_result.accepted and letter_result.message:
                print(letter_result.message)
        elif line.startswith("+"):
            for letter in line[1:]:
                letter_result = session.select_letter(letter)
                if not letter_result.accepted:
                    print(letter_result.message)
                    break
        else:
            typed = None if line == "!" else line
            result = await session.submit_word(typed)
            last_word = result.word if result.rejection == "OracleUnavailable" else None
            print(format_result(result))
            if result.accepted:
                show_board(session)
                if session.is_solved:
                    print(f"Solved in {len(session.state.used_words)} words!")


def main():
    parser = argparse.ArgumentParser(
        description="Play a letter box word puzzle in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  seed: 42
  min_word_length: 3
  allow_letter_reuse: true
  letter_pool: AABCDEEFGHIIJKLMNOOPRSTUUVWY
  dictionary:
    source: api
    timeout: 5
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for board generation"
    )
    parser.add_argument(
        "--letters",
        help='Custom board letters, e.g. "ATE MPS RON CID"'
    )
    parser.add_argument(
        "--word-list",
        help="Check words against a local word list instead of the dictionary API"
    )
    parser.add_argument(
        "--no-letter-reuse",
        action="store_true",
        help="Block letters already used by earlier words"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else GameConfig()
        config = apply_overrides(config, args)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        session = GameSession.create(config=config)
    except BoardGenerationError as e:
        print(f"Error generating board: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error loading word list: {e}", file=sys.stderr)
        sys.exit(1)

    if args.letters:
        sides, errors = parse_custom_board(args.letters)
        result = ValidationResult(valid=False, errors=errors) if errors else session.set_custom_board(sides)
        if isinstance(result, ValidationResult):
            print("Invalid letters:", file=sys.stderr)
            for error in result.errors:
                print(f"  {error.message}", file=sys.stderr)
            sys.exit(1)

    try:
        asyncio.run(play(session))
    except KeyboardInterrupt:
        print("\nGame interrupted by user")

    print()
    print("=== Game Summary ===")
    print(f"Words played: {len(session.state.used_words)}")
    if session.state.used_words:
        print(f"Words: {', '.join(session.state.used_words)}")
    print(f"Solved: {'yes' if session.is_solved else 'no'}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
