from typing import Collection, List, Sequence

from ..verifiers.models import Board


def _show(letters: Sequence[str], used: Collection[str]) -> List[str]:
    """Used letters are drawn lowercase."""
    return [letter.lower() if letter in used else letter for letter in letters]


def render_board(board: Board, used_letters: Collection[str] = ()) -> str:
    """
    Render the board as a box of text.

        A   T   E
      +-----------+
    M |           | R
    P |           | O
    S |           | N
      +-----------+
        C   I   D
    """
    top = _show(board.top, used_letters)
    left = _show(board.left, used_letters)
    right = _show(board.right, used_letters)
    bottom = _show(board.bottom, used_letters)

    width = 4 * max(len(top), len(bottom)) - 1
    border = "  +" + "-" * width + "+"

    lines = ["    " + "   ".join(top), border]
    for i in range(max(len(left), len(right))):
        l = left[i] if i < len(left) else " "
        r = right[i] if i < len(right) else " "
        lines.append(f"{l} |{' ' * width}| {r}")
    lines.append(border)
    lines.append("    " + "   ".join(bottom))

    return '\n'.join(lines)
