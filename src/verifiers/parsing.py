"""Custom board parsing utilities."""

import re
from typing import List, Tuple

from .models import SIDE_NAMES, ValidationError


def split_sides(text: str) -> List[str]:
    """Split a side list on commas, slashes, pipes or whitespace."""
    return [part for part in re.split(r'[\s,/|;]+', text.strip()) if part]


def parse_custom_board(text: str) -> Tuple[List[List[str]], List[ValidationError]]:
    """
    Parse user-supplied board letters.

    Accepted forms:
        ATE MPS RON CID
        ATE,MPS,RON,CID
        top=ATE left=MPS right=RON bottom=CID   (any order)

    Sides without names are taken in board order (top, left, right, bottom).
    Only the shape of the input is checked here; letter rules are applied
    when the board is built.

    Returns a tuple of (sides, errors).
    """
    errors: List[ValidationError] = []
    parts = split_sides(text)

    if not parts:
        errors.append(ValidationError(
            code="EMPTY_BOARD",
            message="No letters given"
        ))
        return [], errors

    named = [re.match(r'^([A-Za-z]+)\s*[=:]\s*(\S*)$', part) for part in parts]
    if not any(named):
        return [list(part.upper()) for part in parts], errors

    if not all(named):
        errors.append(ValidationError(
            code="MIXED_FORMAT",
            message="Either name every side (top=ABC ...) or none of them"
        ))
        return [], errors

    by_name = {}
    for match in named:
        name = match.group(1).lower()
        if name not in SIDE_NAMES:
            errors.append(ValidationError(
                code="UNKNOWN_SIDE",
                message=f"Unknown side '{match.group(1)}'",
                side=name
            ))
            continue
        if name in by_name:
            errors.append(ValidationError(
                code="REPEATED_SIDE",
                message=f"Side '{name}' given more than once",
                side=name
            ))
            continue
        by_name[name] = list(match.group(2).upper())

    for name in SIDE_NAMES:
        if name not in by_name and not any(e.side == name for e in errors):
            errors.append(ValidationError(
                code="WRONG_SIDE_COUNT",
                message=f"Missing side '{name}'",
                side=name
            ))

    if errors:
        return [], errors
    return [by_name[name] for name in SIDE_NAMES], errors
