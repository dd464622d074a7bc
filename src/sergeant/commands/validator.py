import logging
from typing import Any, Dict, Iterable, List, NamedTuple, Optional

from ..counting.config_utils import get_allowed_exercises
from .extractor import extract_commands

logger = logging.getLogger("CommandExtractor")


class ValidCommand(NamedTuple):
    """An exercise command that passed validation."""
    exercise: str
    count: int


def _is_integer(value: Any) -> bool:
    # bool is a subclass of int, but `true` is not a repetition count
    return isinstance(value, int) and not isinstance(value, bool)


def validate(commands: Iterable[Dict[str, Any]], allowed: Optional[Iterable[str]] = None) -> List[ValidCommand]:
    """
    Filter decoded commands down to (exercise, count) pairs.

    A command is kept when its "exercise" is a string in the allowed set and its
    "count" is a non-negative integer. Everything else is dropped without error.
    Output order is the input order.

    Args:
        commands: Decoded command dictionaries, in discovery order
        allowed: Recognised exercise names (defaults to the configured vocabulary)

    Returns:
        List of ValidCommand tuples
    """
    allowed_set = set(get_allowed_exercises() if allowed is None else allowed)
    valid = []
    for command in commands:
        exercise = command.get("exercise")
        count = command.get("count")
        if not isinstance(exercise, str) or exercise not in allowed_set:
            logger.debug(f"Dropping command with unknown exercise: {command}")
            continue
        if not _is_integer(count) or count < 0:
            logger.debug(f"Dropping command with invalid count: {command}")
            continue
        valid.append(ValidCommand(exercise, count))
    return valid


def parse_commands(text: str, allowed: Optional[Iterable[str]] = None) -> List[ValidCommand]:
    """Extract and validate all commands embedded in the text."""
    return validate(extract_commands(text), allowed)
