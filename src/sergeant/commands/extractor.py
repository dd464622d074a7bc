"""
extractor.py - Finds and decodes JSON command blocks embedded in assistant text.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

# --- Logger Setup ---
logger = logging.getLogger("CommandExtractor")
if not logger.hasHandlers():
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s %(levelname)s %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
logger.setLevel(logging.INFO)


class NoCommandsFoundError(ValueError):
    """Raised by extract_json_objects when no block in the text decodes to an object."""

    def __init__(self, message: str = "No valid JSON objects were found in the input string."):
        super().__init__(message)


@dataclass(frozen=True)
class CommandBlock:
    """A top-level balanced {...} span, as half-open [start, end) offsets into the source text."""
    start: int
    end: int
    text: str


def find_command_blocks(text: str, opening: str = "{", closing: str = "}") -> List[CommandBlock]:
    """
    Scan the text once and return the outermost balanced blocks in source order.

    Quoted strings are opaque: a quote closes the string only when the run of
    backslashes directly in front of it has even length. Braces nested inside a
    block are absorbed into it, and an opening brace that is never closed
    produces no block.

    Args:
        text: Arbitrary text that may contain JSON objects
        opening: Opening delimiter character
        closing: Closing delimiter character

    Returns:
        List of CommandBlock objects, non-overlapping and ordered by start offset
    """
    blocks: List[CommandBlock] = []
    stack: List[int] = []
    in_string = False
    backslashes = 0  # length of the backslash run ending just before the current char

    for index, ch in enumerate(text):
        if in_string:
            if ch == '"' and backslashes % 2 == 0:
                in_string = False
            backslashes = backslashes + 1 if ch == "\\" else 0
            continue

        if ch == '"':
            in_string = True
            backslashes = 0
        elif ch == opening:
            stack.append(index)
        elif ch == closing and stack:
            start = stack.pop()
            if not stack:
                blocks.append(CommandBlock(start, index + 1, text[start:index + 1]))

    return blocks


def extract_commands(text: str) -> List[Dict[str, Any]]:
    """
    Decode every command block of the text into a dictionary.

    Blocks that are not valid JSON, or that decode to something other than an
    object, are skipped. Never raises for malformed input.
    """
    commands = []
    for block in find_command_blocks(text):
        try:
            decoded = json.loads(block.text)
        except ValueError as e:
            logger.debug(f"Skipping malformed block at {block.start}: {e}")
            continue
        if not isinstance(decoded, dict):
            logger.debug(f"Skipping non-object block at {block.start}")
            continue
        commands.append(decoded)
    return commands


def extract_json_objects(text: str) -> List[Dict[str, Any]]:
    """Same as extract_commands, but raises NoCommandsFoundError instead of returning []."""
    commands = extract_commands(text)
    if not commands:
        raise NoCommandsFoundError()
    return commands


def residual_text(text: str) -> str:
    """
    Remove every command block from the text, keeping the surrounding text in order.

    Returns the input unchanged when no block is found.
    """
    blocks = find_command_blocks(text)
    if not blocks:
        return text

    pieces = []
    cursor = 0
    for block in blocks:
        pieces.append(text[cursor:block.start])
        cursor = block.end
    pieces.append(text[cursor:])
    return "".join(pieces)
