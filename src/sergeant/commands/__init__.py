"""
Extraction and validation of exercise commands embedded in assistant text.
"""

from .extractor import (
    CommandBlock,
    NoCommandsFoundError,
    extract_commands,
    extract_json_objects,
    find_command_blocks,
    residual_text,
)
from .punishments import Punishment, PunishmentManager
from .validator import ValidCommand, parse_commands, validate

__all__ = [
    'CommandBlock',
    'NoCommandsFoundError',
    'extract_commands',
    'extract_json_objects',
    'find_command_blocks',
    'residual_text',
    'Punishment',
    'PunishmentManager',
    'ValidCommand',
    'parse_commands',
    'validate',
]
