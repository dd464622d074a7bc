import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..counting import RepCounter, create_counter
from ..counting.config_utils import get_allowed_exercises
from ..feedback.base_feedback import BaseFeedback
from .extractor import residual_text
from .validator import parse_commands

logger = logging.getLogger("PunishmentManager")


@dataclass
class Punishment:
    """An assigned exercise punishment waiting to be performed."""
    title: str
    count: int
    detail: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)


class PunishmentManager:
    """
    In-memory list of assigned punishments.

    Turns assistant text into punishment records and hands out the rep counter
    that verifies each one.
    """

    def __init__(self, allowed: Optional[Iterable[str]] = None, feedback: Optional[BaseFeedback] = None):
        """
        Args:
            allowed: Exercise names that may be assigned (defaults to the configured vocabulary)
            feedback: Sink passed on to every counter created by this manager
        """
        self.allowed = list(get_allowed_exercises() if allowed is None else allowed)
        self.feedback = feedback
        self._punishments: Dict[uuid.UUID, Punishment] = {}

    @property
    def punishments(self) -> List[Punishment]:
        return list(self._punishments.values())

    def get(self, punishment_id: uuid.UUID) -> Optional[Punishment]:
        return self._punishments.get(punishment_id)

    def add_punishment(self, title: str, count: int, detail: Optional[str] = None) -> Punishment:
        punishment = Punishment(title, count, detail if detail is not None else f"{count} repetitions")
        self._punishments[punishment.id] = punishment
        logger.info(f"Punishment assigned: {count} x {title}")
        return punishment

    def delete_punishment(self, punishment_id: uuid.UUID) -> None:
        if self._punishments.pop(punishment_id, None) is None:
            logger.debug(f"No punishment with id {punishment_id}")

    def clear_punishments(self) -> None:
        self._punishments.clear()

    def search_text_for_punishments(self, text: str) -> List[Punishment]:
        """
        Create one punishment per valid command found in the text, in order.

        Returns:
            The punishments created (empty when the text holds no valid command)
        """
        return [self.add_punishment(command.exercise, command.count) for command in parse_commands(text, self.allowed)]

    @staticmethod
    def display_text(text: str) -> str:
        """The text as the user should see it, with command blocks removed."""
        return residual_text(text)

    def create_counter(self, punishment_id: uuid.UUID, **kwargs) -> RepCounter:
        """
        Create the rep counter that verifies a punishment.

        Raises:
            KeyError: if no punishment has this id
            ValueError: if no counter exists for the punishment's exercise
        """
        punishment = self._punishments[punishment_id]
        kwargs.setdefault("feedback", self.feedback)
        return create_counter(punishment.title, punishment.count, **kwargs)
