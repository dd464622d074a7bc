import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import List

from .base_feedback import BaseFeedback

logger = logging.getLogger("SessionLog")


@dataclass
class LogEntry:
    content: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)


class SessionLog(BaseFeedback):
    """
    Debug log scoped to one session.

    Created by the caller and passed to the components that report into it;
    it goes away with the session instead of living in a process-wide singleton.
    Every entry is also forwarded to the standard logger.
    """

    def __init__(self, name: str = "session"):
        self.name = name
        self._entries: List[LogEntry] = []
        self._lock = threading.Lock()

    @property
    def entries(self) -> List[LogEntry]:
        with self._lock:
            return list(self._entries)

    @property
    def lines(self) -> List[str]:
        return [entry.content for entry in self.entries]

    def log(self, content: str) -> None:
        with self._lock:
            self._entries.append(LogEntry(content))
        logger.debug(f"[{self.name}] {content}")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def on_rep_counted(self, exercise: str, count: int, target_count: int) -> None:
        self.log(f"{exercise}: rep counted ({count}/{target_count})")

    def on_rep_lost(self, exercise: str, count: int) -> None:
        self.log(f"{exercise}: rep lost to bad posture ({count})")

    def on_posture_changed(self, exercise: str, feedback: str, is_good: bool) -> None:
        self.log(f"{exercise}: {feedback}")
