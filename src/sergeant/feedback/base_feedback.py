from abc import ABC, abstractmethod


class BaseFeedback(ABC):
    """Receives the signals a rep counter emits while a punishment is being verified."""

    @abstractmethod
    def on_rep_counted(self, exercise: str, count: int, target_count: int) -> None:
        """
        Called when a full repetition was counted.

        Args:
            exercise: Exercise name (e.g., "Pushup")
            count: Count after the increment
            target_count: Number of repetitions assigned
        """
        pass

    @abstractmethod
    def on_rep_lost(self, exercise: str, count: int) -> None:
        """
        Called on every decay tick while posture stays bad.

        Args:
            exercise: Exercise name
            count: Count after the decrement (unchanged when it was already 0)
        """
        pass

    def on_posture_changed(self, exercise: str, feedback: str, is_good: bool) -> None:
        """Called when the posture text shown to the user changes."""
        pass

    def close(self) -> None:
        pass


class SilentFeedback(BaseFeedback):
    """Feedback sink that ignores every signal."""

    def on_rep_counted(self, exercise: str, count: int, target_count: int) -> None:
        pass

    def on_rep_lost(self, exercise: str, count: int) -> None:
        pass
