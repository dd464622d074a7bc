import queue
import threading
import time
from typing import Optional

import pyttsx3

from .base_feedback import BaseFeedback


class VoiceFeedback(BaseFeedback):
    """Spoken feedback for rep counting, played by a background TTS thread."""

    def __init__(self, rate: int = 165, volume: float = 1.0, posture_cooldown: float = 4.0):
        """
        Initialize the voice feedback system.

        Args:
            rate: Speech rate (words per minute)
            volume: Speech volume (0.0 to 1.0)
            posture_cooldown: Minimum seconds between two spoken posture messages
        """
        self.engine = pyttsx3.init()
        self.engine.setProperty('rate', rate)
        self.engine.setProperty('volume', volume)

        self._tts_queue = queue.Queue()
        self._tts_thread = threading.Thread(target=self._tts_worker, daemon=True)
        self._tts_thread.start()

        self.posture_cooldown = posture_cooldown
        self._last_posture_time = 0.0
        self._last_posture_message: Optional[str] = None

        self.feedback_messages = {
            "rep_lost": "Fix your form. You are losing reps",
            "exercise_complete": "Punishment complete. Dismissed",
            "Bad Position": "Bad position. Straighten up",
            "Move fully into frame": "Move fully into frame",
        }

    def on_rep_counted(self, exercise: str, count: int, target_count: int) -> None:
        if count >= target_count:
            self.speak(self.feedback_messages["exercise_complete"])
        else:
            self.speak(str(count))

    def on_rep_lost(self, exercise: str, count: int) -> None:
        self.speak(self.feedback_messages["rep_lost"])

    def on_posture_changed(self, exercise: str, feedback: str, is_good: bool) -> None:
        message = self.feedback_messages.get(feedback)
        if message is None:
            return
        now = time.time()
        # Avoid feedback spam
        if message == self._last_posture_message and now - self._last_posture_time < self.posture_cooldown:
            return
        self._last_posture_message = message
        self._last_posture_time = now
        self.speak(message)

    def speak(self, message: str) -> None:
        """
        Queue the given message to be spoken by the background TTS thread.

        Args:
            message: Message to speak
        """
        self._tts_queue.put(message)

    def close(self) -> None:
        self._tts_queue.put(None)

    def _tts_worker(self):
        while True:
            msg = self._tts_queue.get()
            if msg is None:
                break  # Allow for clean shutdown
            self.engine.say(msg)
            self.engine.runAndWait()
