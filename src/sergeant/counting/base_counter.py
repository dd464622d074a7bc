import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

import numpy as np

from ..feedback.base_feedback import BaseFeedback, SilentFeedback
from ..pose_detection.keypoints import DetectionResult
from .config_utils import get_decay_period, get_exercise_config
from .cycle import CyclePhase, RepCycle
from .decay import DecayScheduler
from .posture import PostureEvaluator, PostureReading, PostureRules, PostureStatus, SideKeypoints

# --- Logger Setup ---
logger = logging.getLogger("RepCounter")
if not logger.hasHandlers():
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s %(levelname)s %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
logger.setLevel(logging.INFO)


@dataclass
class CounterSnapshot:
    """Everything the display layer reads after an update."""
    exercise: str
    count: int
    target_count: int
    phase: str
    posture_feedback: str
    is_good_posture: bool
    core_angle: float
    joint_angle: float
    is_complete: bool


# --- Counter Registry ---
COUNTER_REGISTRY: Dict[str, Type["RepCounter"]] = {}


def register_counter(exercise: str):  # Decorator that adds an exercise counter class to the registry.
    def decorator(cls):
        COUNTER_REGISTRY[exercise] = cls
        return cls
    return decorator


def available_exercises() -> List[str]:
    return list(COUNTER_REGISTRY)


def create_counter(exercise: str, target_count: int, **kwargs) -> "RepCounter":
    """
    Create the counter registered for an exercise name.

    Raises:
        ValueError: if no counter is registered for the exercise
    """
    counter_cls = COUNTER_REGISTRY.get(exercise)
    if counter_cls is None:
        raise ValueError(f"Unsupported exercise type: {exercise}")
    return counter_cls(target_count, **kwargs)


class RepCounter(ABC):
    """
    Posture-aware repetition counter for one assigned punishment.

    Each frame goes through the posture evaluator; on good frames the exercise's
    joint angle drives an Up/Down cycle that counts a rep on every Down -> Up
    transition. Sustained bad posture starts a decay task that takes one rep
    away per period until posture recovers. Frame updates and decay ticks share
    one lock.

    The counter never retires itself: the caller checks `is_complete` after each
    update and then calls close(). Updates after close() are ignored.
    """

    EXERCISE: str = ""

    def __init__(
        self,
        target_count: int,
        feedback: Optional[BaseFeedback] = None,
        config: Optional[Dict[str, Any]] = None,
        decay_period: Optional[float] = None,
    ):
        """
        Initialize the counter.

        Args:
            target_count: Number of repetitions to perform
            feedback: Sink for rep / decay / posture signals
            config: Full counter configuration (defaults to the packaged counter_config.json)
            decay_period: Seconds between decay ticks (defaults to the configured period)
        """
        if target_count < 0:
            raise ValueError(f"target_count must be non-negative, got {target_count}")
        exercise_config = get_exercise_config(self.EXERCISE, config)

        self._target_count = target_count
        self._feedback = feedback or SilentFeedback()
        self._lock = threading.RLock()
        self._evaluator = PostureEvaluator(PostureRules.from_config(exercise_config.get("posture", {})))
        self._cycle = RepCycle(exercise_config["down_angle"], exercise_config["up_angle"])
        self._decay = DecayScheduler(
            self._lose_rep,
            lock=self._lock,
            period=decay_period if decay_period is not None else get_decay_period(config),
            name=f"{self.EXERCISE}-decay",
        )
        self._is_good_posture = False
        self._posture_feedback = PostureStatus.NO_PERSON.value
        self._core_angle = np.nan
        self._joint_angle = np.nan
        self._closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __del__(self):
        # Never leave a decay thread running for a counter that no longer exists
        decay = getattr(self, "_decay", None)
        if decay is not None:
            decay.stop()

    # --- Exercise-specific ---

    @abstractmethod
    def _compute_joint_angle(self, side: SideKeypoints) -> float:
        """
        Angle of the joint that drives the repetition cycle.

        Args:
            side: Confident keypoints of the body side being tracked

        Returns:
            Angle in degrees
        """
        pass

    # --- Read-only state ---

    @property
    def exercise(self) -> str:
        return self.EXERCISE

    @property
    def count(self) -> int:
        return self._cycle.count

    @property
    def target_count(self) -> int:
        return self._target_count

    @property
    def phase(self) -> CyclePhase:
        return self._cycle.phase

    @property
    def is_good_posture(self) -> bool:
        return self._is_good_posture

    @property
    def posture_feedback(self) -> str:
        return self._posture_feedback

    @property
    def core_angle(self) -> float:
        return self._core_angle

    @property
    def joint_angle(self) -> float:
        return self._joint_angle

    @property
    def posture(self) -> PostureStatus:
        return self._evaluator.status

    @property
    def is_complete(self) -> bool:
        return self._cycle.count >= self._target_count

    @property
    def is_decaying(self) -> bool:
        return self._decay.is_active

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> CounterSnapshot:
        with self._lock:
            return CounterSnapshot(
                exercise=self.EXERCISE,
                count=self._cycle.count,
                target_count=self._target_count,
                phase=self._cycle.phase.value,
                posture_feedback=self._posture_feedback,
                is_good_posture=self._is_good_posture,
                core_angle=self._core_angle,
                joint_angle=self._joint_angle,
                is_complete=self.is_complete,
            )

    # --- Frame updates ---

    def update(self, result: DetectionResult) -> CounterSnapshot:
        """
        Process one detection result.

        Args:
            result: Detection pass; only its first subject is used

        Returns:
            CounterSnapshot after the update
        """
        with self._lock:
            if self._closed:
                return self.snapshot()
            reading = self._evaluator.classify(result.first_subject, is_down=self._cycle.is_down)
            self._apply_reading(reading)
            return self.snapshot()

    def _apply_reading(self, reading: PostureReading) -> None:
        # Pending bad frames can still carry a held NO_PERSON status
        if reading.side is None:
            self._set_feedback(reading.status.value)
            return

        self._core_angle = reading.body_angle
        if reading.is_bad_frame:
            if reading.status is PostureStatus.BAD:
                self.start_decay()
                self._is_good_posture = False
                self._set_feedback(PostureStatus.BAD.value)
            return

        self.stop_decay()
        self._is_good_posture = True

        angle = self._compute_joint_angle(reading.side)
        self._joint_angle = angle
        transition = self._cycle.advance(angle)
        if transition is CyclePhase.DOWN:
            logger.debug(f"[{self.EXERCISE}] Down at {angle:.1f} deg")
            self._set_feedback(CyclePhase.DOWN.value)
        elif transition is CyclePhase.UP:
            logger.info(f"[{self.EXERCISE}] Rep {self._cycle.count}/{self._target_count}")
            self._set_feedback(CyclePhase.UP.value)
            self._feedback.on_rep_counted(self.EXERCISE, self._cycle.count, self._target_count)
        else:
            self._set_feedback(PostureStatus.GOOD.value)

    def _set_feedback(self, feedback: str) -> None:
        if feedback != self._posture_feedback:
            self._posture_feedback = feedback
            self._feedback.on_posture_changed(self.EXERCISE, feedback, self._is_good_posture)

    # --- Decay ---

    def start_decay(self) -> None:
        """Start losing reps every period. No-op if already decaying or closed."""
        with self._lock:
            if self._closed:
                return
            if self._decay.start():
                logger.info(f"[{self.EXERCISE}] Bad posture, decay started")

    def stop_decay(self) -> None:
        """Stop losing reps. No-op if not decaying."""
        with self._lock:
            self._decay.stop()

    def _lose_rep(self) -> None:
        with self._lock:
            self._cycle.lose_rep()
            self._feedback.on_rep_lost(self.EXERCISE, self._cycle.count)

    # --- Lifecycle ---

    def reset(self) -> None:
        """Back to zero reps in the Up phase, with decay stopped and posture history cleared."""
        with self._lock:
            self._decay.stop()
            self._cycle.reset()
            self._evaluator.reset()
            self._is_good_posture = False
            self._posture_feedback = PostureStatus.NO_PERSON.value
            self._core_angle = np.nan
            self._joint_angle = np.nan

    def close(self) -> None:
        """Retire the counter: stop decay and ignore further updates. Safe to call twice."""
        with self._lock:
            self._decay.stop()
            self._closed = True
