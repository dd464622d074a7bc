import logging
import uuid
from typing import Dict, Optional, Union

import cv2
import numpy as np

from .commands.punishments import PunishmentManager
from .counting import CounterSnapshot
from .pose_detection.base_detector import BasePoseDetector
from .pose_detection.keypoints import DetectionResult

logger = logging.getLogger("PunishmentSession")


class PunishmentSession:
    """
    Verifies one punishment: feeds detections to its rep counter until the target is reached.

    On completion the counter is retired and the punishment record is removed
    from the manager. Aborting (stop() before completion) retires the counter
    but keeps the record.
    """

    def __init__(
        self,
        manager: PunishmentManager,
        punishment_id: uuid.UUID,
        detector: Optional[BasePoseDetector] = None,
        **counter_kwargs,
    ):
        """
        Initialize the session.

        Args:
            manager: Manager holding the punishment record
            punishment_id: Id of the punishment to verify
            detector: Pose detector used by process_frame/start (not needed for process_detection)
            counter_kwargs: Passed on to the counter (feedback, config, decay_period)
        """
        self.manager = manager
        self.punishment = manager.get(punishment_id)
        if self.punishment is None:
            raise ValueError(f"Unknown punishment: {punishment_id}")
        self.counter = manager.create_counter(punishment_id, **counter_kwargs)
        self.detector = detector
        self.completed = False
        self.is_running = False
        self.display = False
        self.cap = None

    def process_detection(self, result: DetectionResult) -> CounterSnapshot:
        """Update the counter with one detection result and retire it once the target is reached."""
        snapshot = self.counter.update(result)
        if snapshot.is_complete and not self.completed:
            self.completed = True
            self.counter.close()
            self.manager.delete_punishment(self.punishment.id)
            logger.info(f"Punishment complete: {snapshot.count} x {snapshot.exercise}")
        return snapshot

    def process_frame(self, frame: np.ndarray) -> CounterSnapshot:
        """
        Detect the pose in a single frame and update the counter.

        Args:
            frame: Input frame (BGR)

        Returns:
            CounterSnapshot after the update
        """
        if self.detector is None:
            raise RuntimeError("No pose detector configured for this session")
        return self.process_detection(self.detector.detect(frame))

    def start(self, source: Union[int, str] = 0, display: bool = False) -> CounterSnapshot:
        """
        Run the session on a camera id or a video file until completion, end of input or 'q'.

        Args:
            source: Camera device ID or path to a video file
            display: Show the frames with the current count overlaid

        Returns:
            The last CounterSnapshot
        """
        self.cap = cv2.VideoCapture(source)
        if not self.cap.isOpened():
            raise RuntimeError(f"Failed to open video source: {source}")
        self.is_running = True
        self.display = display
        snapshot = self.counter.snapshot()
        last_feedback = None
        try:
            while self.is_running and not self.completed:
                ret, frame = self.cap.read()
                if not ret:
                    break
                snapshot = self.process_frame(frame)
                if snapshot.posture_feedback != last_feedback:
                    logger.info(f"{snapshot.count}/{snapshot.target_count} - {snapshot.posture_feedback}")
                    last_feedback = snapshot.posture_feedback
                if display:
                    self._display_results(frame, snapshot)
                    if cv2.waitKey(1) & 0xFF == ord('q'):
                        break
        except KeyboardInterrupt:
            logger.info("KeyboardInterrupt received. Exiting gracefully...")
        finally:
            self.stop()
        return snapshot

    def stop(self) -> None:
        """Stop the session and release resources."""
        self.is_running = False
        self.counter.close()
        if self.cap is not None:
            self.cap.release()
            self.cap = None
        if self.display:
            cv2.destroyAllWindows()
            self.display = False

    def summary(self) -> Dict:
        snapshot = self.counter.snapshot()
        return {
            "punishment_id": str(self.punishment.id),
            "exercise": snapshot.exercise,
            "count": snapshot.count,
            "target_count": snapshot.target_count,
            "completed": self.completed,
        }

    def _display_results(self, frame: np.ndarray, snapshot: CounterSnapshot) -> None:
        color = (0, 255, 0) if snapshot.is_good_posture else (0, 0, 255)
        cv2.putText(
            frame,
            f"{snapshot.count}/{snapshot.target_count}",
            (10, 60),
            cv2.FONT_HERSHEY_SIMPLEX,
            2.0,
            (255, 255, 255),
            3
        )
        cv2.putText(
            frame,
            snapshot.posture_feedback,
            (10, 100),
            cv2.FONT_HERSHEY_SIMPLEX,
            0.7,
            color,
            2
        )
        cv2.imshow("Sergeant", frame)
