"""
Posture-aware repetition counting for assigned punishments.
"""

from .base_counter import (
    COUNTER_REGISTRY,
    CounterSnapshot,
    RepCounter,
    available_exercises,
    create_counter,
    register_counter,
)
from .cycle import CyclePhase, RepCycle
from .decay import DecayScheduler
from .posture import PostureEvaluator, PostureReading, PostureRules, PostureStatus
from .pushup_counter import PushupCounter
from .squat_counter import SquatCounter

__all__ = [
    'COUNTER_REGISTRY',
    'CounterSnapshot',
    'RepCounter',
    'available_exercises',
    'create_counter',
    'register_counter',
    'CyclePhase',
    'RepCycle',
    'DecayScheduler',
    'PostureEvaluator',
    'PostureReading',
    'PostureRules',
    'PostureStatus',
    'PushupCounter',
    'SquatCounter',
]
