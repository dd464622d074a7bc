import copy
import json
import os
from typing import Any, Dict, List, Optional

_DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "counter_config.json")
_CONFIG_CACHE: Dict[str, Dict[str, Any]] = {}


def load_counter_config(config_path: str = None) -> Dict[str, Any]:
    """Load counter config from JSON file (cached per path). Each call returns its own copy."""
    if config_path is None:
        config_path = _DEFAULT_CONFIG_PATH
    if config_path not in _CONFIG_CACHE:
        with open(config_path, "r") as f:
            _CONFIG_CACHE[config_path] = json.load(f)
    return copy.deepcopy(_CONFIG_CACHE[config_path])


def get_allowed_exercises(config: Optional[Dict[str, Any]] = None) -> List[str]:
    if config is None:
        config = load_counter_config()
    return list(config.get("allowed_exercises", []))


def get_exercise_config(exercise: str, config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    if config is None:
        config = load_counter_config()
    exercises = config.get("exercises", {})
    if exercise not in exercises:
        raise ValueError(f"Unsupported exercise type: {exercise}")
    return exercises[exercise]


def get_decay_period(config: Optional[Dict[str, Any]] = None) -> float:
    if config is None:
        config = load_counter_config()
    return float(config.get("decay_period_seconds", 1.0))
