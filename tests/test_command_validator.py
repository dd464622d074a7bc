"""Tests for command validation and punishment records."""

import sys
import uuid
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from sergeant.commands import Punishment, PunishmentManager, ValidCommand, parse_commands, validate
from sergeant.counting import PushupCounter, SquatCounter

ALLOWED = {"Pushup", "Squat"}


# ============================================================================
# Test: validate
# ============================================================================

class TestValidate:

    def test_rejects_exercise_outside_allowed_set(self):
        assert validate([{"exercise": "Situp", "count": 10}], ALLOWED) == []

    def test_accepts_allowed_command_unchanged(self):
        result = validate([{"exercise": "Squat", "count": 5}], ALLOWED)
        assert result == [ValidCommand("Squat", 5)]
        assert result[0] == ("Squat", 5)
        assert result[0].exercise == "Squat" and result[0].count == 5

    @pytest.mark.parametrize("command", [
        {"count": 5},
        {"exercise": "Pushup"},
        {"exercise": 7, "count": 5},
        {"exercise": "Pushup", "count": "5"},
        {"exercise": "Pushup", "count": 5.0},
        {"exercise": "Pushup", "count": True},
        {"exercise": "Pushup", "count": None},
        {"exercise": "Pushup", "count": -3},
        {"exercise": "pushup", "count": 5},
    ])
    def test_drops_invalid_commands(self, command):
        assert validate([command], ALLOWED) == []

    def test_zero_count_is_valid(self):
        assert validate([{"exercise": "Pushup", "count": 0}], ALLOWED) == [("Pushup", 0)]

    def test_extra_fields_are_ignored(self):
        assert validate([{"exercise": "Pushup", "count": 3, "reason": "late"}], ALLOWED) == [("Pushup", 3)]

    def test_keeps_discovery_order(self):
        commands = [
            {"exercise": "Squat", "count": 10},
            {"exercise": "Situp", "count": 1},
            {"exercise": "Pushup", "count": 20},
            {"exercise": "Squat", "count": 2},
        ]
        assert validate(commands, ALLOWED) == [("Squat", 10), ("Pushup", 20), ("Squat", 2)]

    def test_default_allowed_set_comes_from_config(self):
        commands = [{"exercise": "Pushup", "count": 1}, {"exercise": "Squat", "count": 2}, {"exercise": "Burpee", "count": 3}]
        assert validate(commands) == [("Pushup", 1), ("Squat", 2)]

    def test_parse_commands_from_text(self):
        text = 'Pathetic. {"exercise": "Pushup", "count": 20} and {"exercise": "Squat", "count": 15}. {"exercise": "Run"}'
        assert parse_commands(text, ALLOWED) == [("Pushup", 20), ("Squat", 15)]


# ============================================================================
# Test: PunishmentManager
# ============================================================================

class TestPunishmentManager:

    def test_search_text_creates_chained_punishments(self):
        manager = PunishmentManager(ALLOWED)
        text = 'Late again. {"exercise": "Pushup", "count": 20}{"exercise": "Squat", "count": 10}'
        created = manager.search_text_for_punishments(text)
        assert [(p.title, p.count, p.detail) for p in created] == [
            ("Pushup", 20, "20 repetitions"),
            ("Squat", 10, "10 repetitions"),
        ]
        assert manager.punishments == created

    def test_search_text_without_commands(self):
        manager = PunishmentManager(ALLOWED)
        assert manager.search_text_for_punishments("Good job today.") == []
        assert manager.punishments == []

    def test_allowed_set_restricts_records(self):
        manager = PunishmentManager(["Pushup"])
        created = manager.search_text_for_punishments('{"exercise": "Squat", "count": 5}')
        assert created == []

    def test_display_text_hides_commands(self):
        text = 'Drop. {"exercise": "Pushup", "count": 20}'
        assert PunishmentManager.display_text(text) == "Drop. "

    def test_delete_and_clear(self):
        manager = PunishmentManager(ALLOWED)
        first = manager.add_punishment("Pushup", 5)
        second = manager.add_punishment("Squat", 5, detail="custom")
        assert second.detail == "custom"
        manager.delete_punishment(first.id)
        assert manager.punishments == [second]
        # Deleting an unknown id is a no-op
        manager.delete_punishment(uuid.uuid4())
        assert manager.punishments == [second]
        manager.clear_punishments()
        assert manager.punishments == []

    def test_create_counter_for_punishment(self):
        manager = PunishmentManager(ALLOWED)
        pushups = manager.add_punishment("Pushup", 12)
        squats = manager.add_punishment("Squat", 8)

        with manager.create_counter(pushups.id, decay_period=60) as counter:
            assert isinstance(counter, PushupCounter)
            assert counter.target_count == 12
            assert counter.count == 0
        with manager.create_counter(squats.id, decay_period=60) as counter:
            assert isinstance(counter, SquatCounter)
            assert counter.target_count == 8

    def test_create_counter_unknown_id(self):
        manager = PunishmentManager(ALLOWED)
        with pytest.raises(KeyError):
            manager.create_counter(uuid.uuid4())

    def test_punishment_ids_are_unique(self):
        a = Punishment("Pushup", 1, "1 repetitions")
        b = Punishment("Pushup", 1, "1 repetitions")
        assert a.id != b.id
