"""Tests for the command line entry point (extract mode)."""

import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from main import main


def test_extract_prints_commands_and_display_text(tmp_path, capsys):
    text_file = tmp_path / "reply.txt"
    text_file.write_text('Move it. {"exercise": "Pushup", "count": 20}{"exercise": "Situp", "count": 5}')

    assert main(["--mode", "extract", "--text-file", str(text_file)]) == 0

    out = capsys.readouterr().out
    decoded, _ = json.JSONDecoder().raw_decode(out)
    assert decoded == [{"exercise": "Pushup", "count": 20}]
    assert out.rstrip().endswith("Move it.")


def test_extract_missing_file(tmp_path, capsys):
    assert main(["--mode", "extract", "--text-file", str(tmp_path / "missing.txt")]) == 1
    assert "Text file not found" in capsys.readouterr().out
