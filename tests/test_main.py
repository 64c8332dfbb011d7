"""Tests for the command line entry point."""
import sys
import os
import json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from unittest.mock import patch

import pytest

from khmersuggest.engine import EngineError
from khmersuggest.main import main


class FakeEngine:
    def __init__(self, error=None):
        self.error = error
        self.learned = []

    def suggest_top3(self, word):
        if self.error:
            raise self.error
        return ["ស", "សួ", "សុ"] if word == "suo" else []

    def increment_frequency(self, romanization, chosen_text):
        self.learned.append((romanization, chosen_text))


@pytest.fixture
def config_path(tmp_path):
    return str(tmp_path / "config.json")


def run(argv, engine):
    with patch('khmersuggest.main.build_engine', return_value=engine):
        return main(argv)


def test_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(['--version'])
    assert exc_info.value.code == 0
    assert 'khmersuggest' in capsys.readouterr().out


def test_prints_suggestions(capsys, config_path):
    assert run(['hello suo', '--config', config_path], FakeEngine()) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "1. ស  (suo)  0.90  [auto]",
        "2. សួ  (suo)  0.70",
        "3. សុ  (suo)  0.50",
    ]


def test_max_and_cursor(capsys, config_path):
    assert run(['suo hello', '--cursor', '3', '--max', '1', '--config', config_path],
               FakeEngine()) == 0
    assert capsys.readouterr().out.splitlines() == ["1. ស  (suo)  0.90  [auto]"]


def test_no_suggestions(capsys, config_path):
    assert run(['ខ្ញុំ', '--config', config_path], FakeEngine()) == 0
    assert "No suggestions" in capsys.readouterr().out


def test_accept(capsys, config_path):
    engine = FakeEngine()
    assert run(['hello suo', '--accept', '2', '--config', config_path], engine) == 0
    assert engine.learned == [("suo", "សួ")]
    assert "Accepted សួ for suo" in capsys.readouterr().out


def test_accept_out_of_range(config_path):
    engine = FakeEngine()
    assert run(['hello suo', '--accept', '7', '--config', config_path], engine) == 1
    assert engine.learned == []


def test_engine_failure(capsys, config_path):
    assert run(['hello suo', '--config', config_path], FakeEngine(EngineError("down"))) == 1
    assert "Engine unavailable" in capsys.readouterr().err


def test_locale_not_enabled(tmp_path, capsys):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"accepted_locales": ["km"]}), encoding="utf-8")
    assert run(['suo', '--locale', 'en-US', '--config', str(path)], FakeEngine()) == 1
    assert "not enabled" in capsys.readouterr().err
