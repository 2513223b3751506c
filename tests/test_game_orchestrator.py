"""Tests for the terminal game orchestrator."""

import sys

import pytest

from game import GameOrchestrator, main
from questboard.engine.scheduler import ManualScheduler
from questboard.interface.human_player import HumanPlayer
from questboard.server.session import GameConfig, new_game


def create_orchestrator(humans, ai, seed=42):
    scheduler = ManualScheduler()
    session = new_game(GameConfig(human_players=humans, ai_players=ai, seed=seed), scheduler)
    return GameOrchestrator(session, scheduler)


def test_ai_game_advances_without_input(capsys):
    orchestrator = create_orchestrator(humans=0, ai=2)

    state = orchestrator.run(max_steps=500)

    assert state.turn_id > 0 or state.phase == "game_over"
    output = capsys.readouterr().out
    assert "Turn 0: AI Player 1" in output


def test_human_commands_reach_engine(capsys):
    orchestrator = create_orchestrator(humans=1, ai=0)
    replies = iter(["roll", "quit"])
    orchestrator.human = HumanPlayer(input_func=lambda prompt: next(replies))

    with pytest.raises(SystemExit) as exc_info:
        orchestrator.run()

    assert exc_info.value.code == 0
    assert orchestrator.state.phase == "selecting_tile"


def test_main_rejects_empty_table(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["game.py", "--humans", "0", "--ai", "0"])

    with pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 1
    assert "Error" in capsys.readouterr().out
