"""Tests for the text command parser and the human player prompt."""

import pytest

from questboard.interface.command_parser import CommandParseError, CommandParser, ErrorType
from questboard.interface.human_player import HumanPlayer, QuitGame
from questboard.models.game_state import GameState

from game_helpers import make_board, make_player


class TestCommandParser:
    """Tests for CommandParser."""

    def setup_method(self):
        """Set up test fixtures."""
        self.parser = CommandParser()

    def test_simple_commands(self):
        assert self.parser.parse("roll").type == "roll_dice"
        assert self.parser.parse("a").type == "attack"
        assert self.parser.parse("DEFEND").type == "defend"
        assert self.parser.parse("ok").type == "acknowledge_reward"
        assert self.parser.parse("continue").type == "continue_turn"
        assert self.parser.parse("  end  ").type == "end_turn"

    def test_move(self):
        action = self.parser.parse("move 12")
        assert action.type == "select_tile"
        assert action.position == 12

    def test_item_commands(self):
        use = self.parser.parse("use item-0004")
        equip = self.parser.parse("equip item-0007")

        assert (use.type, use.item_id) == ("use_item", "item-0004")
        assert (equip.type, equip.item_id) == ("equip_item", "item-0007")

    def test_unequip(self):
        action = self.parser.parse("unequip Weapon")
        assert action.type == "unequip_item"
        assert action.slot == "weapon"

    def test_trap(self):
        action = self.parser.parse("trap item-0002 14")
        assert action.type == "place_trap"
        assert action.item_id == "item-0002"
        assert action.position == 14

    def test_meta_commands_return_none(self):
        for command in ("help", "board", "status", "quit"):
            assert self.parser.parse(command) is None

    def test_unknown_command(self):
        with pytest.raises(CommandParseError) as exc_info:
            self.parser.parse("fly 3")
        assert exc_info.value.error_type == ErrorType.UNKNOWN_COMMAND

    def test_empty_command(self):
        with pytest.raises(CommandParseError) as exc_info:
            self.parser.parse("   ")
        assert exc_info.value.error_type == ErrorType.SYNTAX_ERROR

    def test_move_needs_number(self):
        with pytest.raises(CommandParseError) as exc_info:
            self.parser.parse("move north")
        assert "not a number" in exc_info.value.message

    def test_move_rejects_negative(self):
        with pytest.raises(CommandParseError) as exc_info:
            self.parser.parse("move -2")
        assert exc_info.value.error_type == ErrorType.SYNTAX_ERROR

    def test_trap_needs_two_arguments(self):
        with pytest.raises(CommandParseError):
            self.parser.parse("trap item-0002")


class TestHumanPlayer:
    """Tests for HumanPlayer prompting."""

    def create_state(self):
        board = make_board(["start"] + ["normal"] * 8 + ["castle"])
        return GameState(players=[make_player("p1")], board=board, current_player_id="p1")

    def test_retries_until_valid(self, capsys):
        replies = iter(["dance", "board", "roll"])
        player = HumanPlayer(input_func=lambda prompt: next(replies))

        action = player.get_action(self.create_state())

        assert action.type == "roll_dice"
        output = capsys.readouterr().out
        assert "Unknown command" in output
        assert "CA" in output

    def test_quit(self):
        player = HumanPlayer(input_func=lambda prompt: "quit")
        with pytest.raises(QuitGame):
            player.get_action(self.create_state())
