"""Human player controller for CLI interaction.

This module provides the HumanPlayer class which reads actions for a
human seat from the command line.
"""

from typing import Optional

from ..models.action import Action
from ..models.game_state import GameState
from .command_parser import HELP_TEXT, CommandParseError, CommandParser, ErrorType
from .renderer import BoardRenderer


class QuitGame(Exception):
    """Raised when the human asks to leave the game."""


class HumanPlayer:
    """Human player controller class.

    Prompts until the player types something the engine can act on.
    """

    def __init__(self, input_func=input):
        """Initialize human player controller.

        Args:
            input_func: Line reader (``input`` by default)
        """
        self.input_func = input_func
        self.renderer = BoardRenderer()
        self.parser = CommandParser()

    def _format_error_message(self, error_type: ErrorType, message: str) -> str:
        formatted = f"❌ {message}"
        if error_type == ErrorType.UNKNOWN_COMMAND:
            formatted += "\n\nType 'help' for the list of commands"
        return formatted

    def _prompt_hint(self, state: GameState) -> str:
        """What the player can do right now."""
        if state.phase == "rolling":
            return "roll"
        if state.phase == "selecting_tile":
            positions = ", ".join(str(p) for p in state.available_positions)
            return f"move <pos>  (rolled {state.dice_value}; reachable: {positions})"
        if state.phase == "battle":
            return "attack | defend | use <item-id>"
        if state.phase == "reward":
            return f"ok  (you got {state.current_reward.name})" if state.current_reward else "ok"
        if state.phase == "finishing":
            return "continue | end" if state.can_continue else "end"
        return ""

    def get_action(self, state: GameState) -> Optional[Action]:
        """Read one action for the current player.

        Args:
            state: Current game state

        Returns:
            Parsed Action

        Raises:
            QuitGame: If the player types quit
        """
        player = state.current_player
        while True:
            command = self.input_func(f"[{player.name}] {self._prompt_hint(state)} > ")
            try:
                action = self.parser.parse(command)
            except CommandParseError as e:
                print(self._format_error_message(e.error_type, e.message))
                continue

            if action is not None:
                return action

            word = command.strip().split()[0].lower()
            if word in ("quit", "exit", "q"):
                raise QuitGame()
            if word in ("board", "b"):
                print(self.renderer.render_with_coords(state))
            elif word in ("status", "st"):
                print(self.renderer.render_players(state))
                for item in player.inventory:
                    print(f"  {item.id}: {item.name} ({item.category}, {item.rarity}, {item.stats})")
            else:
                print(HELP_TEXT)
