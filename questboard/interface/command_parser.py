"""Text command parser for human players.

This module parses typed commands like "move 12" or "equip item-0004"
into Action objects that can be dispatched to the turn engine.
"""

from enum import Enum
from typing import Optional

from ..models.action import Action

# Commands handled by the CLI itself rather than the engine
META_COMMANDS = ("help", "h", "?", "board", "b", "status", "st", "quit", "exit", "q")

SIMPLE_COMMANDS = {
    "roll": "roll_dice",
    "r": "roll_dice",
    "attack": "attack",
    "a": "attack",
    "defend": "defend",
    "d": "defend",
    "ok": "acknowledge_reward",
    "ack": "acknowledge_reward",
    "continue": "continue_turn",
    "c": "continue_turn",
    "end": "end_turn",
    "done": "end_turn",
}

HELP_TEXT = """Commands:
  roll | r                 Roll the dice
  move <pos>               Move to a highlighted path position
  attack | a               Attack in battle
  defend | d               Defend in battle
  use <item-id>            Use a potion or consumable in battle
  ok | ack                 Acknowledge a reward
  continue | c             Roll again after a reward or trap
  end | done               End your turn
  equip <item-id>          Equip an inventory item
  unequip <slot>           Unequip a slot (weapon, armor, helmet, ...)
  trap <item-id> <pos>     Arm a trap on a plain path tile
  board | status | help | quit"""


class ErrorType(Enum):
    """Classification of command input errors."""
    UNKNOWN_COMMAND = "unknown_command"
    SYNTAX_ERROR = "syntax_error"


class CommandParseError(Exception):
    """Raised when command parsing fails with classification."""

    def __init__(self, error_type: ErrorType, message: str):
        """Initialize parse error.

        Args:
            error_type: Classification of the error
            message: Human-readable error message
        """
        self.error_type = error_type
        self.message = message
        super().__init__(message)


class CommandParser:
    """Parse typed commands into Actions."""

    def parse(self, command: str) -> Optional[Action]:
        """Parse a command string into an Action.

        Args:
            command: Command string to parse

        Returns:
            Action if parsed successfully, None for CLI meta commands
            (help, board, status, quit)

        Raises:
            CommandParseError: If the command is unknown or malformed
        """
        parts = command.strip().split()
        if not parts:
            raise CommandParseError(ErrorType.SYNTAX_ERROR, "Empty command")

        word = parts[0].lower()
        args = parts[1:]

        if word in META_COMMANDS:
            return None

        if word in SIMPLE_COMMANDS:
            return Action(type=SIMPLE_COMMANDS[word])

        if word in ("move", "m", "go"):
            return Action(type="select_tile", position=self._parse_position(args, 0, "move <pos>"))

        if word in ("use", "equip"):
            if len(args) != 1:
                raise CommandParseError(ErrorType.SYNTAX_ERROR, f"Syntax error: {word} <item-id>")
            action_type = "use_item" if word == "use" else "equip_item"
            return Action(type=action_type, item_id=args[0])

        if word == "unequip":
            if len(args) != 1:
                raise CommandParseError(ErrorType.SYNTAX_ERROR, "Syntax error: unequip <slot>")
            return Action(type="unequip_item", slot=args[0].lower())

        if word == "trap":
            if len(args) != 2:
                raise CommandParseError(ErrorType.SYNTAX_ERROR, "Syntax error: trap <item-id> <pos>")
            position = self._parse_position(args, 1, "trap <item-id> <pos>")
            return Action(type="place_trap", item_id=args[0], position=position)

        raise CommandParseError(ErrorType.UNKNOWN_COMMAND, f"Unknown command: '{word}'")

    def _parse_position(self, args: list[str], index: int, usage: str) -> int:
        if len(args) <= index:
            raise CommandParseError(ErrorType.SYNTAX_ERROR, f"Syntax error: {usage}")
        try:
            position = int(args[index])
        except ValueError:
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR, f"Invalid position: '{args[index]}' is not a number"
            )
        if position < 0:
            raise CommandParseError(
                ErrorType.SYNTAX_ERROR, f"Invalid position: must be >= 0 (got {position})"
            )
        return position
