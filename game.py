#!/usr/bin/env python3
"""Questboard - Main entry point.

A turn-based board game: race along a procedurally generated path, fight
the monsters guarding it, collect loot and be the first to reach the
castle. Runs in the terminal; AI seats play on a virtual clock, so their
turns never make you wait.
"""

import argparse
import logging
import sys

from questboard.engine.ledger import InMemoryRewardsLedger
from questboard.engine.scheduler import ManualScheduler
from questboard.interface.human_player import HumanPlayer, QuitGame
from questboard.interface.renderer import BoardRenderer
from questboard.models.game_state import GameState
from questboard.server.session import GameConfig, GameSession, new_game


class GameOrchestrator:
    """Drives one session from the terminal."""

    def __init__(self, session: GameSession, scheduler: ManualScheduler, show_board: bool = False):
        """Initialize game orchestrator.

        Args:
            session: Started game session
            scheduler: The session's manual scheduler
            show_board: Print the board at the start of every turn
        """
        self.session = session
        self.scheduler = scheduler
        self.show_board = show_board
        self.human = HumanPlayer()
        self.renderer = BoardRenderer()
        self._turn_seen = -1
        self._rounds_seen = 0

    @property
    def state(self) -> GameState:
        return self.session.state

    def run(self, max_steps: int = 20_000) -> GameState:
        """Main game loop."""
        print("\n" + "=" * 60)
        print("Questboard")
        print("=" * 60)
        print(f"\nSeed {self.session.seed}: first to the castle (CA) wins!\n")
        print(self.renderer.render_with_coords(self.state))

        try:
            for _ in range(max_steps):
                self._report()
                if self.state.phase == "game_over":
                    break

                if self.scheduler.pending():
                    # AI step or enemy counter-attack
                    self.scheduler.run_next()
                    continue

                player = self.state.current_player
                if player.is_ai:
                    print("AI has nothing scheduled; stopping.")
                    break
                if not self.session.dispatch(self.human.get_action(self.state)):
                    print("❌ That action isn't possible right now.")
            else:
                print(f"\nStopped after {max_steps} steps without a winner.")

        except (KeyboardInterrupt, QuitGame):
            print("\n\nGame interrupted by user. Exiting...")
            sys.exit(0)

        self._show_victory()
        return self.state

    def _report(self) -> None:
        """Print what changed since the last step."""
        state = self.state
        if state.turn_id != self._turn_seen:
            self._turn_seen = state.turn_id
            self._rounds_seen = 0
            print(f"\n--- Turn {state.turn_id}: {state.current_player.name} ---")
            if self.show_board:
                print(self.renderer.render(state))
                print(self.renderer.render_players(state))

        battle = state.current_battle
        rounds = battle.rounds if battle is not None else state.last_battle_rounds
        if not rounds:
            self._rounds_seen = 0
            return
        for battle_round in rounds[self._rounds_seen:]:
            print(f"  ⚔ {battle_round.description}")
        self._rounds_seen = len(rounds)

    def _show_victory(self) -> None:
        state = self.state
        if state.winner is None:
            return
        print("\n" + "=" * 60)
        print(f"🏰 {state.winner.name} reached the castle and wins!")
        print("=" * 60)
        print(self.renderer.render_players(state))
        if state.completion is not None:
            print(f"\nRewards: {state.completion.message}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Questboard - Turn-based board game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # You against one AI
  %(prog)s --humans 0 --ai 4        # Watch four AIs race (instant)
  %(prog)s --humans 2 --ai 0        # Hot-seat game for two
  %(prog)s --seed 7 --show-board    # Fixed board, print it every turn
        """,
    )
    parser.add_argument("--humans", type=int, default=1, help="Number of human seats (default: 1)")
    parser.add_argument("--ai", type=int, default=1, help="Number of AI seats (default: 1)")
    parser.add_argument("--names", nargs="*", default=[], help="Names for the human seats")
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for board generation and dice (default: 42)",
    )
    parser.add_argument("--show-board", action="store_true", help="Print the board every turn")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    log_level = logging.DEBUG if args.debug else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    try:
        config = GameConfig(
            human_players=args.humans,
            ai_players=args.ai,
            player_names=args.names,
            seed=args.seed,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    scheduler = ManualScheduler()
    session = new_game(config, scheduler, InMemoryRewardsLedger())
    GameOrchestrator(session, scheduler, show_board=args.show_board).run()


if __name__ == "__main__":
    main()
