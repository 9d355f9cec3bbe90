#!/usr/bin/env python3
"""Turnstone - Main entry point.

Plays a local, self-authoritative game of Dice Duel with scripted players:
each turn the current player rolls, draws a card and passes. Useful to check
that a seed reproduces the same match and to produce save files.
"""

import argparse
import logging
import sys

from turnstone.client import GameClient
from turnstone.engine.player_view import player_view
from turnstone.games import create_dice_duel
from turnstone.models.definition import GameDefinition
from turnstone.models.game_state import GameState
from turnstone.models.mode import ExecutionMode
from turnstone.utils.serialization import load_state, save_state

# Safety net for scripted play
MAX_TURNS = 200


class GameOrchestrator:
    """Runs the scripted turn loop on a singleplayer client."""

    def __init__(self, game: GameDefinition, state: GameState | None = None):
        """Initialize game orchestrator.

        Args:
            game: Game definition
            state: Snapshot to resume from, None to start a new game
        """
        self.game = game
        self.client = GameClient(game, mode=ExecutionMode.AUTHORITATIVE, state=state)

    def run(self, max_turns: int = MAX_TURNS) -> GameState:
        """Main game loop."""
        while self.client.state.ctx.gameover is None and self.client.state.ctx.turn <= max_turns:
            self._play_turn()

        self._show_result()
        return self.client.state

    def _play_turn(self):
        """Roll, draw a card if any are left, then pass."""
        ctx = self.client.state.ctx
        self.client.make_move("roll")
        roll = self.client.state.G["last_roll"]
        print(f"Turn {ctx.turn:>3}: player {ctx.current_player} rolled {roll}")

        if self.client.state.ctx.gameover is None and self.client.state.G["deck"]:
            self.client.make_move("draw_card")
            card = self.client.state.G["hands"][ctx.current_player][-1]
            print(f"          player {ctx.current_player} drew card {card}")

        if self.client.state.ctx.gameover is None:
            self.client.make_move("pass_turn")

    def _show_result(self):
        view = player_view(self.game, self.client.state)
        print("\n" + "=" * 60)
        print(f"Scores: {view.G['scores']}")
        if view.ctx.gameover is not None:
            print(f"Game over: {view.ctx.gameover}")
        else:
            print("Turn limit reached without a winner")
        print("=" * 60)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Turnstone - Dice Duel with reproducible randomness",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                      # New game with an unpredictable seed
  %(prog)s --seed 42                            # Specific seed (same seed, same game)
  %(prog)s --seed "hi there" --players 3        # String seed, three players
  %(prog)s --load savegame.json                 # Resume a saved game
  %(prog)s --save mygame.json                   # Save after completion
        """,
    )

    parser.add_argument(
        "--seed",
        type=str,
        default=None,
        help="Seed for the game (integers are used as numbers; default: random)",
    )
    parser.add_argument(
        "--players",
        type=int,
        default=2,
        help="Number of players (default: 2)",
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=MAX_TURNS,
        help=f"Stop after this many turns (default: {MAX_TURNS})",
    )
    parser.add_argument("--load", type=str, metavar="FILE", help="Load game from JSON file")
    parser.add_argument(
        "--save",
        type=str,
        metavar="FILE",
        help="Save game to JSON file after completion",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (draws, commits, discarded moves)",
    )

    args = parser.parse_args()

    log_level = logging.DEBUG if args.debug else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    seed = args.seed
    if seed is not None and seed.lstrip("-").isdigit():
        seed = int(seed)

    try:
        game = create_dice_duel(seed=seed, num_players=args.players)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    state = None
    if args.load:
        print(f"Loading game from {args.load}...")
        try:
            state = load_state(args.load)
            game = create_dice_duel(seed=seed, num_players=state.ctx.num_players)
            print(f"Game loaded successfully (Turn {state.ctx.turn})")
        except FileNotFoundError:
            print(f"Error: File {args.load} not found.")
            sys.exit(1)
        except Exception as e:
            print(f"Error loading game: {e}")
            sys.exit(1)

    try:
        orchestrator = GameOrchestrator(game, state)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    try:
        final_state = orchestrator.run(max_turns=args.max_turns)
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user. Exiting...")
        sys.exit(0)

    if args.save:
        print(f"\nSaving game to {args.save}...")
        try:
            save_state(final_state, args.save)
            print("Game saved successfully!")
        except Exception as e:
            print(f"Error saving game: {e}")


if __name__ == "__main__":
    main()
