#!/usr/bin/env python3
"""Example demonstrating client prediction against an authoritative server.

This script shows how to:
1. Create a match on the server side with a fixed seed
2. Predict moves on a speculative client
3. See that random moves are never predicted, only committed by the server
4. Sync the client to the server's redacted view of the state
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from turnstone.client import GameClient
from turnstone.engine.player_view import player_view
from turnstone.models.mode import ExecutionMode
from turnstone.server.session import MatchSessionManager


def main():
    print("=" * 70)
    print("Speculative client vs authoritative server")
    print("=" * 70)
    print()

    manager = MatchSessionManager()
    session = manager.create_session(game_name="dice-duel", seed=0)

    client = GameClient(session.game, player_id="0", mode=ExecutionMode.SPECULATIVE)
    client.sync(player_view(session.game, session.state, "0"))
    print(f"Client synced, random plugin data: {client.state.plugins['random'].data}")

    # Rolling needs randomness: the client keeps its old state
    state_id = client.state.state_id
    move = client.make_move("roll")
    print(f"Predicted last_roll: {client.state.G['last_roll']}")

    # The server commits the real roll
    errors = session.process_move("0", move.name, list(move.args), state_id)
    print(f"Server accepted: {not errors}")

    client.sync(player_view(session.game, session.state, "0"))
    print(f"Committed last_roll: {client.state.G['last_roll']}")
    print(f"Score of player 0: {client.state.G['scores']['0']}")

    # Passing needs no randomness: the client can predict it
    client.make_move("pass_turn")
    print(f"Predicted current player: {client.state.ctx.current_player}")
    print()


if __name__ == "__main__":
    main()
