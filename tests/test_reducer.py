"""Tests for game initialization and the move reducer."""

import pytest

from turnstone.engine import GameReducer, initialize_game, player_view
from turnstone.models import INVALID_MOVE, ExecutionMode, GameDefinition, make_move


def roll_die(context):
    return {**context.G, "die": context.random.D6()}


def increment(context):
    context.G["count"] = context.G.get("count", 0) + 1
    return context.G


def end_turn(context):
    context.events.end_turn()
    return context.G


def create_dice_game(seed=0, **kwargs):
    """Create a minimal game whose only random move rolls one die."""
    return GameDefinition(
        name="test-dice",
        seed=seed,
        moves={"roll_die": roll_die, "increment": increment, "end_turn": end_turn},
        **kwargs,
    )


class TestInitializeGame:
    """Test initialize_game."""

    def test_initial_state(self):
        """Test the shape of a fresh snapshot."""
        state = initialize_game(create_dice_game())

        assert state.G == {}
        assert state.state_id == 0
        assert state.ctx.turn == 1
        assert state.ctx.current_player == "0"
        assert state.ctx.play_order == ("0", "1")
        assert state.plugins["random"].data.seed == 0
        assert state.plugins["random"].data.prngstate is None

    def test_num_players_override(self):
        """Test that num_players overrides the definition."""
        state = initialize_game(create_dice_game(), num_players=4)
        assert state.ctx.play_order == ("0", "1", "2", "3")

    def test_unspecified_seed_fixed_at_creation(self):
        """Test that an unspecified seed is resolved once and recorded."""
        state = initialize_game(create_dice_game(seed=None))
        seed = state.plugins["random"].data.seed
        assert isinstance(seed, int)

        reducer = GameReducer(create_dice_game(seed=None))
        first = reducer(state, make_move("roll_die"))
        second = reducer(state, make_move("roll_die"))
        assert first.G["die"] == second.G["die"]
        assert first.plugins["random"].data.seed == seed

    def test_random_sentinel(self):
        """Test the 'random' seed sentinel."""
        state = initialize_game(create_dice_game(seed="random"))
        assert isinstance(state.plugins["random"].data.seed, int)

    def test_invalid_seed(self):
        """Test that an invalid seed fails game creation."""
        with pytest.raises(ValueError):
            initialize_game(create_dice_game(seed=True))

    def test_setup_can_use_random(self):
        """Test that setup receives the Random API."""
        game = create_dice_game(setup=lambda context: {"deck": context.random.Shuffle([1, 2, 3])})
        state = initialize_game(game)

        assert sorted(state.G["deck"]) == [1, 2, 3]
        assert state.plugins["random"].data.prngstate is not None

    def test_turn_begin_has_plugin_apis(self):
        """Test that on_turn_begin already has random and events."""
        seen = {}

        def on_turn_begin(context):
            seen["random"] = context.random
            seen["events"] = context.events

        initialize_game(create_dice_game(on_turn_begin=on_turn_begin))

        assert seen["random"] is not None
        assert seen["events"] is not None

    def test_turn_begin_draws_are_committed(self):
        """Test that randomness used in on_turn_begin is persisted."""

        def on_turn_begin(context):
            context.G["initiative"] = context.random.D20()

        state = initialize_game(create_dice_game(on_turn_begin=on_turn_begin))

        assert 1 <= state.G["initiative"] <= 20
        assert state.plugins["random"].data.prngstate is not None


class TestRandomGating:
    """Test that randomness only takes effect on the authoritative executor."""

    def test_authoritative_commits_roll(self):
        """Test that the authoritative reducer commits the die."""
        game = create_dice_game()
        reducer = GameReducer(game)
        state = initialize_game(game)
        assert "die" not in state.G

        state = reducer(state, make_move("roll_die"))

        assert state.G == {"die": 4}
        assert state.state_id == 1
        assert state.plugins["random"].data.prngstate is not None

    def test_speculative_discards_roll(self):
        """Test that a speculative reducer keeps the previous state."""
        game = create_dice_game()
        reducer = GameReducer(game, mode=ExecutionMode.SPECULATIVE)
        state = initialize_game(game)

        new_state = reducer(state, make_move("roll_die"))

        assert new_state is state
        assert "die" not in new_state.G

    def test_speculative_with_redacted_state(self):
        """Test that a redacted snapshot still gates random moves."""
        game = create_dice_game()
        reducer = GameReducer(game, mode=ExecutionMode.SPECULATIVE)
        state = initialize_game(game)
        state = player_view(game, state, "0")
        assert state.plugins["random"].data is None

        new_state = reducer(state, make_move("roll_die"))

        assert "die" not in new_state.G
        assert new_state.plugins["random"].data is None

    def test_authoritative_refuses_redacted_state(self):
        """Test that placeholder rolls are never committed as final results."""
        game = create_dice_game()
        reducer = GameReducer(game)
        view = player_view(game, initialize_game(game), "0")

        with pytest.raises(RuntimeError, match="redacted"):
            reducer(view, make_move("roll_die"))

    def test_authoritative_redacted_state_without_random(self):
        """Test that moves without randomness still run on a redacted snapshot."""
        game = create_dice_game()
        view = player_view(game, initialize_game(game), "0")

        new_state = GameReducer(game)(view, make_move("increment"))

        assert new_state.G == {"count": 1}
        assert new_state.plugins["random"].data is None

    def test_speculative_applies_non_random_moves(self):
        """Test that moves without randomness are predicted."""
        game = create_dice_game()
        reducer = GameReducer(game, mode=ExecutionMode.SPECULATIVE)
        state = initialize_game(game)

        new_state = reducer(state, make_move("increment"))

        assert new_state.G == {"count": 1}
        assert new_state.state_id == 1
        assert new_state.plugins["random"].data == state.plugins["random"].data

    def test_speculative_gates_random_turn_hooks(self):
        """Test that randomness in on_turn_begin also blocks speculation."""

        def on_turn_begin(context):
            context.G["initiative"] = context.random.D20()

        game = create_dice_game(on_turn_begin=on_turn_begin)
        state = initialize_game(game)
        speculative = GameReducer(game, mode=ExecutionMode.SPECULATIVE)

        assert speculative(state, make_move("end_turn")) is state

        committed = GameReducer(game)(state, make_move("end_turn"))
        assert committed.ctx.current_player == "1"


class TestReducer:
    """Test move processing."""

    def test_input_state_not_mutated(self):
        """Test that handlers mutating G leave the input snapshot intact."""
        game = create_dice_game()
        state = initialize_game(game)
        state = GameReducer(game)(state, make_move("increment"))

        GameReducer(game)(state, make_move("increment"))

        assert state.G == {"count": 1}

    def test_successive_rolls_reproducible(self):
        """Test that two executors replaying the same moves agree."""
        game = create_dice_game(seed="replay")
        moves = [make_move("roll_die") for _ in range(10)]

        def play():
            state = initialize_game(game)
            reducer = GameReducer(game)
            dice = []
            for move in moves:
                state = reducer(state, move)
                dice.append(state.G["die"])
            return dice, state

        first_dice, first_state = play()
        second_dice, second_state = play()

        assert first_dice == second_dice
        assert first_state.plugins == second_state.plugins

    def test_unknown_move_rejected(self):
        """Test that unknown moves leave the state unchanged."""
        game = create_dice_game()
        state = initialize_game(game)
        assert GameReducer(game)(state, make_move("fly")) is state

    def test_out_of_turn_move_rejected(self):
        """Test that only the current player may move."""
        game = create_dice_game()
        state = initialize_game(game)
        assert GameReducer(game)(state, make_move("roll_die", player_id="1")) is state

        accepted = GameReducer(game)(state, make_move("roll_die", player_id="0"))
        assert accepted.G["die"] == 4

    def test_invalid_move_rejected(self):
        """Test that INVALID_MOVE keeps the state, draws included."""

        def invalid(context):
            context.random.D6()
            return INVALID_MOVE

        game = create_dice_game()
        game.moves["invalid"] = invalid
        state = initialize_game(game)

        assert GameReducer(game)(state, make_move("invalid")) is state

    def test_moves_receive_args(self):
        """Test that move arguments reach the handler."""

        def roll_many(context, count):
            return {"dice": context.random.D6(count)}

        game = create_dice_game()
        game.moves["roll_many"] = roll_many
        state = GameReducer(game)(initialize_game(game), make_move("roll_many", 3))

        assert len(state.G["dice"]) == 3

    def test_handler_returning_none_keeps_mutations(self):
        """Test that handlers may mutate G in place and return nothing."""

        def mutate(context):
            context.G["touched"] = True

        game = create_dice_game()
        game.moves["mutate"] = mutate
        state = GameReducer(game)(initialize_game(game), make_move("mutate"))

        assert state.G == {"touched": True}


class TestEvents:
    """Test events raised by handlers."""

    def test_end_turn(self):
        """Test that end_turn hands over to the next player."""
        calls = []
        game = create_dice_game(
            on_turn_begin=lambda context: calls.append(("begin", context.ctx.current_player)),
            on_turn_end=lambda context: calls.append(("end", context.ctx.current_player)),
        )
        state = initialize_game(game)
        state = GameReducer(game)(state, make_move("end_turn"))

        assert state.ctx.turn == 2
        assert state.ctx.current_player == "1"
        assert calls == [("begin", "0"), ("end", "0"), ("begin", "1")]

    def test_turn_order_wraps(self):
        """Test that turns cycle through all players."""
        game = create_dice_game()
        reducer = GameReducer(game)
        state = initialize_game(game)
        for _ in range(2):
            state = reducer(state, make_move("end_turn"))

        assert state.ctx.current_player == "0"
        assert state.ctx.turn == 3

    def test_end_game(self):
        """Test that end_game finishes the game and blocks further moves."""

        def win(context):
            context.events.end_game({"winner": context.player_id})
            return context.G

        game = create_dice_game()
        game.moves["win"] = win
        reducer = GameReducer(game)
        state = reducer(initialize_game(game), make_move("win"))

        assert state.ctx.gameover == {"winner": "0"}
        assert reducer(state, make_move("increment")) is state

    def test_runaway_turn_hooks_stop(self):
        """Test that hooks ending every turn do not loop forever."""
        game = create_dice_game(on_turn_begin=lambda context: context.events.end_turn())
        state = initialize_game(game)
        assert state.ctx.turn > 1
