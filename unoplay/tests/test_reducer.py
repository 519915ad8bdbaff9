"""
Tests for the reducer (state transitions).

Tests:
- Action application
- State mutation correctness
- Validation
- Error handling
"""

import random

import pytest

from ..engine_core.action import Action, ActionType, ViolationCode
from ..engine_core.action_generator import legal_actions
from ..engine_core.cards import CardKind, Color
from ..engine_core.reducer import Reducer, apply_action
from ..engine_core.state import GameStatus, Side
from .conftest import card, make_state


@pytest.fixture
def reducer():
    return Reducer(rng=random.Random(11))


@pytest.fixture
def state():
    """Player to move on a red 9, with a deck to draw from."""
    return make_state(
        player=[card("red", 5), card("blue", 3), card("red", "skip"), card("wild", "wild")],
        opponent=[card("green", 2), card("yellow", 8)],
        discard=[card("red", 9)],
        deck=[card("green", 6), card("yellow", 1), card("blue", 4)],
    )


class TestPlayAction:
    """Tests for playing a card."""

    def test_play_moves_card_to_discard(self, reducer, state):
        result = reducer.apply(state, Action.play(Side.PLAYER, "red_5_a"))

        assert result.success
        new_state = result.new_state
        assert new_state.active_card == card("red", 5)
        assert new_state.hand(Side.PLAYER).find("red_5_a") is None
        assert new_state.hand(Side.PLAYER).count == 3
        assert new_state.discard.count == 2

    def test_play_ends_turn(self, reducer, state):
        result = reducer.apply(state, Action.play(Side.PLAYER, "red_5_a"))

        assert result.turn_over
        assert not result.extra_turn
        # END_TURN is the game loop's job
        assert result.new_state.whose_turn == Side.PLAYER

    def test_play_records_history(self, reducer, state):
        result = reducer.apply(state, Action.play(Side.PLAYER, "red_5_a"))
        (entry,) = result.new_state.history.entries(Side.PLAYER)

        assert entry == card("red", 5)
        assert entry.played_on_round == 1

    def test_input_state_untouched(self, reducer, state):
        reducer.apply(state, Action.play(Side.PLAYER, "red_5_a"))

        assert state.hand(Side.PLAYER).count == 4
        assert state.active_card == card("red", 9)

    def test_not_your_turn(self, reducer, state):
        result = reducer.apply(state, Action.play(Side.OPPONENT, "green_2_a"))

        assert not result.success
        assert result.error_code == ViolationCode.NOT_YOUR_TURN
        assert result.new_state is None

    def test_card_not_in_hand(self, reducer, state):
        result = reducer.apply(state, Action.play(Side.PLAYER, "green_2_a"))

        assert not result.success
        assert result.error_code == ViolationCode.CARD_NOT_IN_HAND

    def test_card_not_legal(self, reducer, state):
        result = reducer.apply(state, Action.play(Side.PLAYER, "blue_3_a"))

        assert not result.success
        assert result.error_code == ViolationCode.CARD_NOT_LEGAL
        assert result.violation.code == ViolationCode.CARD_NOT_LEGAL
        assert "blue 3" in result.violation.reason

    def test_skip_grants_extra_turn(self, reducer, state):
        result = reducer.apply(state, Action.play(Side.PLAYER, "red_skip_a"))

        assert result.success
        assert result.extra_turn
        assert not result.turn_over
        assert result.new_state.whose_turn == Side.PLAYER

    def test_wild_awaits_color(self, reducer, state):
        result = reducer.apply(state, Action.play(Side.PLAYER, "wild_wild_a"))

        assert result.success
        assert result.new_state.status == GameStatus.AWAITING_COLOR_CHOICE
        assert not result.turn_over

    def test_no_play_while_awaiting_color(self, reducer, state):
        state = reducer.apply(state, Action.play(Side.PLAYER, "wild_wild_a")).new_state
        result = reducer.apply(state, Action.play(Side.PLAYER, "red_5_a"))

        assert result.error_code == ViolationCode.WRONG_STATE

    def test_wild_draw_four_on_opponent(self, reducer):
        state = make_state(
            player=[card("wild", "wild_draw_four"), card("red", 1)],
            opponent=[card("green", 2)],
            discard=[card("blue", 9)],
            deck=[card("yellow", n) for n in range(1, 7)],
        )
        result = reducer.apply(state, Action.play(Side.PLAYER, "wild_wild_draw_four_a"))

        assert result.new_state.hand(Side.OPPONENT).count == 5
        assert result.new_state.status == GameStatus.AWAITING_COLOR_CHOICE
        assert result.new_state.total_cards() == state.total_cards()

    def test_last_card_wins(self, reducer):
        state = make_state(
            player=[card("red", 5)],
            opponent=[card("green", 2)],
            discard=[card("red", 9)],
        )
        result = reducer.apply(state, Action.play(Side.PLAYER, "red_5_a"))

        assert result.new_state.status == GameStatus.GAME_OVER
        assert result.new_state.winner == Side.PLAYER
        assert result.new_state.is_over
        assert not result.turn_over

    def test_winning_wild_needs_no_color(self, reducer):
        state = make_state(
            player=[],
            opponent=[card("wild", "wild")],
            discard=[card("red", 9)],
            whose_turn=Side.OPPONENT,
        )
        result = reducer.apply(state, Action.play(Side.OPPONENT, "wild_wild_a"))

        assert result.new_state.status == GameStatus.GAME_OVER
        assert result.new_state.winner == Side.OPPONENT

    def test_no_actions_after_game_over(self, reducer):
        state = make_state(
            player=[card("red", 5), card("red", 6)],
            opponent=[],
            discard=[card("red", 9)],
            status=GameStatus.GAME_OVER,
        )
        for action in (Action.play(Side.PLAYER, "red_5_a"), Action.draw(Side.PLAYER), Action.end_turn()):
            result = reducer.apply(state, action)
            assert result.error_code == ViolationCode.WRONG_STATE


class TestSelectColorAction:
    """Tests for naming a color after a wild."""

    @pytest.fixture
    def awaiting(self, reducer, state):
        return reducer.apply(state, Action.play(Side.PLAYER, "wild_wild_a")).new_state

    def test_color_rewrites_top(self, reducer, awaiting):
        result = reducer.apply(awaiting, Action.select_color(Side.PLAYER, Color.GREEN))

        assert result.success
        assert result.turn_over
        top = result.new_state.active_card
        assert top.kind == CardKind.WILD
        assert top.color == Color.GREEN
        assert result.new_state.status == GameStatus.PLAYING

    def test_wild_is_not_a_color(self, reducer, awaiting):
        result = reducer.apply(awaiting, Action.select_color(Side.PLAYER, Color.WILD))

        assert result.error_code == ViolationCode.INVALID_COLOR

    def test_wrong_side(self, reducer, awaiting):
        result = reducer.apply(awaiting, Action.select_color(Side.OPPONENT, Color.RED))

        assert result.error_code == ViolationCode.NOT_YOUR_TURN

    def test_nothing_pending(self, reducer, state):
        result = reducer.apply(state, Action.select_color(Side.PLAYER, Color.RED))

        assert result.error_code == ViolationCode.WRONG_STATE


class TestDrawAction:
    """Tests for drawing."""

    def test_player_draw_playable(self, reducer, state):
        """The lucky draw digs below the top for a playable card."""
        state = make_state(
            player=[card("blue", 3)],
            opponent=[card("green", 2)],
            discard=[card("red", 9)],
            deck=[card("red", 2), card("yellow", 1), card("blue", 4)],
        )
        result = reducer.apply(state, Action.draw(Side.PLAYER))

        assert result.success
        assert result.drawn_cards == [card("red", 2)]
        assert not result.turn_over
        assert result.new_state.hand(Side.PLAYER).count == 2

    def test_player_draw_unplayable(self, reducer, state):
        result = reducer.apply(state, Action.draw(Side.PLAYER))

        assert result.success
        assert result.drawn_cards == [card("blue", 4)]
        assert result.turn_over

    def test_opponent_draws_top(self, reducer):
        state = make_state(
            player=[card("blue", 3)],
            opponent=[card("green", 2)],
            discard=[card("red", 9)],
            deck=[card("red", 2), card("yellow", 1)],
            whose_turn=Side.OPPONENT,
        )
        result = reducer.apply(state, Action.draw(Side.OPPONENT))

        assert result.drawn_cards == [card("yellow", 1)]
        assert result.turn_over

    def test_draw_with_nothing_left(self, reducer):
        state = make_state(player=[card("blue", 3)], opponent=[card("green", 2)], discard=[card("red", 9)])
        result = reducer.apply(state, Action.draw(Side.PLAYER))

        assert result.success
        assert result.drawn_cards == []
        assert result.turn_over

    def test_draw_out_of_turn(self, reducer, state):
        result = reducer.apply(state, Action.draw(Side.OPPONENT))

        assert result.error_code == ViolationCode.NOT_YOUR_TURN


class TestEndTurnAction:
    """Tests for handing control over."""

    def test_to_opponent_keeps_round(self, reducer, state):
        result = reducer.apply(state, Action.end_turn())

        assert result.new_state.whose_turn == Side.OPPONENT
        assert result.new_state.round_number == 1

    def test_back_to_player_starts_round(self, reducer, state):
        state = reducer.apply(state, Action.end_turn()).new_state
        state = reducer.apply(state, Action.end_turn()).new_state

        assert state.whose_turn == Side.PLAYER
        assert state.round_number == 2
        assert state.message == "Your turn"

    def test_not_while_awaiting_color(self, reducer, state):
        state = reducer.apply(state, Action.play(Side.PLAYER, "wild_wild_a")).new_state
        result = reducer.apply(state, Action.end_turn())

        assert result.error_code == ViolationCode.WRONG_STATE


class TestLegalActions:
    """Tests for the action generator."""

    def test_player_may_always_draw(self, state):
        actions = legal_actions(state, Side.PLAYER)
        types = [a.action_type for a in actions]

        assert types.count(ActionType.DRAW) == 1
        assert {a.payload.card_id for a in actions if a.action_type == ActionType.PLAY} == {
            "red_5_a", "red_skip_a", "wild_wild_a",
        }

    def test_opponent_draws_only_when_stuck(self):
        state = make_state(
            opponent=[card("red", 1), card("green", 2)],
            discard=[card("red", 9)],
            whose_turn=Side.OPPONENT,
        )
        actions = legal_actions(state, Side.OPPONENT)
        assert [a.action_type for a in actions] == [ActionType.PLAY]

        stuck = make_state(opponent=[card("green", 2)], discard=[card("red", 9)], whose_turn=Side.OPPONENT)
        assert [a.action_type for a in legal_actions(stuck, Side.OPPONENT)] == [ActionType.DRAW]

    def test_nothing_out_of_turn(self, state):
        assert legal_actions(state, Side.OPPONENT) == []

    def test_reducer_accepts_every_generated_action(self, reducer, state):
        for action in legal_actions(state, Side.PLAYER):
            assert reducer.apply(state, action).success, action.describe()


class TestConservation:
    """108 cards across deck, discard and hands, always."""

    def test_random_playthrough(self, fresh_state):
        rng = random.Random(5)
        state = fresh_state

        for _ in range(400):
            if state.status == GameStatus.GAME_OVER:
                break
            side = state.whose_turn
            actions = legal_actions(state, side)
            result = apply_action(state, rng.choice(actions), rng)
            assert result.success
            state = result.new_state
            if result.turn_over:
                state = apply_action(state, Action.end_turn(), rng).new_state
            assert state.total_cards() == 108


class TestModuleSource:

    def test_compiles_without_warnings(self):
        """The state diagram in the module docstring holds no escape sequences."""
        import inspect
        import warnings
        from ..engine_core import reducer as reducer_module

        source = inspect.getsource(reducer_module)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            compile(source, reducer_module.__file__, "exec")
