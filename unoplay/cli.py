"""
Unoplay CLI - Command-line interface for the engine.

Usage:
    unoplay play [--seed N] [--personality NAME]   Play against the opponent
    unoplay rules                                  Print the rules summary
    unoplay simulate [--games N]                   Scripted player vs opponent
    unoplay serve [--host H] [--port P]            Run the HTTP API
"""

import argparse
import logging
import random
import sys
import time
from collections import Counter


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Unoplay - Card game against a scripted opponent",
        prog="unoplay",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    play_parser.add_argument("--personality", default=None, help="Opponent personality")
    play_parser.add_argument("--fast", action="store_true", help="Skip the pacing delays")

    # Rules command
    subparsers.add_parser("rules", help="Print the rules summary")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Run scripted games")
    simulate_parser.add_argument("--games", type=int, default=100, help="Number of games")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    simulate_parser.add_argument("--personality", default=None, help="Opponent personality")
    simulate_parser.add_argument("--max-rounds", type=int, default=500, help="Rounds before a game is abandoned")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "rules":
        cmd_rules(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def _build_config(args, **overrides):
    from dataclasses import replace
    from .config import EngineConfig

    config = EngineConfig.from_env()
    if getattr(args, "seed", None) is not None:
        overrides["seed"] = args.seed
    if getattr(args, "personality", None):
        overrides["personality"] = args.personality
    return replace(config, **overrides)


def cmd_rules(args):
    """Print the rules summary."""
    from .engine_core.rules import RULES_SUMMARY
    from .bots import PERSONALITIES

    print("Rules:")
    for line in RULES_SUMMARY:
        print(f"  - {line}")

    print("\nOpponents:")
    for key, personality in PERSONALITIES.items():
        print(f"  {key:<10} {personality.description}")


def render(snapshot):
    """Print a snapshot the way a player sees it."""
    top = snapshot.discard_top.display_text if snapshot.discard_top else "-"
    top_color = snapshot.discard_top.color if snapshot.discard_top else ""
    print()
    print(f"Round {snapshot.round_number} | deck {snapshot.deck_size} | opponent holds {snapshot.opponent_hand_size}")
    print(f"Active card: {top} {top_color}")
    if snapshot.opponent_history:
        print("Opponent recently: " + ", ".join(c.display_text + " " + c.color for c in snapshot.opponent_history))
    print("Your hand:")
    for index, card in enumerate(snapshot.player_hand, 1):
        marker = "*" if card.is_legal_now else " "
        print(f"  {marker}{index:>2}. {card.display_text} {card.color}")
    print(snapshot.message)


def _wait_for_continuations(loop, fast: bool):
    """Let pending continuations run, sleeping until each is due."""
    while loop.scheduler.is_busy:
        if fast:
            loop.run_pending()
            break
        delay = loop.scheduler.due_at - time.monotonic()
        if delay > 0:
            time.sleep(delay)
        loop.run_due()

    for action in loop.last_opponent_actions:
        print(f"  > {action.describe()}")
    loop.last_opponent_actions = []


def cmd_play(args):
    """Play an interactive game."""
    from .engine_core.cards import CONCRETE_COLORS
    from .engine_core.state import GameStatus, Side
    from .session import GameLoop

    try:
        config = _build_config(args)
        loop = GameLoop(config=config)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    snapshot = loop.new_game()
    print(f"Playing against the {config.personality} opponent. Cards marked * can be played.")
    print("Enter a card number, 'd' to draw, 'n' for a new game or 'q' to quit.")

    while True:
        render(snapshot)

        if snapshot.status == GameStatus.GAME_OVER:
            answer = input("Play again? [y/N] ").strip().lower()
            if answer != "y":
                return
            snapshot = loop.new_game()
            continue

        if snapshot.status == GameStatus.AWAITING_COLOR_CHOICE:
            names = ", ".join(color.value for color in CONCRETE_COLORS)
            result = loop.select_color(input(f"Choose a color ({names}): ").strip().lower())
        else:
            command = input("> ").strip().lower()
            if command == "q":
                return
            if command == "n":
                snapshot = loop.new_game()
                continue
            if command == "d":
                result = loop.draw()
            elif command.isdigit() and 1 <= int(command) <= len(snapshot.player_hand):
                result = loop.play(snapshot.player_hand[int(command) - 1].card_id)
            else:
                print("Unknown command")
                continue

        if result.violation:
            print(f"Not allowed: {result.violation.reason}")

        if loop.snapshot().whose_turn == Side.OPPONENT or loop.scheduler.is_busy:
            _wait_for_continuations(loop, args.fast)
        snapshot = loop.snapshot()


def play_scripted_game(loop, player_bot, max_rounds: int):
    """
    Play one game with player_bot making the player's moves.

    Returns the winning Side, or None if the game hit max_rounds.
    """
    from .engine_core.action import ActionType
    from .engine_core.action_generator import legal_actions
    from .engine_core.state import GameStatus, Side

    loop.new_game()
    while not loop.state.is_over:
        if loop.state.round_number > max_rounds:
            return None

        state = loop.state
        if state.whose_turn == Side.PLAYER and state.status == GameStatus.AWAITING_COLOR_CHOICE:
            loop.select_color(player_bot.select_color(state))
        elif state.whose_turn == Side.PLAYER:
            decision = player_bot.select_action(state, legal_actions(state, Side.PLAYER))
            if decision.action.action_type == ActionType.PLAY:
                loop.play(decision.action.payload.card_id)
            else:
                result = loop.draw()
                if result.success and not loop.scheduler.is_busy:
                    # The drawn card is playable: play it
                    loop.play(loop.state.hand(Side.PLAYER).cards[-1].card_id)

        loop.run_pending()

    return loop.state.winner


def cmd_simulate(args):
    """Run scripted games and print the outcome counts."""
    from .bots import UnoBot, get_personality
    from .bots.personality import RUTHLESS
    from .engine_core.state import Side
    from .session import GameLoop

    try:
        config = _build_config(args, draw_settle_delay=0.0, opponent_think_delay=0.0)
        get_personality(config.personality)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    rng = random.Random(config.seed)
    loop = GameLoop(config=config, rng=rng)
    player_bot = UnoBot(personality=RUTHLESS, rng=rng, side=Side.PLAYER)

    outcomes = Counter()
    for _ in range(args.games):
        winner = play_scripted_game(loop, player_bot, args.max_rounds)
        outcomes[winner.value if winner else "unfinished"] += 1

    print(f"Games: {args.games} (opponent: {config.personality})")
    for outcome in ("player", "opponent", "unfinished"):
        print(f"  {outcome:<10} {outcomes[outcome]}")


def cmd_serve(args):
    """Run the HTTP API under uvicorn."""
    import uvicorn
    from .api.app import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
