"""
Timecards CLI - Command-line interface for the engine.

Usage:
    timecards play [options]       Play a hot-seat game in the terminal
    timecards catalog              Show event counts
    timecards serve                Run the REST API with uvicorn
"""

import argparse
import logging
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Timecards - Historical timeline card game",
        prog="timecards",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable info logging")
    parser.add_argument("--events-dir", help="Directory with manifest.json and event files")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a hot-seat game")
    play_parser.add_argument("--players", type=int, default=1, help="Number of players (1-6)")
    play_parser.add_argument("--cards", type=int, default=5, help="Cards per player (3-10)")
    play_parser.add_argument("--timeline", type=int, default=3, help="Starting timeline events (1-10)")
    play_parser.add_argument("--name", action="append", default=[], help="Player name (repeatable)")
    play_parser.add_argument("--difficulty", action="append", default=[], help="easy, medium or hard")
    play_parser.add_argument("--category", action="append", default=[], help="Event category")
    play_parser.add_argument("--era", action="append", default=[], help="Era id, e.g. medieval")
    play_parser.add_argument("--seed", type=int, help="Shuffle seed, to replay a deal")

    # Catalog command
    subparsers.add_parser("catalog", help="Show event counts by category, difficulty and era")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "catalog":
        cmd_catalog(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def _load_catalog(args):
    from .catalog import CatalogError, EventCatalog, load_default_catalog

    try:
        if args.events_dir:
            return EventCatalog.from_directory(args.events_dir)
        return load_default_catalog()
    except CatalogError as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_catalog(args):
    """Print event counts."""
    catalog = _load_catalog(args)
    summary = catalog.summary()

    print(f"Events: {summary.total}")
    for title, counts in (
        ("Categories", summary.by_category),
        ("Difficulties", summary.by_difficulty),
        ("Eras", summary.by_era),
    ):
        print(f"\n{title}:")
        for key, count in counts.items():
            print(f"  {key:<16} {count}")


def cmd_serve(args):
    """Run the API server."""
    import uvicorn

    uvicorn.run("timecards.api.app:app", host=args.host, port=args.port)


def cmd_play(args):
    """Play a game at the terminal, passing the keyboard between players."""
    from .engine_core import Category, ConfigError, Difficulty, GameConfig, GamePhase
    from .formatting import category_display_name, format_year, rank_winners
    from .interaction import InteractionMode, TapController
    from .session import EmptyPoolError, SessionManager

    try:
        config = GameConfig.create(
            player_count=args.players,
            cards_per_player=args.cards,
            starting_timeline_events=args.timeline,
            player_names=args.name,
            selected_difficulties=[Difficulty(d) for d in args.difficulty],
            selected_categories=[Category(c) for c in args.category],
            selected_eras=args.era,
            strict=True,
        )
    except (ConfigError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    manager = SessionManager(_load_catalog(args))
    session = manager.create_session(mode=InteractionMode.TAP)
    try:
        state = session.start(config, seed=args.seed)
    except EmptyPoolError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Seed: {state.random_seed}")
    print("Commands: <card> <slot> to place, r <from> <to> to reorder, q to quit")

    # Typed "card slot" input maps onto the tap gesture
    controller = TapController()

    while session.game_state.phase == GamePhase.PLAYING:
        state = session.game_state
        player = state.current_player

        print(f"\n=== Round {state.round_number}, turn {state.turn_number}: {player.name} ===")
        print("Timeline:")
        for i, event in enumerate(state.timeline):
            print(f"  [{i}]")
            print(f"      {format_year(event.year):>18}  {event.display_name}")
        print(f"  [{len(state.timeline)}]")
        print("Hand:")
        for i, event in enumerate(player.hand):
            print(f"  {i + 1}. {event.display_name} ({category_display_name(event.category)})")

        try:
            line = input("> ").strip()
        except EOFError:
            print()
            return
        if line in ("q", "quit"):
            return

        parts = line.split()
        try:
            numbers = [int(p) for p in parts if p != "r"]
        except ValueError:
            print("Enter numbers, e.g. '1 2'")
            continue
        if len(numbers) != 2:
            print("Enter a card number and a slot")
            continue

        if parts[0] == "r":
            result = session.reorder(numbers[0] - 1, numbers[1] - 1)
            if not result.success:
                print(f"Cannot reorder: {result.error}")
            continue

        card_no, slot = numbers
        if not 1 <= card_no <= player.hand_size:
            print("No such card")
            continue

        controller.tap_hand_card(player.hand[card_no - 1])
        intent = controller.tap_target(slot, state.timeline)
        if intent is None:
            print("No such slot")
            controller.clear()
            continue

        result = session.handle(intent)
        if not result.success:
            print(f"Rejected: {result.error}")
            continue

        placement = result.placement
        verdict = "Correct!" if placement.success else "Wrong."
        print(f"{verdict} {placement.event.display_name}: {format_year(placement.event.year)}")
        for change in result.state_changes[1:]:
            print(f"  {change}")

    print("\nGame over")
    for place, winner in enumerate(rank_winners(session.game_state.winners), start=1):
        print(f"  {place}. {winner.name} (turn {winner.win_turn})")


if __name__ == "__main__":
    main()
