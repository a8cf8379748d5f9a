"""Command-line launcher: run battles locally or serve the HTTP API."""

import argparse
import os
import sys

from dotenv import load_dotenv

from infra.logger import configure_logging, get_logger


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    log = get_logger(__name__)
    url = f"http://{args.host}:{args.port}"
    log.info("Starting skirmish API at %s", url)
    uvicorn.run(
        "api.app:app",  # Import the module api.app and serve the FastAPI app it defines
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )
    return 0


def _simulate(args: argparse.Namespace) -> int:
    from arena import CombatEngine, Scenario, render_board

    scenario = Scenario.from_map_file(
        args.map,
        elf_attack_boost=args.boost,
        max_rounds=args.max_rounds,
    )
    engine = CombatEngine(verbose=args.trace, strict=args.strict)
    engine.reset(scenario=scenario)
    outcome = engine.run()

    if args.trace:
        print(render_board(engine.world))
    winner = outcome.winner.name if outcome.winner else "DEADLOCK"
    print(f"Rounds:     {outcome.completed_rounds}")
    print(f"Hit points: {outcome.remaining_hit_points}")
    print(f"Score:      {outcome.score}")
    print(f"Winner:     {winner} ({outcome.verdict.value})")
    return 0


def _boost(args: argparse.Namespace) -> int:
    from arena import BoostSearch, Scenario

    scenario = Scenario.from_map_file(args.map, max_rounds=args.max_rounds)
    result = BoostSearch().find_minimal_boost(scenario, start=args.start, max_boost=args.max_boost)
    if result is None:
        print("No winning boost found")
        return 1

    outcome = result.outcome
    print(f"Boost:        {result.boost} (attack power {result.attack_power})")
    print(f"Rounds:       {outcome.completed_rounds}")
    print(f"Hit points:   {outcome.remaining_hit_points}")
    print(f"Score:        {outcome.score}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grid Skirmish battle simulator.")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("ARENA_LOG_LEVEL", "INFO"),
        help="Logging level (default: $ARENA_LOG_LEVEL or INFO)",
    )
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=os.environ.get("ARENA_HOST", "127.0.0.1"), help="Host to bind")
    serve.add_argument("--port", type=int, default=int(os.environ.get("ARENA_PORT", "8000")), help="Port to bind")
    serve.add_argument("--reload", dest="reload", action="store_true", default=False, help="Enable auto-reload")
    serve.add_argument("--no-reload", dest="reload", action="store_false", help="Disable auto-reload")
    serve.set_defaults(func=_serve)

    simulate = sub.add_parser("simulate", help="Run one battle from a map file")
    simulate.add_argument("map", help="Path to the text map")
    simulate.add_argument("--boost", type=int, default=0, help="Elf attack boost (default: 0)")
    simulate.add_argument("--max-rounds", type=int, default=None, help="Round cap (default: none)")
    simulate.add_argument("--trace", action="store_true", help="Log the board every round")
    simulate.add_argument("--strict", action="store_true", help="Check invariants after every turn")
    simulate.set_defaults(func=_simulate)

    boost = sub.add_parser("boost", help="Find the smallest loss-free Elf attack boost")
    boost.add_argument("map", help="Path to the text map")
    boost.add_argument("--start", type=int, default=1, help="First boost to try (default: 1)")
    boost.add_argument("--max-boost", type=int, default=None, help="Last boost to try")
    boost.add_argument("--max-rounds", type=int, default=None, help="Round cap per attempt")
    boost.set_defaults(func=_boost)

    return parser


def main(argv=None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    # Configure logging once at startup (console + file).
    configure_logging(level=args.log_level, json=args.json_logs)

    from arena import MapFormatError

    try:
        return args.func(args)
    except (MapFormatError, OSError) as exc:
        get_logger(__name__).error("Cannot load map: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
