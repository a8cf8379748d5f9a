"""
Simple battle scenarios - small maps that resolve in a few dozen rounds.

Runs the reference skirmish with a round-by-round trace, then searches for
the smallest Elf attack boost that wins without a single Elf casualty.
"""

from arena import BoostSearch, Scenario, create_sample_scenario
from game_runner import BattleRunner
from infra.logger import configure_logging


def create_open_field() -> Scenario:
    """
    Create a 3v3 battle on a mostly open field.

    Both sides start far apart, so the first rounds are pure movement.
    """
    return Scenario(
        "#########\n"
        "#E.....G#\n"
        "#.......#\n"
        "#E..#..G#\n"
        "#.......#\n"
        "#E.....G#\n"
        "#########\n",
        name="open-field",
    )


def main():
    """Run simple battle scenarios."""
    configure_logging(level="WARNING", to_file=False)

    print("=" * 80)
    print("REFERENCE SKIRMISH - 2 Elves vs 4 Goblins")
    print("=" * 80)

    runner = BattleRunner(create_sample_scenario())
    for frame in runner.run(include_history=True):
        print(f"\nAfter {frame.world.completed_rounds} rounds:")
        print(frame.to_text())
    print("\nFinal board:")
    print(runner.get_final_frame().to_text())

    outcome = runner.outcome
    print(f"\nOutcome: {outcome}")

    print("\n" + "=" * 80)
    print("BOOST SEARCH")
    print("=" * 80)

    search = BoostSearch()
    for scenario in (create_sample_scenario(), create_open_field()):
        result = search.find_minimal_boost(scenario)
        if result is None:
            print(f"{scenario}: no loss-free victory found")
            continue
        print(f"{scenario}: boost {result.boost} (attack {result.attack_power}) "
              f"after {result.attempts} attempts -> {result.outcome}")

    print("\n" + "=" * 80)


if __name__ == "__main__":
    main()
