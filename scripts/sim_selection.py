#!/usr/bin/env python3
"""
Weighted Selection Simulation for housecomp

Draws competitions from the catalog over a range of seeds and compares the
observed selection frequency of each definition with its weight share.

Selection:
    pool     = non-retired definitions (optionally one category)
    weighted = each definition repeated `weight` times
    index    = int(Random(seed).random() * len(weighted))

Expected share of a definition = weight / sum(weights in pool).

Also replays a handful of seeds twice to confirm that selection is
deterministic, and scores a sample of time-based results to show how
lowerBetter games spread across the canonical scale.
"""

import argparse
import logging
from collections import Counter

from housecomp.config import configure_logging
from housecomp.engine.catalog import get_default_catalog
from housecomp.engine.scoring import compute_score
from housecomp.models.competition import ScoringAdapter


def run_frequency_check(draws: int, start_seed: int, category: str | None, tolerance: float) -> bool:
    """Compare observed frequencies with weight shares.

    Args:
        draws: Number of seeded draws
        start_seed: First seed; seeds are consecutive
        category: Optional category filter
        tolerance: Allowed absolute difference in share

    Returns:
        True if every definition is within tolerance
    """
    catalog = get_default_catalog()
    pool = catalog.get_pool(retired=False, category=category)
    total_weight = sum(d.weight for d in pool)

    counts = Counter(catalog.pick_random(seed, category=category).key for seed in range(start_seed, start_seed + draws))

    print("=" * 80)
    print("SELECTION FREQUENCY")
    print(f"Draws: {draws}  Category: {category or 'all'}  Pool: {len(pool)}  Total weight: {total_weight}")
    print("=" * 80)
    print()
    print(f"{'Competition':<22} {'Weight':>8} {'Expected':>10} {'Observed':>10} {'Diff':>8} {'Status':>8}")
    print("-" * 70)

    all_passed = True
    for definition in pool:
        expected = definition.weight / total_weight
        observed = counts[definition.key] / draws
        diff = abs(observed - expected)
        passed = diff <= tolerance
        if not passed:
            all_passed = False
        status = "PASS" if passed else "FAIL"
        print(
            f"{definition.key:<22} {definition.weight:>8} {expected:>10.3%} "
            f"{observed:>10.3%} {diff:>8.3%} {status:>8}"
        )

    print("-" * 70)
    print(f"Overall: {'ALL PASSED' if all_passed else 'SOME FAILED'}")
    print()
    return all_passed


def run_replay_check(seeds: int = 25) -> bool:
    """Verify that repeated picks with the same seed agree."""
    catalog = get_default_catalog()
    mismatches = [seed for seed in range(seeds) if catalog.pick_random(seed).key != catalog.pick_random(seed).key]

    print("=" * 80)
    print("REPLAY DETERMINISM")
    print("=" * 80)
    print(f"Seeds checked: {seeds}  Mismatches: {len(mismatches)}")
    print()
    return not mismatches


def run_time_score_table() -> None:
    """Show canonical scores of sample times for every lowerBetter game."""
    catalog = get_default_catalog()
    timed = [
        d for d in catalog.get_all()
        if d.scoring_adapter in (ScoringAdapter.LOWER_BETTER.value, ScoringAdapter.TIME_TO_POINTS.value)
    ]

    print("=" * 80)
    print("TIME SCORING")
    print("=" * 80)
    print()
    print(f"{'Competition':<22} {'Target':>8} {'Max':>8} {'@target':>8} {'@mid':>8} {'@max':>8}")
    print("-" * 66)
    for definition in timed:
        params = definition.scoring_params
        target = params.target_ms or 0
        limit = params.max_ms or 0
        samples = [target, (target + limit) / 2, limit]
        scores = [compute_score(definition.scoring_adapter, t, params).score for t in samples]
        print(
            f"{definition.key:<22} {target:>8.0f} {limit:>8.0f} "
            f"{scores[0]:>8} {scores[1]:>8} {scores[2]:>8}"
        )
    print("-" * 66)
    print()


def main():
    """Run the selection simulations."""
    parser = argparse.ArgumentParser(description="Run weighted selection simulation")
    parser.add_argument("--draws", type=int, default=20000,
                        help="Number of seeded draws (default: 20000)")
    parser.add_argument("--start-seed", type=int, default=0,
                        help="First seed of the consecutive range (default: 0)")
    parser.add_argument("--category", type=str, default=None,
                        help="Restrict the pool to one category")
    parser.add_argument("--tolerance", type=float, default=0.01,
                        help="Allowed absolute share difference (default: 0.01)")
    parser.add_argument("--verbose", action="store_true",
                        help="Log every pick")
    args = parser.parse_args()

    configure_logging("DEBUG" if args.verbose else "WARNING")
    logging.getLogger("housecomp.engine.catalog").setLevel(logging.INFO if args.verbose else logging.WARNING)

    print()
    print("WEIGHTED SELECTION SIMULATION")
    print("=" * 80)
    print()

    run_frequency_check(args.draws, args.start_seed, args.category, args.tolerance)
    run_replay_check()
    run_time_score_table()

    print("=" * 80)
    print("SIMULATION COMPLETE")
    print("=" * 80)


if __name__ == "__main__":
    main()
