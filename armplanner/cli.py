"""Command line entry point: plan a trajectory around the target circle and show it."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from armplanner.geometry import CircleObstacle, total_q_distance
from armplanner.graph_search import plan_brute_force
from armplanner.optimization import plan_optimization
from armplanner.planner import Planner

L1, L2, L3 = 110.0, 145.0, 180.0
CIRCLE_X, CIRCLE_Y, CIRCLE_R = 300.0, 0.0, 80.0
DEFAULT_OBSTACLES = (CircleObstacle(400, -100, 40), CircleObstacle(60, 120, 60))
PLANNERS = ("optimization", "newton", "brute-force")


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for the command."""
    parser = argparse.ArgumentParser(
        description="Plan a planar 3-link arm trajectory around a circle."
    )
    parser.add_argument(
        "--planner", choices=PLANNERS, default="optimization", help="planning method"
    )
    parser.add_argument(
        "--step", type=float, default=0.1, help="sampling step on the circle (rad)"
    )
    parser.add_argument(
        "--obstacles", action="store_true", help="add circular obstacles and avoid them"
    )
    parser.add_argument(
        "--no-display", action="store_true", help="plan only, do not open a window"
    )
    parser.add_argument(
        "--sinusoidal",
        action="store_true",
        help="show a sinusoidal demonstration motion instead of the plan",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status."""
    args = build_parser().parse_args(argv)
    if args.step <= 0:
        print("step must be positive")
        return 2
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    print("[Main] Program started")

    obstacles = list(DEFAULT_OBSTACLES) if args.obstacles else []
    planner = Planner(
        L1, L2, L3, CIRCLE_X, CIRCLE_Y, CIRCLE_R, obstacles,
        q1=1.0, avoid_obstacles=args.obstacles,
    )
    points = planner.points_sampler(args.step)
    if args.planner == "newton":
        trajectory = planner.plan_newton(points)
    elif args.planner == "brute-force":
        trajectory = plan_brute_force(planner, points)
    else:
        trajectory = plan_optimization(planner, points)

    if not trajectory:
        print("No trajectory found")
        return 1
    print(f"Total q length: {total_q_distance(trajectory):.2f}")

    if not args.no_display:
        from armplanner.visualization import Visualization

        vis = Visualization(L1, L2, L3, CIRCLE_X, CIRCLE_Y, CIRCLE_R, obstacles)
        if args.sinusoidal:
            vis.play_sinusoidal_motion()
        else:
            vis.visualize(trajectory)
    print("Program finished")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())