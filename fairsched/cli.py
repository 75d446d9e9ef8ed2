"""Command-line interface for fairsched.

Inspects the per-tracker caps a load manager computes for a cluster snapshot
and runs the heartbeat simulation.
"""
import argparse
import sys

from fairsched.logging_utils import configure_logging


def _print_caps(cfg) -> int:
    from fairsched.config import Configuration
    from fairsched.loadmgr import ClusterView, TaskType, create_load_manager
    from fairsched.simulation import build_trackers

    trackers = build_trackers(cfg.get('trackers', []))
    if not trackers:
        print("No trackers in snapshot")
        return 1

    cluster = ClusterView.from_trackers(
        trackers,
        runnable_maps=int(cfg.get('total_runnable_maps', 0)),
        runnable_reduces=int(cfg.get('total_runnable_reduces', 0)),
    )
    # explicit totals win over the sum of the listed trackers
    if 'total_map_slots' in cfg or 'total_reduce_slots' in cfg:
        cluster = ClusterView(
            total_runnable_maps=cluster.total_runnable_maps,
            total_map_slots=int(cfg.get('total_map_slots', cluster.total_map_slots)),
            total_runnable_reduces=cluster.total_runnable_reduces,
            total_reduce_slots=int(cfg.get('total_reduce_slots', cluster.total_reduce_slots)),
        )
    manager = create_load_manager(Configuration(cfg.get('conf') or {}))
    cap_fn = getattr(manager, 'get_cap', None)

    print(f"Cluster: maps {cluster.total_runnable_maps}/{cluster.total_map_slots} "
          f"reduces {cluster.total_runnable_reduces}/{cluster.total_reduce_slots}")
    for t in trackers:
        parts = []
        for task_type in (TaskType.MAP, TaskType.REDUCE):
            cap = '-'
            if cap_fn is not None:
                cap = cap_fn(cluster.runnable(task_type), t.max_slots(task_type),
                             cluster.slots(task_type))
            admit = manager.can_assign(t, cluster, task_type)
            parts.append(f"{task_type.value}: running={t.count_tasks(task_type)} "
                         f"cap={cap} assign={'yes' if admit else 'no'}")
        print(f"  - {t.tracker_name} | " + " | ".join(parts))
    return 0


def _print_simulation(cfg, rounds) -> int:
    from fairsched.loadmgr import TaskType
    from fairsched.simulation import run_simulation

    if not cfg.get('trackers'):
        print("No trackers in config")
        return 1
    result = run_simulation(cfg, rounds=rounds)
    print(f"After {result.rounds} rounds: pending maps={result.pending_maps} "
          f"reduces={result.pending_reduces}")
    for name, t in result.occupancy.items():
        print(f"  - {name} | maps={t.running_maps}/{t.max_map_slots} "
              f"reduces={t.running_reduces}/{t.max_reduce_slots}")
    for task_type in (TaskType.MAP, TaskType.REDUCE):
        print(f"{task_type.value} spread={result.spread(task_type)} "
              f"stddev={result.stddev(task_type):.3f}")
    return 0


def main(argv=None):
    """Entry point for the CLI binary `fairsched`."""
    parser = argparse.ArgumentParser(
        prog="fairsched",
        description="Fair scheduler load management utilities",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_caps = sub.add_parser("caps", help="Show per-tracker caps and admission for a cluster snapshot")
    p_caps.add_argument("--config", required=True, help="Path to YAML/JSON cluster snapshot")

    p_sim = sub.add_parser("simulate", help="Run the heartbeat assignment simulation")
    p_sim.add_argument("--config", required=True, help="Path to YAML/JSON simulation config")
    p_sim.add_argument("--rounds", type=int, default=None, help="Heartbeat rounds (overrides config)")

    args = parser.parse_args(argv)

    # Initialize logging early
    configure_logging(args.log_level)

    from fairsched.config import load_config
    cfg = load_config(args.config)

    if args.cmd == "caps":
        return _print_caps(cfg)

    if args.cmd == "simulate":
        return _print_simulation(cfg, args.rounds)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
