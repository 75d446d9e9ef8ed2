import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from fairsched.config import Configuration
from fairsched.eventlog import SchedulingEventLog
from fairsched.loadmgr import ClusterView, LoadManager, TaskType, TrackerStatus, create_load_manager

logger = logging.getLogger("fairsched.simulation")


@dataclass
class SimulationResult:
    occupancy: Dict[str, TrackerStatus]
    pending_maps: int
    pending_reduces: int
    rounds: int
    assignments: List[tuple] = field(default_factory=list)  # (round, tracker, TaskType)

    def _counts(self, task_type: TaskType) -> np.ndarray:
        return np.array([t.count_tasks(task_type) for t in self.occupancy.values()], dtype=float)

    def spread(self, task_type: TaskType) -> int:
        """Difference between the busiest and idlest tracker."""
        counts = self._counts(task_type)
        if counts.size == 0:
            return 0
        return int(counts.max() - counts.min())

    def stddev(self, task_type: TaskType) -> float:
        counts = self._counts(task_type)
        if counts.size == 0:
            return 0.0
        return float(np.std(counts))


class HeartbeatSimulator:
    """
    Plays the host scheduler against a load manager.

    Every round each tracker heartbeats in order; while the load manager
    admits another map (then reduce), the tracker has a free slot and work is
    pending, one task is assigned. Assigned tasks keep running, so the
    cluster-wide runnable count is pending plus running.
    """

    def __init__(self, load_manager: LoadManager, trackers: List[TrackerStatus],
                 pending_maps: int, pending_reduces: int,
                 event_log: Optional[SchedulingEventLog] = None):
        self.load_manager = load_manager
        self.trackers: Dict[str, TrackerStatus] = {t.tracker_name: t for t in trackers}
        self.pending_maps = pending_maps
        self.pending_reduces = pending_reduces
        self.event_log = event_log
        if event_log is not None:
            load_manager.set_event_log(event_log)

    def _cluster_view(self) -> ClusterView:
        running_maps = sum(t.running_maps for t in self.trackers.values())
        running_reduces = sum(t.running_reduces for t in self.trackers.values())
        return ClusterView.from_trackers(
            self.trackers.values(),
            runnable_maps=self.pending_maps + running_maps,
            runnable_reduces=self.pending_reduces + running_reduces,
        )

    def _pending(self, task_type: TaskType) -> int:
        return self.pending_maps if task_type is TaskType.MAP else self.pending_reduces

    def _take(self, task_type: TaskType, tracker: TrackerStatus) -> TrackerStatus:
        if task_type is TaskType.MAP:
            self.pending_maps -= 1
            return dataclasses.replace(tracker, running_maps=tracker.running_maps + 1)
        self.pending_reduces -= 1
        return dataclasses.replace(tracker, running_reduces=tracker.running_reduces + 1)

    def heartbeat(self, name: str, round_no: int = 0) -> List[TaskType]:
        """Handle one heartbeat from ``name``; returns the task types assigned."""
        assigned: List[TaskType] = []
        # one snapshot per heartbeat
        cluster = self._cluster_view()
        for task_type in (TaskType.MAP, TaskType.REDUCE):
            while self._pending(task_type) > 0:
                tracker = self.trackers[name]
                if tracker.count_tasks(task_type) >= tracker.max_slots(task_type):
                    break
                if not self.load_manager.can_assign(tracker, cluster, task_type):
                    break
                if not self.load_manager.can_launch_task(tracker, None, task_type):
                    break
                self.trackers[name] = self._take(task_type, tracker)
                assigned.append(task_type)
                if self.event_log is not None:
                    self.event_log.log("ASSIGN", round_no, name, task_type.value)
        return assigned

    def run(self, rounds: int) -> SimulationResult:
        self.load_manager.start()
        history = []
        try:
            for round_no in range(rounds):
                for name in list(self.trackers):
                    for task_type in self.heartbeat(name, round_no):
                        history.append((round_no, name, task_type))
                logger.debug(f"Round {round_no}: {self.pending_maps} maps, "
                             f"{self.pending_reduces} reduces pending")
        finally:
            self.load_manager.terminate()
        logger.info(f"Simulated {rounds} rounds, {len(history)} tasks assigned")
        return SimulationResult(
            occupancy=dict(self.trackers),
            pending_maps=self.pending_maps,
            pending_reduces=self.pending_reduces,
            rounds=rounds,
            assignments=history,
        )


def build_trackers(trackers_cfg: List[Dict[str, Any]]) -> List[TrackerStatus]:
    trackers = []
    for i, tc in enumerate(trackers_cfg):
        trackers.append(TrackerStatus(
            tracker_name=tc.get('name', f'tracker-{i}'),
            running_maps=int(tc.get('running_maps', 0)),
            running_reduces=int(tc.get('running_reduces', 0)),
            max_map_slots=int(tc.get('max_map_slots', tc.get('map_slots', 2))),
            max_reduce_slots=int(tc.get('max_reduce_slots', tc.get('reduce_slots', 2))),
        ))
    return trackers


def run_simulation(cfg: Dict[str, Any], rounds: Optional[int] = None) -> SimulationResult:
    """
    Runs the heartbeat simulation described by a config dict.

    Reads ``conf`` (flat scheduler options), ``trackers``, ``pending_maps``,
    ``pending_reduces`` and ``rounds``.
    """
    conf = Configuration(cfg.get('conf') or {})
    event_log = SchedulingEventLog.from_conf(conf)
    try:
        sim = HeartbeatSimulator(
            create_load_manager(conf),
            build_trackers(cfg.get('trackers', [])),
            pending_maps=int(cfg.get('pending_maps', 0)),
            pending_reduces=int(cfg.get('pending_reduces', 0)),
            event_log=event_log,
        )
        return sim.run(rounds if rounds is not None else int(cfg.get('rounds', 3)))
    finally:
        event_log.shutdown()
