from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional


class TaskType(Enum):
    MAP = 'map'
    REDUCE = 'reduce'


@dataclass(frozen=True)
class TrackerStatus:
    """Occupancy and capacity a tracker reports in one heartbeat."""
    tracker_name: str
    running_maps: int = 0
    running_reduces: int = 0
    max_map_slots: int = 0
    max_reduce_slots: int = 0

    def count_map_tasks(self) -> int:
        return self.running_maps

    def count_reduce_tasks(self) -> int:
        return self.running_reduces

    def count_tasks(self, task_type: TaskType) -> int:
        if task_type is TaskType.MAP:
            return self.running_maps
        return self.running_reduces

    def max_slots(self, task_type: TaskType) -> int:
        if task_type is TaskType.MAP:
            return self.max_map_slots
        return self.max_reduce_slots


@dataclass(frozen=True)
class ClusterView:
    """Cluster-wide totals taken from a single snapshot."""
    total_runnable_maps: int
    total_map_slots: int
    total_runnable_reduces: int
    total_reduce_slots: int

    def runnable(self, task_type: TaskType) -> int:
        if task_type is TaskType.MAP:
            return self.total_runnable_maps
        return self.total_runnable_reduces

    def slots(self, task_type: TaskType) -> int:
        if task_type is TaskType.MAP:
            return self.total_map_slots
        return self.total_reduce_slots

    @classmethod
    def from_trackers(cls, trackers: Iterable[TrackerStatus],
                      runnable_maps: int, runnable_reduces: int) -> "ClusterView":
        trackers = list(trackers)
        return cls(
            total_runnable_maps=runnable_maps,
            total_map_slots=sum(t.max_map_slots for t in trackers),
            total_runnable_reduces=runnable_reduces,
            total_reduce_slots=sum(t.max_reduce_slots for t in trackers),
        )


@dataclass
class JobRef:
    job_id: str
    pool: Optional[str] = None
    priority: int = 0
