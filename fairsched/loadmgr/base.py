from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from fairsched.config import Configuration
from fairsched.eventlog import SchedulingEventLog
from .interfaces import ClusterView, JobRef, TaskType, TrackerStatus


class LoadManager(ABC):
    """
    An abstract base class for load management policies.

    The host scheduler consults a load manager on every tracker heartbeat to
    decide whether one more task of a given type may go to that tracker.
    """

    def __init__(self, conf: Optional[Mapping[str, Any]] = None):
        self.conf: Optional[Configuration] = None
        self.event_log: Optional[SchedulingEventLog] = None
        if conf is not None:
            self.set_conf(conf)

    def set_conf(self, conf: Mapping[str, Any]) -> None:
        if not isinstance(conf, Configuration):
            conf = Configuration(conf)
        self.conf = conf

    def get_conf(self) -> Optional[Configuration]:
        return self.conf

    def set_event_log(self, event_log: SchedulingEventLog) -> None:
        self.event_log = event_log

    def start(self) -> None:
        """Lifecycle hook called once the host scheduler starts."""

    def terminate(self) -> None:
        """Lifecycle hook called when the host scheduler shuts down."""

    @abstractmethod
    def can_assign_map(self, tracker: TrackerStatus,
                       total_runnable_maps: int, total_map_slots: int) -> bool:
        """
        Can a given tracker take another map task?

        Args:
            tracker: The tracker's status from its heartbeat.
            total_runnable_maps: Runnable map tasks across the cluster.
            total_map_slots: Map slots configured across the cluster.
        """

    @abstractmethod
    def can_assign_reduce(self, tracker: TrackerStatus,
                          total_runnable_reduces: int, total_reduce_slots: int) -> bool:
        """Can a given tracker take another reduce task?"""

    @abstractmethod
    def can_launch_task(self, tracker: TrackerStatus, job: Optional[JobRef],
                        task_type: TaskType) -> bool:
        """Can a given tracker launch a task of ``job`` once admitted?"""

    def can_assign(self, tracker: TrackerStatus, cluster: ClusterView,
                   task_type: TaskType) -> bool:
        if task_type is TaskType.MAP:
            return self.can_assign_map(tracker, cluster.total_runnable_maps,
                                       cluster.total_map_slots)
        return self.can_assign_reduce(tracker, cluster.total_runnable_reduces,
                                      cluster.total_reduce_slots)

    def _log_event(self, event: str, *params: Any) -> None:
        if self.event_log is not None:
            self.event_log.log(event, *params)
