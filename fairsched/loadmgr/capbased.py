"""Cap-based load manager.

Allocates tasks evenly across trackers up to their per-tracker maximum. The
number of tasks of a type a tracker may run is capped in proportion to how
many tasks of that type are outstanding cluster-wide, so a cluster running
below capacity spreads its work uniformly instead of piling it onto the
trackers that heartbeat first.
"""

import logging
import math
from typing import Any, Mapping, Optional

from .base import LoadManager
from .interfaces import JobRef, TaskType, TrackerStatus

# Percentage of a tracker's slots that may be assigned on top of its
# proportional share.
OVERSHOOT = "mapred.fairscheduler.capbasedloadmanager.overshootpercentage"

logger = logging.getLogger("fairsched.loadmgr.capbased")


class CapBasedLoadManager(LoadManager):
    """Admit a task while the tracker runs fewer than ``get_cap(...)`` of its type.

    ``allowed_overshoot`` is written once per ``set_conf`` with a single
    attribute store; concurrent queries see either the old or the new value.
    """

    def __init__(self, conf: Optional[Mapping[str, Any]] = None):
        self.allowed_overshoot = 0
        super().__init__(conf)

    def set_conf(self, conf: Mapping[str, Any]) -> None:
        super().set_conf(conf)
        raw = self.conf.get_int(OVERSHOOT, 0)
        overshoot = min(100, max(0, raw))
        if overshoot != raw:
            logger.warning(f"{OVERSHOOT}={raw} is outside [0, 100]; clamped to {overshoot}")
        self.allowed_overshoot = overshoot
        logger.info(f"Cap-based load manager configured with {overshoot}% overshoot")
        self._log_event("LOADMGR_CONFIG", overshoot)

    def get_cap(self, total_runnable: int, local_max: int, total_slots: int) -> int:
        """
        Maximum number of tasks of one type to admit on a tracker right now.

        Args:
            total_runnable: Runnable tasks of the type across the cluster.
            local_max: The tracker's configured slots for the type.
            total_slots: Slots for the type across the cluster.

        Returns:
            ``ceil(local_max * min(1, total_runnable / total_slots)
            + overshoot% * local_max)``, or 0 when either capacity is not
            positive or the result is not a finite number.
        """
        if total_slots <= 0 or local_max <= 0:
            return 0
        overshoot = self.allowed_overshoot
        # int true division stays finite for arbitrarily large counts
        load = min(total_runnable, total_slots) / total_slots
        try:
            return int(math.ceil(local_max * min(1.0, load) +
                                 overshoot / 100.0 * local_max))
        except (OverflowError, ValueError):
            logger.debug(f"Cap undefined for local_max={local_max!r}; denying")
            return 0

    def can_assign_map(self, tracker: TrackerStatus,
                       total_runnable_maps: int, total_map_slots: int) -> bool:
        return tracker.count_map_tasks() < self.get_cap(
            total_runnable_maps, tracker.max_map_slots, total_map_slots)

    def can_assign_reduce(self, tracker: TrackerStatus,
                          total_runnable_reduces: int, total_reduce_slots: int) -> bool:
        return tracker.count_reduce_tasks() < self.get_cap(
            total_runnable_reduces, tracker.max_reduce_slots, total_reduce_slots)

    def can_launch_task(self, tracker: TrackerStatus, job: Optional[JobRef],
                        task_type: TaskType) -> bool:
        return True
