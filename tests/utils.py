"""Test helpers."""

from typing import Dict, Any, Optional

from fairsched.loadmgr import CapBasedLoadManager, LoadManager, OVERSHOOT, TrackerStatus


def make_manager(overshoot: Optional[Any] = None) -> CapBasedLoadManager:
    """Cap-based manager configured with the given raw overshoot value."""
    conf: Dict[str, Any] = {}
    if overshoot is not None:
        conf[OVERSHOOT] = overshoot
    return CapBasedLoadManager(conf)


def tracker(running_maps: int = 0, max_map_slots: int = 4,
            running_reduces: int = 0, max_reduce_slots: int = 4,
            name: str = "tracker_host1:50060") -> TrackerStatus:
    return TrackerStatus(
        tracker_name=name,
        running_maps=running_maps,
        running_reduces=running_reduces,
        max_map_slots=max_map_slots,
        max_reduce_slots=max_reduce_slots,
    )


class AlwaysAssignLoadManager(LoadManager):
    """Load manager that never restricts assignment."""

    def can_assign_map(self, tracker, total_runnable_maps, total_map_slots):
        return True

    def can_assign_reduce(self, tracker, total_runnable_reduces, total_reduce_slots):
        return True

    def can_launch_task(self, tracker, job, task_type):
        return True
