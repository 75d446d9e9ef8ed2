import importlib
from typing import Any, Dict, Mapping, Type

from fairsched.config import Configuration
from .base import LoadManager
from .capbased import CapBasedLoadManager, OVERSHOOT
from .interfaces import ClusterView, JobRef, TaskType, TrackerStatus

LOAD_MANAGER = "mapred.fairscheduler.loadmanager"

LOAD_MANAGERS: Dict[str, Type[LoadManager]] = {
    'capbased': CapBasedLoadManager,
}


def _resolve(name: str) -> Type[LoadManager]:
    if name in LOAD_MANAGERS:
        return LOAD_MANAGERS[name]
    module_name, _, class_name = name.rpartition('.')
    if not module_name:
        raise ValueError(f"Unknown load manager: {name}")
    try:
        cls = getattr(importlib.import_module(module_name), class_name)
    except (ImportError, AttributeError) as e:
        raise ValueError(f"Unknown load manager: {name}") from e
    if not (isinstance(cls, type) and issubclass(cls, LoadManager)):
        raise ValueError(f"{name} is not a LoadManager")
    return cls


def create_load_manager(conf: Mapping[str, Any]) -> LoadManager:
    """Build and configure the load manager named by ``mapred.fairscheduler.loadmanager``."""
    if not isinstance(conf, Configuration):
        conf = Configuration(conf)
    cls = _resolve(str(conf.get(LOAD_MANAGER, 'capbased')))
    manager = cls()
    manager.set_conf(conf)
    return manager


__all__ = [
    'LOAD_MANAGER', 'LOAD_MANAGERS', 'OVERSHOOT', 'create_load_manager',
    'LoadManager', 'CapBasedLoadManager',
    'ClusterView', 'JobRef', 'TaskType', 'TrackerStatus',
]
