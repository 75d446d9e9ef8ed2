"""Scheduling event log.

Records scheduler decisions as tab-separated ``EVENT\\targ...`` lines. Each
log writes through its own child of the ``fairsched.events`` logger, so a
log's file only ever receives that log's events.
"""

import itertools
import logging
from typing import Any, Mapping, Optional

from fairsched.config import Configuration

ENABLED = "mapred.fairscheduler.eventlog.enabled"
PATH = "mapred.fairscheduler.eventlog.path"

_log_ids = itertools.count()


class SchedulingEventLog:
    def __init__(self, enabled: bool = False, path: Optional[str] = None):
        self.enabled = enabled
        self.path = path
        self.logger = logging.getLogger(f"fairsched.events.{next(_log_ids)}")
        self._handler: Optional[logging.Handler] = None
        if enabled:
            # events are recorded regardless of the root level
            self.logger.setLevel(logging.INFO)
        if enabled and path:
            self._handler = logging.FileHandler(path, encoding='utf-8')
            self._handler.setFormatter(logging.Formatter('%(asctime)s\t%(message)s'))
            self.logger.addHandler(self._handler)

    @classmethod
    def from_conf(cls, conf: Mapping[str, Any]) -> "SchedulingEventLog":
        if not isinstance(conf, Configuration):
            conf = Configuration(conf)
        return cls(enabled=conf.get_bool(ENABLED, False), path=conf.get(PATH))

    def log(self, event: str, *params: Any) -> None:
        if not self.enabled:
            return
        self.logger.info('\t'.join([event] + [str(p) for p in params]))

    def shutdown(self) -> None:
        if self._handler is not None:
            self.logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None
        self.enabled = False
