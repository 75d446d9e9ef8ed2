import json
import logging
import re
from typing import Any, Dict, Iterator, Mapping, Optional

import yaml

logger = logging.getLogger("fairsched.config")

# Integer options are signed 32-bit: an optional sign, then 0x-hex or ASCII decimal digits.
INT_MIN, INT_MAX = -2 ** 31, 2 ** 31 - 1
_INT_RE = re.compile(r'([+-]?)(?:0[xX]([0-9a-fA-F]+)|([0-9]+))\Z')


def load_config(path: str) -> Dict[str, Any]:
    """Load a YAML or JSON config file into a dict."""
    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()

    path_lower = path.lower()
    if path_lower.endswith(('.yaml', '.yml')):
        return yaml.safe_load(content) or {}
    else:
        return json.loads(content)


class Configuration(Mapping[str, Any]):
    """Flat key/value scheduler configuration.

    Keys are dotted option names such as
    ``mapred.fairscheduler.capbasedloadmanager.overshootpercentage``.
    Typed getters never raise: a missing or malformed value yields the
    supplied default.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values or {})

    @classmethod
    def from_file(cls, path: str) -> "Configuration":
        return cls(load_config(path))

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Configuration({self._values!r})"

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def get_int(self, key: str, default: int) -> int:
        """Return ``key`` as a signed 32-bit int from an int or a decimal or 0x-hex string."""
        if key not in self._values:
            return default
        raw = self._values[key]
        value = _parse_int(raw)
        if value is None:
            logger.warning(f"Ignoring non-integer value {raw!r} for {key}; using {default}")
            return default
        return value

    def get_bool(self, key: str, default: bool) -> bool:
        if key not in self._values:
            return default
        raw = self._values[key]
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, str):
            lowered = raw.strip().lower()
            if lowered == 'true':
                return True
            if lowered == 'false':
                return False
        logger.warning(f"Ignoring non-boolean value {raw!r} for {key}; using {default}")
        return default


def _parse_int(raw: Any) -> Optional[int]:
    # bool is an int subclass but never a valid integer option
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        match = _INT_RE.match(raw.strip())
        if match is None:
            return None
        sign, hex_digits, dec_digits = match.groups()
        value = int(hex_digits, 16) if hex_digits else int(dec_digits, 10)
        if sign == '-':
            value = -value
    else:
        return None
    if not INT_MIN <= value <= INT_MAX:
        return None
    return value
