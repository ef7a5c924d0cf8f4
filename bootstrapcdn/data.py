"""
Data snapshot — the JSON summary behind /data/bootstrapcdn.json.

Maps every configured library version to its CDN asset URLs. The snapshot is
derived on first use and then kept for the life of the process; a fresh one
only appears after a restart.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from bootstrapcdn.config import Config

logger = logging.getLogger(__name__)


class DataDerivationError(Exception):
    """Configuration lacks a field the snapshot needs."""


@dataclass(frozen=True)
class DerivedDataSnapshot:
    timestamp: datetime
    bootstrap: dict[str, dict[str, str]]
    fontawesome: dict[str, str]

    def to_dict(self) -> dict[str, Any]:
        ts = self.timestamp.astimezone(timezone.utc)
        return {
            "timestamp": ts.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "bootstrap": self.bootstrap,
            "fontawesome": self.fontawesome,
        }


def derive_snapshot(config: Config, now: datetime | None = None) -> DerivedDataSnapshot:
    """Build the version → URL summary, or raise DataDerivationError.

    Never returns partial data: the first incomplete record aborts the whole
    derivation.
    """
    bootstrap = {}
    for record in config.bootstrap:
        if not record.css_complete or not record.javascript:
            raise DataDerivationError(
                f"bootstrap {record.version} is missing css_complete or javascript"
            )
        bootstrap[record.version] = {"css": record.css_complete, "js": record.javascript}

    fontawesome = {}
    for record in config.fontawesome:
        if not record.css_complete:
            raise DataDerivationError(f"fontawesome {record.version} is missing css_complete")
        fontawesome[record.version] = record.css_complete

    return DerivedDataSnapshot(
        timestamp=now or datetime.now(timezone.utc),
        bootstrap=bootstrap,
        fontawesome=fontawesome,
    )


class SnapshotCell:
    """
    Holds the snapshot once computed.

    Usage:
        cell = SnapshotCell()
        body = cell.json(config)   # computed on first call
        body = cell.json(config)   # same text, no recomputation
    """

    def __init__(self) -> None:
        self._snapshot: DerivedDataSnapshot | None = None
        self._json: str | None = None

    @property
    def is_set(self) -> bool:
        return self._snapshot is not None

    def get(self, config: Config) -> DerivedDataSnapshot:
        if self._snapshot is None:
            snapshot = derive_snapshot(config)
            # Two racing first calls derive identical data; last store wins harmlessly
            self._json = json.dumps(snapshot.to_dict())
            self._snapshot = snapshot
            logger.info(
                f"Data snapshot computed ({len(snapshot.bootstrap)} bootstrap, "
                f"{len(snapshot.fontawesome)} fontawesome versions)"
            )
        return self._snapshot

    def json(self, config: Config) -> str:
        """Serialised snapshot, byte-identical on every call."""
        self.get(config)
        return self._json
