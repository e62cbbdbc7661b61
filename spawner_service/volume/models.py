"""
Request and response values for EBS volume operations.

Each request is built once per call and never mutated; responses only carry
provider results for calls that returned without error.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum


class CompositeStage(Enum):
    """Steps of the snapshot-then-delete operation"""

    SNAPSHOTTING = "snapshotting"
    DELETING = "deleting"


class _ResponseMixin:  # pylint: disable=too-few-public-methods
    def to_dict(self) -> dict:
        """Return the response as a plain dict for JSON output."""
        return asdict(self)


@dataclass(frozen=True)
class CreateVolumeRequest:
    """Parameters for creating an EBS volume. An empty snapshot_id means no source snapshot."""

    region: str
    availability_zone: str
    volume_type: str
    size: int
    snapshot_id: str = ""


@dataclass(frozen=True)
class CreateVolumeResponse(_ResponseMixin):
    volume_id: str = ""
    error: str = ""


@dataclass(frozen=True)
class DeleteVolumeRequest:
    region: str
    volume_id: str


@dataclass(frozen=True)
class DeleteVolumeResponse(_ResponseMixin):
    deleted: bool = False


@dataclass(frozen=True)
class CreateSnapshotRequest:
    region: str
    volume_id: str


@dataclass(frozen=True)
class CreateSnapshotResponse(_ResponseMixin):
    snapshot_id: str = ""


@dataclass(frozen=True)
class CreateSnapshotAndDeleteRequest:
    region: str
    volume_id: str


@dataclass(frozen=True)
class CreateSnapshotAndDeleteResponse(_ResponseMixin):
    snapshot_id: str = ""
    deleted: bool = False
