"""
EBS Volume Operations Package
Creates and deletes EBS volumes and snapshots on behalf of the spawner service.
"""

from .controller import VolumeController
from .errors import log_error
from .exceptions import (
    ClientConstructionError,
    CompositePartialFailureError,
    InvalidVolumeRequestError,
    ProviderCallError,
    VolumeOperationError,
)
from .models import (
    CompositeStage,
    CreateSnapshotAndDeleteRequest,
    CreateSnapshotAndDeleteResponse,
    CreateSnapshotRequest,
    CreateSnapshotResponse,
    CreateVolumeRequest,
    CreateVolumeResponse,
    DeleteVolumeRequest,
    DeleteVolumeResponse,
)

__all__ = [
    "VolumeController",
    "log_error",
    "ClientConstructionError",
    "CompositePartialFailureError",
    "InvalidVolumeRequestError",
    "ProviderCallError",
    "VolumeOperationError",
    "CompositeStage",
    "CreateSnapshotAndDeleteRequest",
    "CreateSnapshotAndDeleteResponse",
    "CreateSnapshotRequest",
    "CreateSnapshotResponse",
    "CreateVolumeRequest",
    "CreateVolumeResponse",
    "DeleteVolumeRequest",
    "DeleteVolumeResponse",
]
