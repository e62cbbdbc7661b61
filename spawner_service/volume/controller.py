"""
EBS Volume Operations Module
Translates volume requests into EC2 API calls and EC2 results into responses.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from botocore.exceptions import BotoCoreError, ClientError

from spawner_service.common.aws_client_factory import create_ec2_client
from spawner_service.config import DEFAULT_CALL_TIMEOUT

from .errors import log_error, log_session_error
from .exceptions import (
    ClientConstructionError,
    CompositePartialFailureError,
    InvalidVolumeRequestError,
    ProviderCallError,
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

ClientFactory = Callable[[str, Optional[float]], Any]

PROVIDER_ERRORS = (ClientError, BotoCoreError)


def _require(operation: str, value: str, field_name: str) -> None:
    if not value:
        raise InvalidVolumeRequestError(operation, f"{field_name} is required")


class VolumeController:
    """
    Stateless adapter exposing create/delete volume and snapshot operations.

    A new EC2 client is requested from the client factory for every call, so
    instances can be shared freely between threads.
    """

    def __init__(
        self,
        client_factory: Optional[ClientFactory] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.client_factory = client_factory or create_ec2_client
        self.logger = logger or logging.getLogger(__name__)

    def _session_client(self, operation: str, region: str, timeout: Optional[float]):
        """Build the region-scoped client; no EC2 call is made if this fails."""
        try:
            return self.client_factory(region, timeout)
        except Exception as e:
            log_session_error(operation, self.logger, region, e)
            raise ClientConstructionError(operation, region, e) from e

    def create_volume(
        self, request: CreateVolumeRequest, timeout: Optional[float] = DEFAULT_CALL_TIMEOUT
    ) -> CreateVolumeResponse:
        """
        Create an EBS volume.

        Args:
            request: Zone, type, size in GiB and optional source snapshot
            timeout: Optional network timeout in seconds for the EC2 call

        Returns:
            CreateVolumeResponse with the new volume id

        Raises:
            InvalidVolumeRequestError: If the request fails local validation
            ClientConstructionError: If the EC2 client cannot be created
            ProviderCallError: If EC2 rejects the call
        """
        operation = "CreateVolume"
        _require(operation, request.region, "region")
        _require(operation, request.availability_zone, "availability_zone")
        size = request.size
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise InvalidVolumeRequestError(operation, f"size must be a positive integer, got {size!r}")

        params = {
            "AvailabilityZone": request.availability_zone,
            "VolumeType": request.volume_type,
            "Size": size,
        }
        if request.snapshot_id:
            params["SnapshotId"] = request.snapshot_id

        ec2_client = self._session_client(operation, request.region, timeout)

        try:
            result = ec2_client.create_volume(**params)
        except PROVIDER_ERRORS as e:
            error = ProviderCallError(operation, e, CreateVolumeResponse(error=str(e)))
            log_error(operation, self.logger, error)
            raise error from e

        self.logger.debug("Created volume %s in %s", result["VolumeId"], request.availability_zone)
        return CreateVolumeResponse(volume_id=result["VolumeId"], error="")

    def delete_volume(
        self, request: DeleteVolumeRequest, timeout: Optional[float] = DEFAULT_CALL_TIMEOUT
    ) -> DeleteVolumeResponse:
        """
        Delete an EBS volume.

        DeleteVolume returns no payload, so the volume is reported as deleted
        whenever the call returns without error. Repeated calls are forwarded
        to EC2 each time.
        """
        operation = "DeleteVolume"
        _require(operation, request.region, "region")
        _require(operation, request.volume_id, "volume_id")

        ec2_client = self._session_client(operation, request.region, timeout)
        self._delete(operation, ec2_client, request.volume_id, DeleteVolumeResponse())

        return DeleteVolumeResponse(deleted=True)

    def create_snapshot(
        self, request: CreateSnapshotRequest, timeout: Optional[float] = DEFAULT_CALL_TIMEOUT
    ) -> CreateSnapshotResponse:
        """Create a snapshot of an EBS volume. Volume existence is checked by EC2."""
        operation = "CreateSnapshot"
        _require(operation, request.region, "region")
        _require(operation, request.volume_id, "volume_id")

        ec2_client = self._session_client(operation, request.region, timeout)
        snapshot_id = self._snapshot(operation, ec2_client, request.volume_id, CreateSnapshotResponse())

        return CreateSnapshotResponse(snapshot_id=snapshot_id)

    def create_snapshot_and_delete(
        self,
        request: CreateSnapshotAndDeleteRequest,
        timeout: Optional[float] = DEFAULT_CALL_TIMEOUT,
    ) -> CreateSnapshotAndDeleteResponse:
        """
        Snapshot a volume, then delete it.

        The delete is only attempted once the snapshot call has succeeded.
        If the delete fails, CompositePartialFailureError carries the snapshot
        id with deleted=False so the caller knows the volume still exists.
        """
        operation = "CreateSnapshotAndDelete"
        _require(operation, request.region, "region")
        _require(operation, request.volume_id, "volume_id")

        ec2_client = self._session_client(operation, request.region, timeout)

        self._log_stage(operation, CompositeStage.SNAPSHOTTING, request.volume_id)
        snapshot_id = self._snapshot(
            operation,
            ec2_client,
            request.volume_id,
            CreateSnapshotAndDeleteResponse(),
            log_label="CreateSnapshot",
        )

        self._log_stage(operation, CompositeStage.DELETING, request.volume_id)
        partial = CreateSnapshotAndDeleteResponse(snapshot_id=snapshot_id, deleted=False)
        try:
            self._delete(operation, ec2_client, request.volume_id, partial, log_label="DeleteVolume")
        except ProviderCallError as e:
            raise CompositePartialFailureError(
                operation, snapshot_id, e.provider_error, partial
            ) from e.provider_error

        return CreateSnapshotAndDeleteResponse(snapshot_id=snapshot_id, deleted=True)

    def _log_stage(self, operation: str, stage: CompositeStage, volume_id: str) -> None:
        self.logger.debug("%s: %s %s", operation, stage.value, volume_id)

    def _snapshot(
        self, operation: str, ec2_client, volume_id: str, empty_response, log_label: Optional[str] = None
    ) -> str:
        try:
            result = ec2_client.create_snapshot(VolumeId=volume_id)
        except PROVIDER_ERRORS as e:
            error = ProviderCallError(operation, e, empty_response)
            log_error(log_label or operation, self.logger, error)
            raise error from e
        return result["SnapshotId"]

    def _delete(
        self, operation: str, ec2_client, volume_id: str, failed_response, log_label: Optional[str] = None
    ) -> None:
        try:
            ec2_client.delete_volume(VolumeId=volume_id)
        except PROVIDER_ERRORS as e:
            error = ProviderCallError(operation, e, failed_response)
            log_error(log_label or operation, self.logger, error)
            raise error from e
