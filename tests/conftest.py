"""Shared pytest fixtures for the volume service tests."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from spawner_service.volume import VolumeController


class _StubBotoClient:
    """Minimal stub for boto3 clients so no test reaches AWS."""

    def __init__(self, service_name: str, **kwargs):
        self.service_name = service_name
        self.region_name = kwargs.get("region_name")
        self.kwargs = kwargs
        self.exceptions = ClientError

    def __getattr__(self, name: str):
        def _method(*args, **kwargs):
            raise AssertionError(f"Unexpected AWS call {self.service_name}.{name}{args}{kwargs}")

        return _method


@pytest.fixture(autouse=True)
def stub_boto3_client(monkeypatch):
    """Replace boto3.client with a stub so tests don't call real AWS."""

    def fake_client(service_name, **kwargs):
        return _StubBotoClient(service_name, **kwargs)

    monkeypatch.setattr("boto3.client", fake_client)


@pytest.fixture(autouse=True)
def stub_credentials(monkeypatch, tmp_path):
    """Provide fake AWS credentials and an empty .env file."""
    env_file = tmp_path / ".env"
    env_file.write_text("")
    monkeypatch.setenv("AWS_ENV_FILE", str(env_file))
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "stub-key")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "stub-secret")
    monkeypatch.delenv("AWS_SESSION_TOKEN", raising=False)


@pytest.fixture(name="ec2_client")
def fixture_ec2_client():
    """Mock EC2 client with successful default responses."""
    client = MagicMock()
    client.create_volume.return_value = {"VolumeId": "vol-0abc", "State": "creating"}
    client.create_snapshot.return_value = {"SnapshotId": "snap-0abc", "State": "pending"}
    client.delete_volume.return_value = {}
    return client


@pytest.fixture(name="client_factory")
def fixture_client_factory(ec2_client):
    """Client factory returning the shared mock EC2 client."""
    return MagicMock(return_value=ec2_client)


@pytest.fixture(name="failing_client_factory")
def fixture_failing_client_factory():
    """Client factory that cannot build a client."""
    return MagicMock(side_effect=ValueError("AWS credentials not found in /tmp/.env"))


@pytest.fixture(name="mock_logger")
def fixture_mock_logger():
    return MagicMock(spec=logging.Logger)


@pytest.fixture(name="controller")
def fixture_controller(client_factory, mock_logger):
    return VolumeController(client_factory=client_factory, logger=mock_logger)
