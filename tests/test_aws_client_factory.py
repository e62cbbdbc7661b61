"""Tests for spawner_service/common/aws_client_factory.py"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from spawner_service.common.aws_client_factory import (
    _resolve_env_path,
    build_client_config,
    create_client,
    create_ec2_client,
    load_credentials_from_env,
)
from tests.assertions import assert_equal


def test_resolve_env_path_with_explicit_path():
    """Test _resolve_env_path returns explicit path when provided."""
    assert_equal(_resolve_env_path("/custom/path/.env"), "/custom/path/.env")


def test_resolve_env_path_uses_env_var(monkeypatch):
    """Test _resolve_env_path falls back to AWS_ENV_FILE."""
    monkeypatch.setenv("AWS_ENV_FILE", "/from/env/.env")
    assert_equal(_resolve_env_path(), "/from/env/.env")


def test_resolve_env_path_defaults_to_home(monkeypatch, tmp_path):
    """Test _resolve_env_path falls back to ~/.env."""
    monkeypatch.delenv("AWS_ENV_FILE", raising=False)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)
    assert_equal(_resolve_env_path(), str(tmp_path / ".env"))


def test_load_credentials_from_env_file(monkeypatch, tmp_path):
    """Test credentials are read from the .env file."""
    monkeypatch.delenv("AWS_ACCESS_KEY_ID")
    monkeypatch.delenv("AWS_SECRET_ACCESS_KEY")
    env_file = tmp_path / "creds.env"
    env_file.write_text("AWS_ACCESS_KEY_ID=file-key\nAWS_SECRET_ACCESS_KEY=file-secret\n")

    assert_equal(load_credentials_from_env(str(env_file)), ("file-key", "file-secret"))


def test_load_credentials_missing_raises(monkeypatch, tmp_path):
    """Test missing credentials raise ValueError naming the file."""
    monkeypatch.delenv("AWS_ACCESS_KEY_ID")
    monkeypatch.delenv("AWS_SECRET_ACCESS_KEY")
    env_file = tmp_path / "empty.env"
    env_file.write_text("")

    with pytest.raises(ValueError, match="AWS credentials not found"):
        load_credentials_from_env(str(env_file))


def test_build_client_config_without_timeout():
    """Test no botocore config override is built without a timeout."""
    assert build_client_config(None) is None


def test_build_client_config_with_timeout():
    """Test the timeout is applied to both connect and read."""
    config = build_client_config(4.5)

    assert_equal(config.connect_timeout, 4.5)
    assert_equal(config.read_timeout, 4.5)


@pytest.mark.parametrize("timeout", [0, -1])
def test_build_client_config_rejects_non_positive_timeout(timeout):
    """Test zero or negative timeouts are rejected."""
    with pytest.raises(ValueError, match="Timeout must be positive"):
        build_client_config(timeout)


@patch("boto3.client")
@patch("spawner_service.common.aws_client_factory.load_credentials_from_env")
def test_create_ec2_client_without_credentials(mock_load_creds, mock_boto_client):
    """Test create_ec2_client loads credentials when not provided."""
    mock_load_creds.return_value = ("test_key", "test_secret")
    mock_boto_client.return_value = MagicMock()

    _ = create_ec2_client("us-east-1")

    mock_load_creds.assert_called_once()
    mock_boto_client.assert_called_once_with(
        "ec2",
        region_name="us-east-1",
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
    )


@patch("spawner_service.common.aws_client_factory.load_credentials_from_env")
def test_create_ec2_client_with_explicit_credentials(mock_load_creds):
    """Test explicit credentials skip the .env lookup."""
    client = create_ec2_client("eu-west-1", aws_access_key_id="k", aws_secret_access_key="s")

    mock_load_creds.assert_not_called()
    assert_equal(client.service_name, "ec2")
    assert_equal(client.region_name, "eu-west-1")
    assert_equal(client.kwargs["aws_access_key_id"], "k")


def test_create_ec2_client_passes_timeout_config():
    """Test the per-call timeout reaches the boto3 client config."""
    client = create_ec2_client("us-west-2", timeout=3.0)

    assert_equal(client.kwargs["config"].read_timeout, 3.0)
    assert_equal(client.kwargs["config"].connect_timeout, 3.0)


def test_create_ec2_client_requires_region():
    """Test an empty region never reaches boto3."""
    with pytest.raises(ValueError, match="Region is required"):
        create_ec2_client("")


def test_create_client_includes_session_token(monkeypatch):
    """Test a session token in the environment is forwarded."""
    monkeypatch.setenv("AWS_SESSION_TOKEN", "token-123")

    client = create_client("ec2", "us-east-1")

    assert_equal(client.kwargs["aws_session_token"], "token-123")


def test_create_client_returns_new_client_each_call():
    """Test clients are not cached between calls."""
    first = create_ec2_client("us-east-1")
    second = create_ec2_client("us-east-1")

    assert first is not second
