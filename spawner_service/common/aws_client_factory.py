"""
AWS Client Factory Module
Provides region-scoped boto3 client creation for the volume service.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import boto3
from botocore.config import Config
from dotenv import load_dotenv

from spawner_service.config import AWS_ENV_FILE_VAR


def _resolve_env_path(env_path: Optional[str] = None) -> str:
    """
    Determine which .env file should be used for AWS credentials.

    Priority order:
      1. Explicit parameter
      2. AWS_ENV_FILE environment variable
      3. ~/.env
    """
    if env_path:
        return env_path
    aws_env_file = os.environ.get(AWS_ENV_FILE_VAR)
    if aws_env_file:
        return aws_env_file
    return str(Path.home() / ".env")


def load_credentials_from_env(env_path: Optional[str] = None) -> tuple[str, str]:
    """
    Load AWS credentials from a .env file.

    Args:
        env_path: Optional override path (defaults to ~/.env)

    Returns:
        tuple: (aws_access_key_id, aws_secret_access_key)

    Raises:
        ValueError: If credentials are not found in the .env file or environment
    """
    resolved_path = _resolve_env_path(env_path)
    load_dotenv(resolved_path)

    aws_access_key_id = os.getenv("AWS_ACCESS_KEY_ID")
    aws_secret_access_key = os.getenv("AWS_SECRET_ACCESS_KEY")
    if aws_access_key_id and aws_secret_access_key:
        logging.debug("AWS credentials loaded from %s", resolved_path)
        return aws_access_key_id, aws_secret_access_key

    raise ValueError(f"AWS credentials not found in {resolved_path}")


def build_client_config(timeout: Optional[float] = None) -> Optional[Config]:
    """
    Build the botocore client configuration for a single request.

    Args:
        timeout: Connect and read timeout in seconds; None keeps botocore defaults

    Returns:
        Config or None when no override is needed
    """
    if timeout is None:
        return None
    if timeout <= 0:
        raise ValueError(f"Timeout must be positive, got {timeout}")
    return Config(connect_timeout=timeout, read_timeout=timeout)


def create_client(
    service_name: str,
    region: Optional[str] = None,
    aws_access_key_id: Optional[str] = None,
    aws_secret_access_key: Optional[str] = None,
    timeout: Optional[float] = None,
):
    """
    Create a boto3 client for an AWS service.

    A fresh client is returned on every call; nothing is cached here.

    Args:
        service_name: AWS service name (e.g., 'ec2')
        region: AWS region name
        aws_access_key_id: Optional AWS access key (loads from env if not provided)
        aws_secret_access_key: Optional AWS secret key (loads from env if not provided)
        timeout: Optional per-request network timeout in seconds

    Returns:
        boto3.client: Configured AWS service client
    """
    if aws_access_key_id is None or aws_secret_access_key is None:
        aws_access_key_id, aws_secret_access_key = load_credentials_from_env()

    client_kwargs = {
        "aws_access_key_id": aws_access_key_id,
        "aws_secret_access_key": aws_secret_access_key,
    }

    session_token = os.getenv("AWS_SESSION_TOKEN")
    if session_token:
        client_kwargs["aws_session_token"] = session_token

    if region is not None:
        client_kwargs["region_name"] = region

    client_config = build_client_config(timeout)
    if client_config is not None:
        client_kwargs["config"] = client_config

    return boto3.client(service_name, **client_kwargs)


def create_ec2_client(
    region: str,
    timeout: Optional[float] = None,
    aws_access_key_id: Optional[str] = None,
    aws_secret_access_key: Optional[str] = None,
):
    """Create a region-scoped EC2 boto3 client."""
    if not region:
        raise ValueError("Region is required to create an EC2 client")
    return create_client(
        "ec2",
        region,
        aws_access_key_id=aws_access_key_id,
        aws_secret_access_key=aws_secret_access_key,
        timeout=timeout,
    )
