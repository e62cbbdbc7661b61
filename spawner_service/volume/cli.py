"""
Command-line interface for EBS volume operations.

Prints each response as JSON; partial responses are printed before the error.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional

from spawner_service.common.aws_client_factory import create_ec2_client, load_credentials_from_env
from spawner_service.config import (
    DEFAULT_CALL_TIMEOUT,
    DEFAULT_VOLUME_TYPE,
    LOG_FORMAT,
    get_default_region,
)

from .controller import ClientFactory, VolumeController
from .exceptions import InvalidVolumeRequestError, VolumeOperationError
from .models import (
    CreateSnapshotAndDeleteRequest,
    CreateSnapshotRequest,
    CreateVolumeRequest,
    DeleteVolumeRequest,
)

EXIT_OK = 0
EXIT_ERROR = 1


def make_client_factory(env_path: Optional[str] = None) -> ClientFactory:
    """Return a client factory that reads credentials from the given .env file."""

    def _factory(region: str, timeout: Optional[float] = None):
        aws_access_key_id, aws_secret_access_key = load_credentials_from_env(env_path)
        return create_ec2_client(
            region,
            timeout=timeout,
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
        )

    return _factory


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid timeout: {value!r}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError("timeout must be positive")
    return number


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add region argument shared by every command."""
    parser.add_argument(
        "--region",
        default=get_default_region(),
        help="AWS region (default: $SPAWNER_DEFAULT_REGION or $AWS_DEFAULT_REGION).",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="spawner-volumes",
        description="Create and delete EBS volumes and snapshots.",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=DEFAULT_CALL_TIMEOUT,
        help="Network timeout in seconds for each EC2 call.",
    )
    parser.add_argument("--env-file", help="Path to the .env file with AWS credentials.")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Create a volume.")
    add_common_arguments(create)
    create.add_argument("--availability-zone", required=True, help="e.g. us-east-1a")
    create.add_argument(
        "--volume-type",
        default=DEFAULT_VOLUME_TYPE,
        help=f"EBS volume type (default: {DEFAULT_VOLUME_TYPE}).",
    )
    create.add_argument("--size", type=int, required=True, help="Size in GiB.")
    create.add_argument("--snapshot-id", default="", help="Optional source snapshot.")

    for name, help_text in (
        ("delete", "Delete a volume."),
        ("snapshot", "Create a snapshot of a volume."),
        ("snapshot-delete", "Snapshot a volume, then delete it."),
    ):
        command = subparsers.add_parser(name, help=help_text)
        add_common_arguments(command)
        command.add_argument("volume_id", help="EBS volume id (vol-...).")

    return parser


def run_command(args: argparse.Namespace, controller: VolumeController):
    """Dispatch parsed arguments to the matching controller operation."""
    if args.command == "create":
        request = CreateVolumeRequest(
            region=args.region,
            availability_zone=args.availability_zone,
            volume_type=args.volume_type,
            size=args.size,
            snapshot_id=args.snapshot_id,
        )
        return controller.create_volume(request, timeout=args.timeout)
    if args.command == "delete":
        return controller.delete_volume(
            DeleteVolumeRequest(region=args.region, volume_id=args.volume_id), timeout=args.timeout
        )
    if args.command == "snapshot":
        return controller.create_snapshot(
            CreateSnapshotRequest(region=args.region, volume_id=args.volume_id), timeout=args.timeout
        )
    return controller.create_snapshot_and_delete(
        CreateSnapshotAndDeleteRequest(region=args.region, volume_id=args.volume_id),
        timeout=args.timeout,
    )


def main(argv: list[str] | None = None, controller: Optional[VolumeController] = None) -> int:
    """Main entry point for the volume CLI."""
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    if not args.region:
        parser.error("--region is required (or set SPAWNER_DEFAULT_REGION / AWS_DEFAULT_REGION)")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    if controller is None:
        controller = VolumeController(client_factory=make_client_factory(args.env_file))

    try:
        response = run_command(args, controller)
    except InvalidVolumeRequestError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except VolumeOperationError as e:
        if e.response is not None:
            print(json.dumps(e.response.to_dict()))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    print(json.dumps(response.to_dict()))
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    raise SystemExit(main())
