"""
Configuration for the spawner volume service.

Values can be overridden through environment variables; AWS credentials
themselves are read from a .env file by the client factory.
"""

from __future__ import annotations

import os
from typing import Optional

# Environment variable pointing at the .env file holding AWS credentials
AWS_ENV_FILE_VAR: str = "AWS_ENV_FILE"

# Region used by the CLI when --region is not given
REGION_ENV_VARS: tuple[str, ...] = ("SPAWNER_DEFAULT_REGION", "AWS_DEFAULT_REGION")

# EBS defaults
DEFAULT_VOLUME_TYPE: str = "gp2"  # Options: gp2, gp3, io1, io2, st1, sc1, standard

# Network timeout (seconds) for EC2 calls; None keeps botocore's defaults
DEFAULT_CALL_TIMEOUT: Optional[float] = None

LOG_FORMAT: str = "%(levelname)s %(name)s %(message)s"


def get_default_region() -> Optional[str]:
    """Return the first region configured in the environment, if any."""
    for name in REGION_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None
