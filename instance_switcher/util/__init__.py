# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import json as _json
from os import environ
from typing import Any as _Any

from botocore.config import Config as _Config

from instance_switcher.util.custom_encoder import CustomEncoder as _CustomEncoder

DEFAULT_USER_AGENT_EXTRA = "instance-switcher"
DEFAULT_API_TIMEOUT_SECONDS = 10


def safe_json(d: _Any, indent: int = 0) -> str:
    """
    Returns a json document, using a custom encoder that converts all data types not supported by json
    :param d: input dictionary
    :param indent: indent level for output document
    :return: json document for input dictionary
    """
    return _json.dumps(d, cls=_CustomEncoder, indent=indent)


def get_boto_config(api_timeout_seconds: int = DEFAULT_API_TIMEOUT_SECONDS) -> _Config:
    """
    Returns a boto3 config with standard retries, `user_agent_extra` and connect/read timeouts

    the timeouts bound every single api call so that a hanging endpoint fails the call
    instead of blocking the reconciliation pass
    """
    return _Config(
        retries={"max_attempts": 5, "mode": "standard"},
        user_agent_extra=environ.get("USER_AGENT_EXTRA", DEFAULT_USER_AGENT_EXTRA),
        connect_timeout=api_timeout_seconds,
        read_timeout=api_timeout_seconds,
    )
