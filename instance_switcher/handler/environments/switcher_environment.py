# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from os import environ
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from instance_switcher.scheduling.scheduling_decision import DEFAULT_RANGE_TAG_KEY
from instance_switcher.util import DEFAULT_API_TIMEOUT_SECONDS
from instance_switcher.util.app_env_utils import AppEnvError, env_to_bool

DEFAULT_REGION = "eu-west-1"


@dataclass(frozen=True)
class SwitcherEnvironment:
    region: str
    range_tag_key: str
    evaluation_timezone: ZoneInfo
    max_dispatch_workers: int
    dispatch_timeout_seconds: float
    api_timeout_seconds: int
    is_offline: bool

    @staticmethod
    def from_env() -> "SwitcherEnvironment":
        try:
            return SwitcherEnvironment(
                region=environ.get(
                    "SWITCHER_REGION", environ.get("AWS_REGION", DEFAULT_REGION)
                ),
                range_tag_key=environ.get("RANGE_TAG_KEY", DEFAULT_RANGE_TAG_KEY),
                evaluation_timezone=_parse_timezone(
                    environ.get("EVALUATION_TIMEZONE", "UTC")
                ),
                max_dispatch_workers=int(environ.get("MAX_DISPATCH_WORKERS", "10")),
                dispatch_timeout_seconds=float(
                    environ.get("DISPATCH_TIMEOUT_SECONDS", "60")
                ),
                api_timeout_seconds=int(
                    environ.get("API_TIMEOUT_SECONDS", str(DEFAULT_API_TIMEOUT_SECONDS))
                ),
                is_offline=env_to_bool(environ.get("IS_OFFLINE", "false")),
            )
        except ValueError as err:
            raise AppEnvError(
                f"Invalid numeric application environment variable: {err}"
            ) from err


def _parse_timezone(name: str) -> ZoneInfo:
    # ZoneInfo raises ValueError rather than ZoneInfoNotFoundError for malformed keys
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as err:
        raise AppEnvError(f'Invalid timezone: "{name}"') from err
