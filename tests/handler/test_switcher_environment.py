# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import os
from unittest.mock import patch
from zoneinfo import ZoneInfo

import pytest

from instance_switcher.handler.environments.switcher_environment import (
    SwitcherEnvironment,
)
from instance_switcher.util.app_env_utils import AppEnvError
from tests.test_utils.mock_switcher_environment import MockSwitcherEnvironment


def test_env_defaults() -> None:
    with patch.dict(os.environ, {}, clear=True):
        env = SwitcherEnvironment.from_env()

    assert env == SwitcherEnvironment(
        region="eu-west-1",
        range_tag_key="Running time range",
        evaluation_timezone=ZoneInfo("UTC"),
        max_dispatch_workers=10,
        dispatch_timeout_seconds=60.0,
        api_timeout_seconds=10,
        is_offline=False,
    )


def test_region_falls_back_to_lambda_region() -> None:
    with patch.dict(os.environ, {"AWS_REGION": "ap-southeast-2"}, clear=True):
        assert SwitcherEnvironment.from_env().region == "ap-southeast-2"


def test_env_round_trip() -> None:
    expected_env = MockSwitcherEnvironment(
        region="us-west-2",
        range_tag_key="office-hours",
        evaluation_timezone=ZoneInfo("Europe/Dublin"),
        max_dispatch_workers=3,
        dispatch_timeout_seconds=12.5,
        api_timeout_seconds=2,
        is_offline=True,
    )

    with expected_env.patch_env():
        env = SwitcherEnvironment.from_env()

    assert env.region == "us-west-2"
    assert env.range_tag_key == "office-hours"
    assert env.evaluation_timezone == ZoneInfo("Europe/Dublin")
    assert env.max_dispatch_workers == 3
    assert env.dispatch_timeout_seconds == 12.5
    assert env.api_timeout_seconds == 2
    assert env.is_offline is True


@pytest.mark.parametrize("tz_name", ["Mars/Olympus_Mons", "", "../x", "/etc/passwd"])
def test_invalid_timezone_raises_app_env_error(tz_name: str) -> None:
    with patch.dict(os.environ, {"EVALUATION_TIMEZONE": tz_name}):
        with pytest.raises(AppEnvError, match="Invalid timezone") as exc_info:
            SwitcherEnvironment.from_env()

    assert "numeric" not in str(exc_info.value)


def test_invalid_number_raises_app_env_error() -> None:
    with patch.dict(os.environ, {"MAX_DISPATCH_WORKERS": "many"}):
        with pytest.raises(AppEnvError, match="Invalid numeric"):
            SwitcherEnvironment.from_env()
