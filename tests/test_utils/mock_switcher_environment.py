# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from contextlib import contextmanager
from dataclasses import dataclass
from os import environ
from typing import Iterator
from unittest.mock import patch
from zoneinfo import ZoneInfo

from instance_switcher.handler.environments.switcher_environment import (
    SwitcherEnvironment,
)
from tests import DEFAULT_REGION


@dataclass(frozen=True)
class MockSwitcherEnvironment(SwitcherEnvironment):
    region: str = DEFAULT_REGION
    range_tag_key: str = "Running time range"
    evaluation_timezone: ZoneInfo = ZoneInfo("UTC")
    max_dispatch_workers: int = 4
    dispatch_timeout_seconds: float = 30
    api_timeout_seconds: int = 5
    is_offline: bool = False

    @contextmanager
    def patch_env(self, clear: bool = True) -> Iterator[None]:
        env_vars = {
            "SWITCHER_REGION": self.region,
            "RANGE_TAG_KEY": self.range_tag_key,
            "EVALUATION_TIMEZONE": str(self.evaluation_timezone),
            "MAX_DISPATCH_WORKERS": str(self.max_dispatch_workers),
            "DISPATCH_TIMEOUT_SECONDS": str(self.dispatch_timeout_seconds),
            "API_TIMEOUT_SECONDS": str(self.api_timeout_seconds),
            "IS_OFFLINE": str(self.is_offline).lower(),
        }
        with patch.dict(environ, {**environ, **env_vars}, clear=clear):
            yield
