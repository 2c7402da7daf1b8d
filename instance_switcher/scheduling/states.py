# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from enum import Enum


class PowerState(str, Enum):
    """observed power state of an instance, only RUNNING and STOPPED are schedulable"""

    RUNNING = "running"
    STOPPED = "stopped"
    OTHER = "other"

    @property
    def is_schedulable(self) -> bool:
        return self in (PowerState.RUNNING, PowerState.STOPPED)
