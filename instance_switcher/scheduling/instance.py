# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass, field
from typing import Optional

from instance_switcher.scheduling.states import PowerState

NAME_TAG_KEY = "Name"


@dataclass(frozen=True)
class ManagedInstance:
    """Runtime information about one instance, built fresh for every pass"""

    instance_id: str
    power_state: PowerState
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def is_running(self) -> bool:
        return self.power_state == PowerState.RUNNING

    @property
    def is_in_schedulable_state(self) -> bool:
        return self.power_state.is_schedulable

    @property
    def name(self) -> Optional[str]:
        return self.tags.get(NAME_TAG_KEY)

    @property
    def display_name(self) -> str:
        return f"{self.name} [{self.instance_id}]"
