# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Final, Optional
from zoneinfo import ZoneInfo

from instance_switcher.configuration.time_window import RangeParseError, parse_range
from instance_switcher.observability.powertools_logging import powertools_logger
from instance_switcher.scheduling.instance import ManagedInstance
from instance_switcher.scheduling.states import PowerState
from instance_switcher.util.time import is_aware

DEFAULT_RANGE_TAG_KEY: Final = "Running time range"

logger: Final = powertools_logger()


class RequestedAction(Enum):
    DO_NOTHING = "None"
    START = "Start"
    STOP = "Stop"


@dataclass(frozen=True)
class SchedulingDecision:
    instance: ManagedInstance
    action: RequestedAction
    reason: str

    def to_json_log(self) -> dict[str, str]:
        return {
            "log_type": "scheduling_decision",
            "instance": self.instance.display_name,
            "found_state": self.instance.power_state.value,
            "decision": self.action.value,
            "reason": self.reason,
        }


def decide_action(power_state: PowerState, desired_running: bool) -> RequestedAction:
    """
    diff the observed power state against the desired one

    instances that are neither running nor stopped must be filtered out before
    calling this function
    """
    match power_state:
        case PowerState.RUNNING:
            return (
                RequestedAction.DO_NOTHING if desired_running else RequestedAction.STOP
            )
        case PowerState.STOPPED:
            return (
                RequestedAction.START if desired_running else RequestedAction.DO_NOTHING
            )
        case _:
            raise ValueError(
                f"Instances in power state {power_state.value} cannot be scheduled"
            )


@dataclass(frozen=True)
class ScheduleReconciler:
    """
    Decides which instances must be started or stopped.

    Each instance may carry a tag (by default "Running time range") holding a
    daily window such as "08:00-18:30". The instance should be running while
    the current time of day, in `timezone`, is inside that window. Instances
    without the tag, or with a value that cannot be parsed, keep whatever
    state they are currently in.

    The reconciler holds no state between calls and never talks to AWS.
    """

    range_tag_key: str = DEFAULT_RANGE_TAG_KEY
    timezone: ZoneInfo = field(default_factory=lambda: ZoneInfo("UTC"))

    def evaluate(self, instance: ManagedInstance, now: datetime) -> bool:
        """return True if the instance should be running at `now`"""
        desired_running, _ = self._desired_state(instance, now)
        return desired_running

    def decide(self, instance: ManagedInstance, now: datetime) -> SchedulingDecision:
        desired_running, reason = self._desired_state(instance, now)
        return SchedulingDecision(
            instance=instance,
            action=decide_action(instance.power_state, desired_running),
            reason=reason,
        )

    def reconcile_all(
        self, instances: Iterable[ManagedInstance], now: datetime
    ) -> list[SchedulingDecision]:
        """
        compute a decision for every running or stopped instance, in input order

        instances in any other state (pending, stopping, terminated...) are skipped
        """
        decisions: list[SchedulingDecision] = []
        for instance in instances:
            if not instance.is_in_schedulable_state:
                logger.debug(
                    f"Skipping instance {instance.display_name} in state {instance.power_state.value}"
                )
                continue

            decision = self.decide(instance, now)
            if decision.action != RequestedAction.DO_NOTHING:
                self._log_state_change(decision, now)
            decisions.append(decision)
        return decisions

    def _desired_state(
        self, instance: ManagedInstance, now: datetime
    ) -> tuple[bool, str]:
        if not is_aware(now):
            raise ValueError(
                f"Attempted to evaluate instance schedules with a timezone unaware datetime: {now}"
            )

        raw_range: Optional[str] = instance.tags.get(self.range_tag_key)
        if raw_range is None:
            return (
                instance.is_running,
                f'No "{self.range_tag_key}" tag, current state is kept',
            )

        try:
            window = parse_range(raw_range)
        except RangeParseError as err:
            logger.warning(f"Instance {instance.display_name}: {err}")
            return instance.is_running, f"{err}, current state is kept"

        local_now = now.astimezone(self.timezone)
        if window.contains(local_now):
            return True, f"{local_now:%H:%M} is within {window} ({self.timezone})"
        return False, f"{local_now:%H:%M} is outside {window} ({self.timezone})"

    def _log_state_change(self, decision: SchedulingDecision, now: datetime) -> None:
        instance = decision.instance
        logger.info(
            f"Instance state change required: {instance.display_name}",
            extra={
                "range": instance.tags.get(self.range_tag_key),
                "now": f"{now.astimezone(self.timezone):%H:%M}",
                "desired_state": (
                    "should run"
                    if decision.action == RequestedAction.START
                    else "should be stopped"
                ),
                **decision.to_json_log(),
            },
        )
