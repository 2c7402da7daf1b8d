# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Iterator, Sequence
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING, Final, Optional

from instance_switcher.boto_retry import get_client_with_standard_retry
from instance_switcher.handler.environments.switcher_environment import (
    SwitcherEnvironment,
)
from instance_switcher.observability.powertools_logging import powertools_logger
from instance_switcher.scheduling.instance import ManagedInstance
from instance_switcher.scheduling.scheduling_decision import (
    RequestedAction,
    ScheduleReconciler,
    SchedulingDecision,
)
from instance_switcher.scheduling.scheduling_result import SchedulingResult
from instance_switcher.scheduling.states import PowerState
from instance_switcher.util.fan_out import DispatchTimeoutError, fan_out

if TYPE_CHECKING:
    from mypy_boto3_ec2.client import EC2Client
    from mypy_boto3_ec2.type_defs import (
        InstanceTypeDef,
        StartInstancesResultTypeDef,
        StopInstancesResultTypeDef,
    )
else:
    EC2Client = object
    InstanceTypeDef = object
    StartInstancesResultTypeDef = object
    StopInstancesResultTypeDef = object


class EC2StateCode(IntEnum):
    PENDING = 0x00
    RUNNING = 0x10
    SHUTTING_DOWN = 0x20
    TERMINATED = 0x30
    STOPPING = 0x40
    STOPPED = 0x50


def get_tags(instance: InstanceTypeDef) -> dict[str, str]:
    return {tag["Key"]: tag["Value"] for tag in instance.get("Tags", [])}


def get_power_state(instance: InstanceTypeDef) -> PowerState:
    # the high byte of the state code is reserved for internal use by EC2
    match instance["State"]["Code"] & 0xFF:
        case EC2StateCode.RUNNING:
            return PowerState.RUNNING
        case EC2StateCode.STOPPED:
            return PowerState.STOPPED
        case _:
            return PowerState.OTHER


logger: Final = powertools_logger()


class Ec2Service:
    """
    Lists the EC2 instances of one region and aligns their power state with the
    decisions of a `ScheduleReconciler`.

    Start and stop requests are sent one instance at a time and concurrently, so
    a failure for one instance never affects the others.
    """

    def __init__(
        self,
        ec2_client: EC2Client,
        reconciler: ScheduleReconciler,
        *,
        max_workers: int = 10,
        dispatch_timeout_seconds: Optional[float] = None,
    ) -> None:
        self.ec2_client: Final = ec2_client
        self.reconciler: Final = reconciler
        self.max_workers: Final = max_workers
        self.dispatch_timeout_seconds: Final = dispatch_timeout_seconds

    @classmethod
    def from_env(cls, env: SwitcherEnvironment) -> "Ec2Service":
        return cls(
            get_client_with_standard_retry(
                "ec2", region=env.region, api_timeout_seconds=env.api_timeout_seconds
            ),
            ScheduleReconciler(
                range_tag_key=env.range_tag_key, timezone=env.evaluation_timezone
            ),
            max_workers=env.max_dispatch_workers,
            dispatch_timeout_seconds=env.dispatch_timeout_seconds,
        )

    def schedule_target(self, now: datetime) -> Iterator[SchedulingResult]:
        """run a complete reconciliation pass for all instances in the region"""
        instances: Final = list(self.describe_instances())
        logger.info(f"Found {len(instances)} EC2 instances")

        yield from self.dispatch(self.reconciler.reconcile_all(instances, now))

    def describe_instances(self) -> Iterator[ManagedInstance]:
        """describe every EC2 instance in the region, whatever its state"""
        paginator: Final = self.ec2_client.get_paginator("describe_instances")
        for page in paginator.paginate():
            for reservation in page.get("Reservations", []):
                for instance in reservation.get("Instances", []):
                    managed_instance = ManagedInstance(
                        instance_id=instance["InstanceId"],
                        power_state=get_power_state(instance),
                        tags=get_tags(instance),
                    )
                    logger.debug(
                        f'Found EC2 instance {managed_instance.display_name} in state "{instance["State"]["Name"]}"'
                    )
                    yield managed_instance

    def start_instance(self, instance_id: str) -> StartInstancesResultTypeDef:
        return self.ec2_client.start_instances(InstanceIds=[instance_id])

    def stop_instance(self, instance_id: str) -> StopInstancesResultTypeDef:
        return self.ec2_client.stop_instances(InstanceIds=[instance_id])

    def dispatch(
        self, decisions: Sequence[SchedulingDecision]
    ) -> Iterator[SchedulingResult]:
        """
        carry out all decisions and yield one result per decision, in decision order

        yields only once every start/stop request has settled
        """
        results: dict[str, SchedulingResult] = {}

        actionable: Final = [
            d for d in decisions if d.action != RequestedAction.DO_NOTHING
        ]
        responses: Final = fan_out(
            actionable,
            self._execute,
            max_workers=self.max_workers,
            timeout=self.dispatch_timeout_seconds,
        )

        for success in responses.success_responses:
            decision = success.successful_input
            logger.info(
                f"{decision.action.value} request accepted for {decision.instance.display_name}"
            )
            results[decision.instance.instance_id] = SchedulingResult.success(decision)

        for failure in responses.failure_responses:
            decision = failure.failed_input
            if isinstance(failure.error, DispatchTimeoutError):
                logger.error(
                    f"Timed out on {decision.action.value.lower()} of EC2 instance {decision.instance.display_name}"
                )
                result = SchedulingResult.timeout(decision)
            else:
                logger.error(
                    f"Failed to {decision.action.value.lower()} EC2 instance {decision.instance.display_name}: {failure.error}"
                )
                result = SchedulingResult.client_exception(
                    decision, error=failure.error
                )
            results[decision.instance.instance_id] = result

        for decision in decisions:
            if decision.action == RequestedAction.DO_NOTHING:
                yield SchedulingResult.no_action_needed(decision)
            else:
                yield results[decision.instance.instance_id]

    def _execute(
        self, decision: SchedulingDecision
    ) -> StartInstancesResultTypeDef | StopInstancesResultTypeDef:
        instance_id: Final = decision.instance.instance_id
        match decision.action:
            case RequestedAction.START:
                logger.info(f"Starting: {decision.instance.display_name}")
                return self.start_instance(instance_id)
            case RequestedAction.STOP:
                logger.info(f"Stopping: {decision.instance.display_name}")
                return self.stop_instance(instance_id)
            case _:
                raise ValueError(f"Nothing to execute for decision {decision}")
