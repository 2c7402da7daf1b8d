# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from enum import Enum
from typing import Optional, assert_never

from botocore.exceptions import ClientError

from instance_switcher.observability.error_codes import ErrorCode
from instance_switcher.scheduling.instance import ManagedInstance
from instance_switcher.scheduling.scheduling_decision import (
    RequestedAction,
    SchedulingDecision,
)


class SchedulingAction(Enum):
    DO_NOTHING = None
    START = "Started"
    STOP = "Stopped"
    ERROR = "Error"

    @classmethod
    def from_requested_action(
        cls, requested_action: RequestedAction
    ) -> "SchedulingAction":
        match requested_action:
            case RequestedAction.START:
                return SchedulingAction.START
            case RequestedAction.STOP:
                return SchedulingAction.STOP
            case RequestedAction.DO_NOTHING:
                return SchedulingAction.DO_NOTHING
            case _:
                assert_never(requested_action)


@dataclass(frozen=True)
class SchedulingResult:
    decision: SchedulingDecision
    action_taken: SchedulingAction
    error_code: Optional[ErrorCode] = None
    error_message: Optional[str] = None

    @property
    def instance(self) -> ManagedInstance:
        return self.decision.instance

    @property
    def is_error(self) -> bool:
        return self.action_taken == SchedulingAction.ERROR

    def to_json_log(self) -> dict[str, str]:
        return {
            "log_type": "scheduling_result",
            "instance": self.instance.display_name,
            "decision": self.decision.action.value,
            "reason": self.decision.reason,
            "action_taken": (
                str(self.action_taken.value) if self.action_taken.value else "None"
            ),
            "error_code": str(self.error_code.value) if self.error_code else "",
            "error_message": str(self.error_message),
        }

    @classmethod
    def no_action_needed(cls, decision: SchedulingDecision) -> "SchedulingResult":
        return cls(decision=decision, action_taken=SchedulingAction.DO_NOTHING)

    @classmethod
    def success(cls, decision: SchedulingDecision) -> "SchedulingResult":
        return cls(
            decision=decision,
            action_taken=SchedulingAction.from_requested_action(decision.action),
        )

    @classmethod
    def timeout(cls, decision: SchedulingDecision) -> "SchedulingResult":
        return cls(
            decision=decision,
            action_taken=SchedulingAction.ERROR,
            error_code=ErrorCode.DISPATCH_TIMEOUT,
            error_message="Request did not complete before the dispatch timeout",
        )

    @classmethod
    def client_exception(
        cls, decision: SchedulingDecision, error: Optional[Exception] = None
    ) -> "SchedulingResult":
        match decision.action:
            case RequestedAction.START:
                error_code = ErrorCode.START_FAILED
            case RequestedAction.STOP:
                error_code = ErrorCode.STOP_FAILED
            case _:
                error_code = ErrorCode.UNKNOWN_ERROR

        return cls(
            decision=decision,
            action_taken=SchedulingAction.ERROR,
            error_code=error_code,
            error_message=_describe_error(error),
        )


def _describe_error(error: Optional[Exception]) -> str:
    if error is None:
        return "Unknown Error"
    if isinstance(error, ClientError):
        return str(error)
    return f"{type(error).__name__}: {error}"
