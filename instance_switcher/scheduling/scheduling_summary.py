# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections import Counter
from typing import Any, Iterable

from instance_switcher.scheduling.scheduling_result import (
    SchedulingAction,
    SchedulingResult,
)


class SchedulingSummary:
    results: list[SchedulingResult]

    def __init__(self, results: Iterable[SchedulingResult]) -> None:
        self.results = list(results)

    @property
    def action_counts(self) -> Counter[SchedulingAction]:
        return Counter(result.action_taken for result in self.results)

    @property
    def errors(self) -> list[SchedulingResult]:
        return [result for result in self.results if result.is_error]

    def to_dict(self) -> dict[str, Any]:
        counts = self.action_counts
        return {
            "instances_scanned": len(self.results),
            "started": counts[SchedulingAction.START],
            "stopped": counts[SchedulingAction.STOP],
            "failed": counts[SchedulingAction.ERROR],
            "results": [
                {
                    "instance": result.instance.display_name,
                    "action": result.action_taken.value,
                    "reason": result.decision.reason,
                    "error_code": (
                        result.error_code.value if result.error_code else None
                    ),
                    "error_message": result.error_message,
                }
                for result in self.results
            ],
        }
