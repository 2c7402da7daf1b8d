# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Final, Optional

from instance_switcher.handler.environments.switcher_environment import (
    SwitcherEnvironment,
)
from instance_switcher.observability.powertools_logging import powertools_logger
from instance_switcher.scheduling.ec2 import Ec2Service
from instance_switcher.scheduling.scheduling_summary import SchedulingSummary
from instance_switcher.util import safe_json

OFFLINE_MESSAGE: Final = "Hello from Instance Switcher! [HTTP]"
FUNCTION_MESSAGE: Final = "Hello from Instance Switcher! [fn()]"

logger: Final = powertools_logger()


class ReconciliationRequestHandler:
    """
    Runs one reconciliation pass and shapes its summary as the Lambda response.

    When running offline (local development behind an HTTP emulator) the summary
    is wrapped in an HTTP response, otherwise it is returned as a plain dict that
    also echoes the triggering event.
    """

    def __init__(
        self,
        event: Mapping[str, Any],
        env: SwitcherEnvironment,
        service: Optional[Ec2Service] = None,
    ) -> None:
        self._event = event
        self._env = env
        self._service = service or Ec2Service.from_env(env)

    def handle_request(self, now: Optional[datetime] = None) -> dict[str, Any]:
        current_dt = now or datetime.now(timezone.utc)
        local_dt = current_dt.astimezone(self._env.evaluation_timezone)
        logger.info(
            f"Managing EC2 instances in {self._env.region}: start... {local_dt:%H:%M} ({self._env.evaluation_timezone})"
        )

        summary = SchedulingSummary(self._service.schedule_target(current_dt))

        for result in summary.results:
            logger.info(
                f"result for {result.instance.display_name} - {result.action_taken}",
                extra=result.to_json_log(),
            )
        if summary.errors:
            logger.warning(
                f"{len(summary.errors)} of {len(summary.results)} instances could not be aligned with their running time range"
            )
        logger.info("Managing EC2 instances: done!")

        return self.build_response(summary)

    def build_response(self, summary: SchedulingSummary) -> dict[str, Any]:
        if self._env.is_offline:
            return {
                "statusCode": 200,
                "body": safe_json({"message": OFFLINE_MESSAGE, **summary.to_dict()}),
            }
        return {"message": FUNCTION_MESSAGE, **summary.to_dict(), "event": self._event}
