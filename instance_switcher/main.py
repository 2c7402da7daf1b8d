# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import traceback
from collections.abc import Mapping
from time import time
from typing import TYPE_CHECKING, Any

from instance_switcher import __version__
from instance_switcher.handler.environments.switcher_environment import (
    SwitcherEnvironment,
)
from instance_switcher.handler.reconciliation_request import (
    ReconciliationRequestHandler,
)
from instance_switcher.observability.powertools_logging import (
    powertools_logger,
    should_log_events,
)
from instance_switcher.util import safe_json

if TYPE_CHECKING:
    from aws_lambda_powertools.utilities.typing import LambdaContext
else:
    LambdaContext = object

logger = powertools_logger()


@logger.inject_lambda_context(log_event=should_log_events(logger))
def lambda_handler(event: Mapping[str, Any], context: LambdaContext) -> Any:
    env = SwitcherEnvironment.from_env()

    logger.info(f"InstanceSwitcher, version {__version__}")

    start = time()
    try:
        result = ReconciliationRequestHandler(event, env).handle_request()
    except Exception as e:
        logger.error(
            f"Error handling request {safe_json(event)}: ({e})\n{traceback.format_exc()}",
        )
        raise
    execution_time = round(float((time() - start)), 3)
    logger.info(f"Handling took {execution_time} seconds")
    return result
