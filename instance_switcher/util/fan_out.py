# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Final, Generic, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class DispatchTimeoutError(TimeoutError):
    pass


@dataclass
class SuccessResponse(Generic[T, U]):
    successful_input: T
    response: U


@dataclass
class FailureResponse(Generic[T]):
    failed_input: T
    error: Exception


@dataclass
class FanOutResponse(Generic[T, U]):
    success_responses: list[SuccessResponse[T, U]] = field(default_factory=list)
    failure_responses: list[FailureResponse[T]] = field(default_factory=list)


def fan_out(
    inputs: Sequence[T],
    action: Callable[[T], U],
    *,
    max_workers: int = 10,
    timeout: Optional[float] = None,
) -> FanOutResponse[T, U]:
    """
    Run an action once per input, concurrently, and wait for every call to settle

    All calls are submitted up front. A call that raises only produces a failure
    response for its own input; it never cancels or hides the outcome of the
    other calls.

    When `timeout` (in seconds, for the whole batch) elapses before every call has
    settled, the unsettled inputs are reported as failures with a `DispatchTimeoutError`.
    Calls still waiting for a worker are cancelled. Calls already running cannot be
    interrupted and are abandoned to finish in the background.

    Responses are reported in input order.
    """
    if not inputs:
        return FanOutResponse()

    executor: Final = ThreadPoolExecutor(
        max_workers=max(1, min(max_workers, len(inputs))),
        thread_name_prefix="fan-out",
    )
    try:
        futures: Final[list[Future[U]]] = [
            executor.submit(action, item) for item in inputs
        ]
        wait(futures, timeout=timeout)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    result: FanOutResponse[T, U] = FanOutResponse()
    for item, future in zip(inputs, futures):
        if not future.done() or future.cancelled():
            result.failure_responses.append(
                FailureResponse(
                    failed_input=item,
                    error=DispatchTimeoutError(
                        f"No response within {timeout} seconds"
                    ),
                )
            )
            continue

        error = future.exception()
        if isinstance(error, Exception):
            result.failure_responses.append(
                FailureResponse(failed_input=item, error=error)
            )
        else:
            result.success_responses.append(
                SuccessResponse(successful_input=item, response=future.result())
            )
    return result
