# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from datetime import datetime, time

from instance_switcher.configuration.time_utils import (
    TIME_RANGE_FORMAT,
    is_valid_time_range_str,
    parse_time_str,
)


class RangeParseError(ValueError):
    pass


class BadRangeFormat(RangeParseError):
    pass


class InvertedRange(RangeParseError):
    pass


@dataclass(frozen=True)
class TimeWindow:
    """
    A daily running window between two times of day.

    Both ends are inclusive and the window never wraps past midnight, so
    `end` may equal `begin` but may not be earlier than it.
    """

    begin: time
    end: time

    def __post_init__(self) -> None:
        if self.end < self.begin:
            raise InvertedRange(
                f"End time {self.end:%H:%M} must not be before start time {self.begin:%H:%M}"
            )

    def contains(self, moment: datetime) -> bool:
        """
        check the time of day of `moment` against the window, ignoring the date

        `moment` must already be expressed in the timezone the window is evaluated in.
        seconds are dropped so that the whole minute named by `end` is inside the window
        """
        time_of_day = moment.time().replace(second=0, microsecond=0)
        return self.begin <= time_of_day <= self.end

    def __str__(self) -> str:
        return f"{self.begin:%H:%M}-{self.end:%H:%M}"


def parse_range(raw: str) -> TimeWindow:
    """
    parse a running time range tag value such as "08:30-18:00"

    :raises BadRangeFormat: the value does not match TIME_RANGE_FORMAT
    :raises InvertedRange: the end of the range is before its start
    """
    if not is_valid_time_range_str(raw):
        raise BadRangeFormat(
            f'Invalid range "{raw}". Unknown format, must match {TIME_RANGE_FORMAT}'
        )

    begin_str, end_str = raw.split("-")
    try:
        return TimeWindow(begin=parse_time_str(begin_str), end=parse_time_str(end_str))
    except InvertedRange as err:
        raise InvertedRange(f'Invalid range "{raw}". {err}') from err
