# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import datetime
import re
import time

TIME_FORMAT = "HH:MM"

TIME_RANGE_FORMAT = f"{TIME_FORMAT}-{TIME_FORMAT}"
"""human-readable range format that can be displayed to users if an input fails is_valid_time_range_str"""

# ascii digits only, \d would also accept other unicode decimal digits
_TIME_PATTERN = r"([01]?[0-9]|2[0-3]):[0-5][0-9]"


def is_valid_time_range_str(rangestr: str) -> bool:
    """
    verify that a string is two times separated by a single hyphen (eg. "9:00-17:30")

    hours may be one or two digits, minutes are always two digits
    """
    return re.fullmatch(f"{_TIME_PATTERN}-{_TIME_PATTERN}", rangestr) is not None


def parse_time_str(timestr: str) -> datetime.time:
    """
    Standardised method to build time object instance from time string
    :param timestr: string in format as defined in TIME_FORMAT
    :return: time object from time string
    """
    try:
        tm = time.strptime(timestr, "%H:%M")
    except ValueError:
        raise ValueError(f"Invalid time string {timestr}, must match {TIME_FORMAT}")
    return datetime.time(tm.tm_hour, tm.tm_min, 0)
