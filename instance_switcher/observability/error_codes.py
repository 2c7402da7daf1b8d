# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from enum import Enum


class ErrorCode(str, Enum):
    START_FAILED = "StartFailed"
    STOP_FAILED = "StopFailed"
    DISPATCH_TIMEOUT = "DispatchTimeout"
    UNKNOWN_ERROR = "UnknownError"
