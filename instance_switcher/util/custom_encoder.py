# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import json
from datetime import datetime, time
from enum import Enum
from typing import Any


class CustomEncoder(json.JSONEncoder):
    """
    Internal class used for serialization of types not supported in json.
    """

    def default(self, o: Any) -> Any:
        # datetimes and times of day become strings
        if isinstance(o, (datetime, time)):
            return o.isoformat()
        if isinstance(o, Enum):
            return o.value

        return json.JSONEncoder.default(self, o)
