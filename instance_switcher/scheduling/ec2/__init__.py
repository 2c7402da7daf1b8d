# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from instance_switcher.scheduling.ec2.ec2 import Ec2Service

__all__ = ["Ec2Service"]
