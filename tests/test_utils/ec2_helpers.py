# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from typing import TYPE_CHECKING, Optional

import boto3

from tests import DEFAULT_REGION
from tests.conftest import get_ami

if TYPE_CHECKING:
    from mypy_boto3_ec2.client import EC2Client
    from mypy_boto3_ec2.literals import InstanceStateNameType
    from mypy_boto3_ec2.type_defs import TagTypeDef
else:
    EC2Client = object
    InstanceStateNameType = object
    TagTypeDef = object


def create_ec2_instances(
    count: int,
    running_time_range: Optional[str] = None,
    name: Optional[str] = None,
    region: str = DEFAULT_REGION,
) -> tuple[str, ...]:
    ec2_client: EC2Client = boto3.client("ec2", region_name=region)
    create_response = ec2_client.run_instances(
        ImageId=get_ami(region),
        MinCount=count,
        MaxCount=count,
        InstanceType="t2.micro",
    )
    instance_ids = [instance["InstanceId"] for instance in create_response["Instances"]]

    tags: list[TagTypeDef] = []
    if running_time_range is not None:
        tags.append({"Key": "Running time range", "Value": running_time_range})
    if name is not None:
        tags.append({"Key": "Name", "Value": name})
    if tags:
        ec2_client.create_tags(Resources=instance_ids, Tags=tags)

    return tuple(instance_ids)


def stop_ec2_instances(*instance_ids: str, region: str = DEFAULT_REGION) -> None:
    ec2_client: EC2Client = boto3.client("ec2", region_name=region)
    ec2_client.stop_instances(InstanceIds=instance_ids)


def terminate_ec2_instances(*instance_ids: str, region: str = DEFAULT_REGION) -> None:
    ec2_client: EC2Client = boto3.client("ec2", region_name=region)
    ec2_client.terminate_instances(InstanceIds=instance_ids)


def get_current_state(
    instance_id: str, region: str = DEFAULT_REGION
) -> InstanceStateNameType:
    ec2_client: EC2Client = boto3.client("ec2", region_name=region)
    describe_response = ec2_client.describe_instance_status(
        InstanceIds=[instance_id], IncludeAllInstances=True
    )
    return describe_response["InstanceStatuses"][0]["InstanceState"]["Name"]
