# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from collections.abc import Iterator
from os import environ
from typing import TYPE_CHECKING, Final, Optional
from unittest.mock import patch

import boto3
from moto import mock_aws
from pytest import fixture

from tests import DEFAULT_REGION
from tests.test_utils.mock_switcher_environment import MockSwitcherEnvironment

if TYPE_CHECKING:
    from mypy_boto3_ec2.client import EC2Client
    from mypy_boto3_ec2.type_defs import FilterTypeDef
else:
    EC2Client = object
    FilterTypeDef = object


@fixture(autouse=True)
def aws_credentials() -> Iterator[None]:
    creds = {
        "AWS_ACCESS_KEY_ID": "testing",
        "AWS_SECRET_ACCESS_KEY": "testing",
        "AWS_SECURITY_TOKEN": "testing",
        "AWS_SESSION_TOKEN": "testing",
        "AWS_DEFAULT_REGION": DEFAULT_REGION,
    }
    with patch.dict(environ, creds, clear=True):
        yield


@fixture
def moto_backend() -> Iterator[None]:
    with mock_aws():
        yield


def get_ami(region: str = DEFAULT_REGION) -> str:
    ec2: Final[EC2Client] = boto3.client("ec2", region_name=region)
    paginator: Final = ec2.get_paginator("describe_images")
    filters: Final[list[FilterTypeDef]] = [
        {"Name": "name", "Values": ["al2023-ami-minimal-*-arm64"]},
    ]
    image_id: Optional[str] = None
    for page in paginator.paginate(Filters=filters, Owners=["amazon"]):
        if page["Images"]:
            image_id = page["Images"][0]["ImageId"]
            break
    if not image_id:
        raise ValueError("No AMI found")
    return image_id


@fixture
def ami(moto_backend: None) -> Iterator[str]:
    yield get_ami()


@fixture
def ec2_client(moto_backend: None) -> EC2Client:
    client: EC2Client = boto3.client("ec2", region_name=DEFAULT_REGION)
    return client


@fixture
def switcher_env() -> Iterator[MockSwitcherEnvironment]:
    env = MockSwitcherEnvironment()
    with env.patch_env(clear=False):
        yield env
