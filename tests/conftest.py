"""Shared test fixtures."""

from __future__ import annotations

import os
from dataclasses import dataclass

import pytest
from aws_cdk import App, Stack
from aws_cdk import aws_codedeploy as codedeploy

# handler modules create their boto3 client at import time
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")


@dataclass
class LambdaContext:
    function_name: str = "ecs-deployment-test"
    memory_limit_in_mb: int = 256
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:ecs-deployment-test"
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"


@pytest.fixture
def lambda_context() -> LambdaContext:
    return LambdaContext()


@pytest.fixture
def stack() -> Stack:
    return Stack(App(), "TestStack")


@pytest.fixture
def deployment_group(stack: Stack) -> codedeploy.IEcsDeploymentGroup:
    """Imported group with application app1, config cfg1 and name grp1."""
    return codedeploy.EcsDeploymentGroup.from_ecs_deployment_group_attributes(
        stack,
        "Group",
        application=codedeploy.EcsApplication.from_ecs_application_name(stack, "App", "app1"),
        deployment_group_name="grp1",
        deployment_config=codedeploy.EcsDeploymentConfig.from_ecs_deployment_config_name(
            stack, "Config", "cfg1"
        ),
    )
