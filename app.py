#!/usr/bin/env python3
import os

import aws_cdk as cdk

from ecs_deployment.stages.dev import DevStage

app = cdk.App()

project_name = app.node.try_get_context("project_name") or "ecs-bluegreen"

DevStage(
    app,
    "Dev",
    env=cdk.Environment(
        account=os.getenv("CDK_DEFAULT_ACCOUNT"),
        region=os.getenv("CDK_DEFAULT_REGION"),
    ),
    project_name=project_name,
    app_tags=[("project", project_name), ("environment", "dev")],
)

app.synth()
