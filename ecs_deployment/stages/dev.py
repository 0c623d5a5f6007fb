# -*- coding: utf-8 -*-
from aws_cdk import Environment, Stage, Tags
from constructs import Construct

from ecs_deployment.stacks.ecs_bluegreen_stack import EcsBlueGreenStack


class DevStage(Stage):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        env: Environment,
        project_name: str,
        app_tags: list[tuple[str, str]],
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, env=env, **kwargs)
        deploy_environment = "dev"

        self.ecs_bg_stack = EcsBlueGreenStack(
            self,
            f"{project_name}-{deploy_environment}-ecs-blue-green",
            deployment_description=f"{project_name} {deploy_environment} deployment",
        )
        for key, value in app_tags:
            Tags.of(self.ecs_bg_stack).add(key, value)
