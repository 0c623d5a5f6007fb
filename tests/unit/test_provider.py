"""Unit tests for the EcsDeploymentProvider construct."""

from __future__ import annotations

from aws_cdk import Duration
from aws_cdk.assertions import Match, Template

from ecs_deployment import EcsDeploymentProvider


class TestEcsDeploymentProvider:
    def test_handlers(self, stack, deployment_group) -> None:
        EcsDeploymentProvider(
            stack, "Provider", deployment_group=deployment_group, timeout=Duration.minutes(30)
        )
        template = Template.from_stack(stack)
        for handler in ("on_event.handler", "is_complete.handler"):
            template.has_resource_properties(
                "AWS::Lambda::Function",
                {
                    "Handler": handler,
                    "Runtime": "python3.12",
                    "Timeout": 60,
                    "Environment": {
                        "Variables": {
                            "POWERTOOLS_SERVICE_NAME": "ecs-deployment",
                            "LOG_LEVEL": "INFO",
                        }
                    },
                },
            )

    def test_handlers_share_one_asset(self, stack, deployment_group) -> None:
        EcsDeploymentProvider(
            stack, "Provider", deployment_group=deployment_group, timeout=Duration.minutes(30)
        )
        functions = Template.from_stack(stack).find_resources("AWS::Lambda::Function")
        codes = [
            resource["Properties"]["Code"]
            for resource in functions.values()
            if resource["Properties"].get("Handler") in ("on_event.handler", "is_complete.handler")
        ]
        assert len(codes) == 2
        assert codes[0] == codes[1]

    def test_polls_until_timeout(self, stack, deployment_group) -> None:
        provider = EcsDeploymentProvider(
            stack, "Provider", deployment_group=deployment_group, timeout=Duration.minutes(45)
        )
        assert provider.timeout.to_minutes() == 45
        assert provider.service_token
        Template.from_stack(stack).resource_count_is("AWS::StepFunctions::StateMachine", 1)

    def test_codedeploy_permissions(self, stack, deployment_group) -> None:
        EcsDeploymentProvider(
            stack, "Provider", deployment_group=deployment_group, timeout=Duration.minutes(30)
        )
        template = Template.from_stack(stack)
        template.has_resource_properties(
            "AWS::IAM::Policy",
            {
                "PolicyDocument": {
                    "Statement": Match.array_with(
                        [
                            Match.object_like(
                                {
                                    "Action": Match.array_with(
                                        ["codedeploy:CreateDeployment", "codedeploy:StopDeployment"]
                                    ),
                                    "Effect": "Allow",
                                }
                            ),
                            Match.object_like({"Action": "codedeploy:GetDeploymentConfig"}),
                        ]
                    )
                }
            },
        )
        template.has_resource_properties(
            "AWS::IAM::Policy",
            {
                "PolicyDocument": {
                    "Statement": Match.array_with(
                        [Match.object_like({"Action": "codedeploy:GetDeployment"})]
                    )
                }
            },
        )
