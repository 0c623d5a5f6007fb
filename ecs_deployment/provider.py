import os

from aws_cdk import (
    Duration,
    Stack,
    aws_codedeploy as codedeploy,
    aws_iam as iam,
    aws_lambda as _lambda,
    aws_logs as logs,
    custom_resources as cr,
)
from constructs import Construct

HANDLERS_DIR = os.path.join(os.path.dirname(__file__), "handlers")

POWERTOOLS_LAYER_ACCOUNT = "017000801446"
POWERTOOLS_LAYER_VERSION = 7


class EcsDeploymentProvider(Construct):
    """Custom resource provider that creates and tracks a CodeDeploy deployment.

    The on-event function starts (or stops) the deployment and the
    is-complete function is polled by the Provider framework until the
    deployment reaches a terminal state or ``timeout`` elapses.
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        deployment_group: codedeploy.IEcsDeploymentGroup,
        timeout: Duration,
        log_level: str = "INFO",
        powertools_layer_version: int = POWERTOOLS_LAYER_VERSION,
    ) -> None:
        super().__init__(scope, construct_id)
        self.timeout = timeout

        powertools = _lambda.LayerVersion.from_layer_version_arn(
            self,
            "PowertoolsLayer",
            f"arn:aws:lambda:{Stack.of(self).region}:{POWERTOOLS_LAYER_ACCOUNT}"
            f":layer:AWSLambdaPowertoolsPythonV3-python312-x86_64:{powertools_layer_version}",
        )
        handlers = _lambda.Code.from_asset(
            HANDLERS_DIR, exclude=["__init__.py", "__pycache__", "*.pyc"]
        )
        environment = {
            "POWERTOOLS_SERVICE_NAME": "ecs-deployment",
            "LOG_LEVEL": log_level,
        }

        self.on_event_handler = _lambda.Function(
            self,
            "OnEventHandler",
            runtime=_lambda.Runtime.PYTHON_3_12,
            handler="on_event.handler",
            code=handlers,
            memory_size=256,
            timeout=Duration.seconds(60),
            layers=[powertools],
            environment=environment,
        )
        self.on_event_handler.add_to_role_policy(
            iam.PolicyStatement(
                actions=[
                    "codedeploy:CreateDeployment",
                    "codedeploy:GetApplicationRevision",
                    "codedeploy:RegisterApplicationRevision",
                    "codedeploy:StopDeployment",
                ],
                resources=[
                    deployment_group.deployment_group_arn,
                    deployment_group.application.application_arn,
                ],
            )
        )
        self.on_event_handler.add_to_role_policy(
            iam.PolicyStatement(
                actions=["codedeploy:GetDeploymentConfig"],
                resources=[deployment_group.deployment_config.deployment_config_arn],
            )
        )

        self.is_complete_handler = _lambda.Function(
            self,
            "IsCompleteHandler",
            runtime=_lambda.Runtime.PYTHON_3_12,
            handler="is_complete.handler",
            code=handlers,
            memory_size=256,
            timeout=Duration.seconds(60),
            layers=[powertools],
            environment=environment,
        )
        self.is_complete_handler.add_to_role_policy(
            iam.PolicyStatement(
                actions=["codedeploy:GetDeployment"],
                resources=[deployment_group.deployment_group_arn],
            )
        )

        provider = cr.Provider(
            self,
            "Provider",
            on_event_handler=self.on_event_handler,
            is_complete_handler=self.is_complete_handler,
            query_interval=Duration.seconds(15),
            total_timeout=timeout,
            log_retention=logs.RetentionDays.ONE_MONTH,
        )
        self.service_token = provider.service_token
