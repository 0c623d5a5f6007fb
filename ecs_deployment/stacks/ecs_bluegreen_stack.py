import json
from typing import Optional

from aws_cdk import (
    Stack,
    Duration,
    RemovalPolicy,
    aws_ec2 as ec2,
    aws_ecs as ecs,
    aws_elasticloadbalancingv2 as elbv2,
    aws_logs as logs,
    aws_codedeploy as codedeploy,
    CfnOutput,
)
from constructs import Construct

from ecs_deployment.deployment import EcsDeployment
from ecs_deployment.props import EcsDeploymentProps


class EcsBlueGreenStack(Stack):
    """Fargate service behind an ALB, shipped through a CodeDeploy blue/green deployment."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        image: str = "public.ecr.aws/nginx/nginx:stable",
        deployment_description: Optional[str] = None,
        deployment_timeout: Optional[Duration] = None,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        vpc = ec2.Vpc(self, "Vpc", max_azs=2, nat_gateways=1)
        cluster = ecs.Cluster(self, "Cluster", vpc=vpc)

        log_group = logs.LogGroup(
            self,
            "AppLogGroup",
            retention=logs.RetentionDays.ONE_MONTH,
            removal_policy=RemovalPolicy.DESTROY,
        )

        task_def = ecs.FargateTaskDefinition(self, "TaskDef", cpu=512, memory_limit_mib=1024)
        container = task_def.add_container(
            "AppContainer",
            image=ecs.ContainerImage.from_registry(image),
            logging=ecs.LogDrivers.aws_logs(stream_prefix="app", log_group=log_group),
        )
        container_port = 80
        container.add_port_mappings(ecs.PortMapping(container_port=container_port))

        # ALB with listeners (prod + test)
        alb = elbv2.ApplicationLoadBalancer(self, "Alb", vpc=vpc, internet_facing=True)

        blue_tg = self._target_group("BlueTG", vpc, container_port)
        green_tg = self._target_group("GreenTG", vpc, container_port)

        prod_listener = alb.add_listener(
            "ProdListener", port=80, open=True, default_target_groups=[blue_tg]
        )
        test_listener = alb.add_listener(
            "TestListener",
            port=9001,
            protocol=elbv2.ApplicationProtocol.HTTP,
            open=True,
            default_target_groups=[green_tg],
        )

        service = ecs.FargateService(
            self,
            "Service",
            cluster=cluster,
            task_definition=task_def,
            desired_count=2,
            assign_public_ip=True,
            deployment_controller=ecs.DeploymentController(
                type=ecs.DeploymentControllerType.CODE_DEPLOY
            ),
            health_check_grace_period=Duration.seconds(60),
        )
        blue_tg.add_target(service)

        application = codedeploy.EcsApplication(self, "EcsCodeDeployApp")
        deployment_group = codedeploy.EcsDeploymentGroup(
            self,
            "EcsDeploymentGroup",
            application=application,
            service=service,
            deployment_config=codedeploy.EcsDeploymentConfig.ALL_AT_ONCE,
            blue_green_deployment_config=codedeploy.EcsBlueGreenDeploymentConfig(
                blue_target_group=blue_tg,
                green_target_group=green_tg,
                listener=prod_listener,
                test_listener=test_listener,
                termination_wait_time=Duration.minutes(5),
            ),
        )

        appspec = json.dumps(
            {
                "version": "0.0",
                "Resources": [
                    {
                        "TargetService": {
                            "Type": "AWS::ECS::Service",
                            "Properties": {
                                "TaskDefinition": task_def.task_definition_arn,
                                "LoadBalancerInfo": {
                                    "ContainerName": container.container_name,
                                    "ContainerPort": container_port,
                                },
                            },
                        }
                    }
                ],
            }
        )

        self.deployment = EcsDeployment.for_deployment_group(
            EcsDeploymentProps(
                deployment_group=deployment_group,
                appspec=appspec,
                auto_rollback=codedeploy.AutoRollbackConfig(
                    failed_deployment=True,
                    stopped_deployment=True,
                ),
                description=deployment_description,
                timeout=deployment_timeout,
            )
        )

        CfnOutput(self, "ClusterName", value=cluster.cluster_name)
        CfnOutput(self, "ServiceName", value=service.service_name)
        CfnOutput(self, "AlbDns", value=alb.load_balancer_dns_name)
        CfnOutput(self, "CodeDeployApplicationName", value=application.application_name)
        CfnOutput(self, "CodeDeployDeploymentGroupName", value=deployment_group.deployment_group_name)
        CfnOutput(self, "DeploymentId", value=self.deployment.deployment_id)

    def _target_group(self, construct_id: str, vpc: ec2.IVpc, port: int) -> elbv2.ApplicationTargetGroup:
        return elbv2.ApplicationTargetGroup(
            self,
            construct_id,
            vpc=vpc,
            target_type=elbv2.TargetType.IP,
            port=port,
            protocol=elbv2.ApplicationProtocol.HTTP,
            health_check=elbv2.HealthCheck(
                path="/", healthy_http_codes="200-399", interval=Duration.seconds(20)
            ),
        )
