from typing import Any, Dict, List, Optional, Tuple

from aws_cdk import CustomResource, Token
from aws_cdk import aws_codedeploy as codedeploy
from constructs import Construct

from ecs_deployment.errors import DeploymentAlreadyExistsError
from ecs_deployment.props import EcsDeploymentProps
from ecs_deployment.provider import EcsDeploymentProvider

DEPLOYMENT_ID = "Deployment"
RESOURCE_TYPE = "Custom::EcsDeployment"

STOP_ON_ALARM = "DEPLOYMENT_STOP_ON_ALARM"
FAILURE = "DEPLOYMENT_FAILURE"
STOP_ON_REQUEST = "DEPLOYMENT_STOP_ON_REQUEST"


def rollback_trigger_events(
    auto_rollback: Optional[codedeploy.AutoRollbackConfig],
) -> List[str]:
    """Events that trigger an automatic rollback, always in alarm, failure, stopped order."""
    events: List[str] = []
    if auto_rollback is None:
        return events
    if auto_rollback.deployment_in_alarm:
        events.append(STOP_ON_ALARM)
    if auto_rollback.failed_deployment:
        events.append(FAILURE)
    if auto_rollback.stopped_deployment:
        events.append(STOP_ON_REQUEST)
    return events


def build_deployment_request(
    deployment_group: codedeploy.IEcsDeploymentGroup,
    appspec: Any,
    auto_rollback: Optional[codedeploy.AutoRollbackConfig] = None,
    description: Optional[str] = None,
) -> Dict[str, Optional[str]]:
    """Property bag read by the on-event handler of EcsDeploymentProvider.

    Key names and the comma separated events string are parsed by the
    handler and must not change.
    """
    events = rollback_trigger_events(auto_rollback)
    return {
        "applicationName": deployment_group.application.application_name,
        "deploymentConfigName": deployment_group.deployment_config.deployment_config_name,
        "deploymentGroupName": deployment_group.deployment_group_name,
        "autoRollbackConfigurationEnabled": str(len(events) > 0).lower(),
        "autoRollbackConfigurationEvents": ",".join(events),
        "description": description,
        "revisionAppSpecContent": str(appspec),
    }


def deployment_scope(deployment_group: codedeploy.IEcsDeploymentGroup) -> Tuple[Construct, str]:
    """Scope and id under which the single deployment of a group lives.

    Groups defined in this app are constructs and own the deployment
    directly. Imported groups only come back from jsii as interface
    proxies, so their deployment sits next to them under the group's
    scope with an id derived from the group's id.
    """
    if isinstance(deployment_group, Construct):
        return deployment_group, DEPLOYMENT_ID
    return deployment_group.node.scope, f"{deployment_group.node.id}{DEPLOYMENT_ID}"


class EcsDeployment(Construct):
    """A CodeDeploy deployment for an Amazon ECS service deployment group.

    A deployment group carries at most one EcsDeployment. Use
    ``for_deployment_group`` to create it: the construct is always added
    at the fixed place given by ``deployment_scope`` and a second call for
    the same group raises ``DeploymentAlreadyExistsError``.
    """

    @classmethod
    def for_deployment_group(cls, props: EcsDeploymentProps) -> "EcsDeployment":
        group = props.deployment_group
        scope, construct_id = deployment_scope(group)
        if scope.node.try_find_child(construct_id) is not None:
            raise DeploymentAlreadyExistsError(group.node.path)
        return cls(scope, construct_id, props)

    def __init__(self, scope: Construct, construct_id: str, props: EcsDeploymentProps) -> None:
        super().__init__(scope, construct_id)

        self.provider = EcsDeploymentProvider(
            self,
            "DeploymentProvider",
            deployment_group=props.deployment_group,
            timeout=props.resolved_timeout(),
        )

        self.request = build_deployment_request(
            props.deployment_group,
            props.appspec,
            auto_rollback=props.auto_rollback,
            description=props.description,
        )

        self.resource = CustomResource(
            self,
            "DeploymentResource",
            service_token=self.provider.service_token,
            resource_type=RESOURCE_TYPE,
            # absent values are left out of the template rather than sent as null
            properties={k: v for k, v in self.request.items() if v is not None},
        )
        # Token, only known once CloudFormation has created the resource
        self.deployment_id: str = self.resource.get_att_string("deploymentId")

    @property
    def deployment_id_resolved(self) -> bool:
        return not Token.is_unresolved(self.deployment_id)
