from ecs_deployment.deployment import (
    EcsDeployment,
    build_deployment_request,
    rollback_trigger_events,
)
from ecs_deployment.errors import DeploymentAlreadyExistsError, EcsDeploymentError
from ecs_deployment.props import EcsDeploymentProps
from ecs_deployment.provider import EcsDeploymentProvider

__all__ = [
    "DeploymentAlreadyExistsError",
    "EcsDeployment",
    "EcsDeploymentError",
    "EcsDeploymentProps",
    "EcsDeploymentProvider",
    "build_deployment_request",
    "rollback_trigger_events",
]
