class EcsDeploymentError(Exception):
    """Base error raised by the ECS deployment constructs"""


class DeploymentAlreadyExistsError(EcsDeploymentError):
    """An EcsDeploymentGroup may only carry a single EcsDeployment"""

    def __init__(self, deployment_group_path: str):
        self.deployment_group_path = deployment_group_path
        super().__init__(
            f"Deployment group '{deployment_group_path}' already has an EcsDeployment"
        )
