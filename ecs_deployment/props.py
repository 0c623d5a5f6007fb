# -*- coding: utf-8 -*-
from dataclasses import dataclass
from typing import Any, Optional

from aws_cdk import Duration
from aws_cdk import aws_codedeploy as codedeploy

DEFAULT_TIMEOUT_MINUTES = 30


@dataclass
class EcsDeploymentProps:
    """Construction properties of EcsDeployment.

    ``appspec`` is the AppSpec for the deployment, either the serialized
    content or any object whose ``str()`` produces it.
    """

    deployment_group: codedeploy.IEcsDeploymentGroup
    appspec: Any
    auto_rollback: Optional[codedeploy.AutoRollbackConfig] = None
    description: Optional[str] = None
    # If the timeout is reached the stack update fails and rolls back
    timeout: Optional[Duration] = None

    def resolved_timeout(self) -> Duration:
        return self.timeout or Duration.minutes(DEFAULT_TIMEOUT_MINUTES)
