import os
from typing import Any, Dict

import boto3
from aws_lambda_powertools import Logger

logger = Logger(service=os.getenv("POWERTOOLS_SERVICE_NAME", "ecs-deployment"),
                level=os.getenv("LOG_LEVEL", "INFO"))

codedeploy = boto3.client("codedeploy")

SUCCEEDED = "Succeeded"
FAILED_STATES = ("Failed", "Stopped")


class DeploymentFailedError(Exception):
    """CodeDeploy finished the deployment without success"""


def failure_message(info: Dict[str, Any]) -> str:
    error = info.get("errorInformation", {})
    message = f"Deployment {info.get('deploymentId')} {info['status'].lower()}"
    if error.get("message"):
        message += f": {error.get('code', 'UNKNOWN')} {error['message']}"
    rollback = info.get("rollbackInfo", {})
    if rollback.get("rollbackMessage"):
        message += f" ({rollback['rollbackMessage']})"
    return message


@logger.inject_lambda_context(log_event=True)
def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    request_type = event["RequestType"]
    deployment_id = event["PhysicalResourceId"]
    logger.append_keys(deployment_id=deployment_id)

    info = codedeploy.get_deployment(deploymentId=deployment_id)["deploymentInfo"]
    status = info["status"]
    logger.info(f"Deployment status: {status}")

    if status == SUCCEEDED:
        return {"IsComplete": True}
    if status in FAILED_STATES:
        if request_type == "Delete":
            return {"IsComplete": True}
        raise DeploymentFailedError(failure_message(info))
    return {"IsComplete": False}
