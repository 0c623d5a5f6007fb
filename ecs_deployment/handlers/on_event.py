import os
from typing import Any, Dict

import boto3
from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

logger = Logger(service=os.getenv("POWERTOOLS_SERVICE_NAME", "ecs-deployment"),
                level=os.getenv("LOG_LEVEL", "INFO"))

codedeploy = boto3.client("codedeploy")

ALREADY_COMPLETED = "DeploymentAlreadyCompletedException"


def create_deployment(props: Dict[str, Any]) -> Dict[str, Any]:
    events = [e for e in props.get("autoRollbackConfigurationEvents", "").split(",") if e]
    request = {
        "applicationName": props["applicationName"],
        "deploymentConfigName": props["deploymentConfigName"],
        "deploymentGroupName": props["deploymentGroupName"],
        "autoRollbackConfiguration": {
            "enabled": props.get("autoRollbackConfigurationEnabled") == "true",
            "events": events,
        },
        "revision": {
            "revisionType": "AppSpecContent",
            "appSpecContent": {"content": props["revisionAppSpecContent"]},
        },
    }
    if props.get("description"):
        request["description"] = props["description"]

    resp = codedeploy.create_deployment(**request)
    deployment_id = resp["deploymentId"]
    logger.info(f"Created deployment {deployment_id}")
    return {
        "PhysicalResourceId": deployment_id,
        "Data": {"deploymentId": deployment_id},
    }


def stop_deployment(deployment_id: str, props: Dict[str, Any]) -> Dict[str, Any]:
    logger.append_keys(deployment_id=deployment_id)
    try:
        codedeploy.stop_deployment(
            deploymentId=deployment_id,
            autoRollbackEnabled=props.get("autoRollbackConfigurationEnabled") == "true",
        )
        logger.info("Stopped deployment")
    except ClientError as err:
        if err.response["Error"]["Code"] != ALREADY_COMPLETED:
            raise
        # Finished deployments cannot be stopped
        logger.warning(f"Deployment already finished: {err}")
    return {
        "PhysicalResourceId": deployment_id,
        "Data": {"deploymentId": deployment_id},
    }


@logger.inject_lambda_context(log_event=True)
def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    request_type = event["RequestType"]
    props = event.get("ResourceProperties", {})
    logger.info(f"Received event: {request_type}")

    if request_type in ("Create", "Update"):
        return create_deployment(props)
    if request_type == "Delete":
        return stop_deployment(event["PhysicalResourceId"], props)
    raise ValueError(f"Unsupported request type: {request_type}")
