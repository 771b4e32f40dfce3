"""
Task execution role provisioning for private registry credentials.

- Finds or creates the role ECS tasks assume.
- Creates a dated policy granting access to the registry credential secrets.
- Attaches the AWS managed execution role policy and the new policy to the role.
"""

import datetime
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from src.regcreds.naming import generate_ecs_resource_name, get_execution_role_policy_arn
from src.regcreds.policy import generate_secrets_policy
from src.utils.regcredio import ECS_CRED_FILE_TIME_FMT, CredsOutputEntry

ASSUME_ROLE_POLICY_DOC = '{"Version":"2008-10-17","Statement":[{"Sid":"","Effect":"Allow","Principal":{"Service":"ecs-tasks.amazonaws.com"},"Action":"sts:AssumeRole"}]}'
ROLE_DESCRIPTION = "Role generated by the ecs-cli"
POLICY_DESCRIPTION_FMT = "Policy generated by the ecs-cli for role: %s"


@dataclass
class ExecutionRoleParams:
    cred_entries: Dict[str, CredsOutputEntry]
    role_name: str
    region: str
    tags: Dict[str, Optional[str]] = field(default_factory=dict)


def create_task_execution_role(params: ExecutionRoleParams, iam_client, kms_client) -> datetime.datetime:
    """
    Provision the task execution role and its registry credentials policy.

    Returns:
        UTC time the policy was created, so other resources (i.e. the output file) can be dated to match.
    """
    print(f"[INFO] Creating resources for task execution role {params.role_name}...")

    role_name = create_or_find_role(params.role_name, iam_client, convert_to_iam_tags(params.tags))

    policy_doc = generate_secrets_policy(params.cred_entries, kms_client)

    created_at = datetime.datetime.now(datetime.timezone.utc)

    new_policy = create_registry_credentials_policy(params.role_name, policy_doc, created_at, iam_client)
    print(f"[INFO] Created new task execution role policy {new_policy['Arn']}")

    attach_role_policies(new_policy['Arn'], role_name, params.region, iam_client)

    return created_at


def create_registry_credentials_policy(role_name: str, policy_doc: str, created_at: datetime.datetime,
                                       iam_client) -> dict:
    policy_name = generate_ecs_resource_name(
        f"{role_name}-policy-{created_at.strftime(ECS_CRED_FILE_TIME_FMT)}"
    )
    response = iam_client.create_policy(
        policy_name=policy_name,
        policy_document=policy_doc,
        description=POLICY_DESCRIPTION_FMT % role_name
    )
    return response['Policy']


def create_or_find_role(role_name: str, iam_client, tags: List[dict]) -> str:
    role_arn = iam_client.create_or_find_role(role_name, ROLE_DESCRIPTION, ASSUME_ROLE_POLICY_DOC, tags)

    if role_arn:
        print(f"[INFO] Created new task execution role {role_arn}")
    else:
        print(f"[INFO] Using existing role {role_name}")

    return role_name


def attach_role_policies(secret_policy_arn: str, role_name: str, region: str, iam_client):
    managed_policy_arn = get_execution_role_policy_arn(region)
    iam_client.attach_role_policy(managed_policy_arn, role_name)
    print(f"[INFO] Attached AWS managed policy {managed_policy_arn} to role {role_name}")

    iam_client.attach_role_policy(secret_policy_arn, role_name)
    print(f"[INFO] Attached new policy {secret_policy_arn} to role {role_name}")


def convert_to_iam_tags(tags: Optional[Dict[str, Optional[str]]]) -> List[dict]:
    # IAM rejects a missing tag value, so None maps to ""
    return [{"Key": key, "Value": value if value is not None else ""} for key, value in (tags or {}).items()]
