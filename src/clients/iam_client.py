from typing import List, Optional

import boto3
from botocore.exceptions import ClientError


class IAMClient:
    """
    Thin wrapper over the boto3 IAM client used by the regcreds workflow.

    Responsibility:
        - Creates roles, reusing an existing role of the same name.
        - Creates managed policies and attaches them to roles.
    """

    def __init__(self, client):
        self.client = client

    @classmethod
    def from_region(cls, region: str) -> "IAMClient":
        return cls(boto3.client("iam", region_name=region))

    def create_or_find_role(self, role_name: str, description: str, assume_role_policy_doc: str,
                            tags: Optional[List[dict]] = None) -> str:
        """
        Create the role, or fall back to the existing one.

        Returns:
            The new role ARN, or an empty string when the role already existed.
        """
        request = {
            "RoleName": role_name,
            "Description": description,
            "AssumeRolePolicyDocument": assume_role_policy_doc,
        }
        if tags:
            request["Tags"] = tags

        try:
            response = self.client.create_role(**request)
        except ClientError as e:
            if e.response['Error']['Code'] == 'EntityAlreadyExists':
                return ""
            raise
        return response['Role']['Arn']

    def create_policy(self, policy_name: str, policy_document: str, description: str) -> dict:
        return self.client.create_policy(
            PolicyName=policy_name,
            PolicyDocument=policy_document,
            Description=description
        )

    def attach_role_policy(self, policy_arn: str, role_name: str) -> dict:
        return self.client.attach_role_policy(RoleName=role_name, PolicyArn=policy_arn)
