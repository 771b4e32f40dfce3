import boto3
import pytest
from moto import mock_aws

AWS_REGION = "us-east-1"


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never reaches real AWS."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", AWS_REGION)
    # managed policies are needed to attach AmazonECSTaskExecutionRolePolicy
    monkeypatch.setenv("MOTO_IAM_LOAD_MANAGED_POLICIES", "true")


@pytest.fixture
def aws(aws_credentials):
    with mock_aws():
        yield {
            'iam': boto3.client("iam", region_name=AWS_REGION),
            'kms': boto3.client("kms", region_name=AWS_REGION),
        }
