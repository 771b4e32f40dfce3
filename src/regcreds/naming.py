ECS_RESOURCE_PREFIX = "amazon-ecs-cli-setup-"
EXECUTION_ROLE_POLICY_PATH = "iam::aws:policy/service-role/AmazonECSTaskExecutionRolePolicy"


def generate_ecs_resource_name(name: str) -> str:
    return ECS_RESOURCE_PREFIX + name


def get_partition(region: str) -> str:
    if region.startswith("cn-"):
        return "aws-cn"
    if region.startswith("us-gov-"):
        return "aws-us-gov"
    return "aws"


def get_execution_role_policy_arn(region: str) -> str:
    """ARN of the AWS managed ECS task execution role policy in the region's partition."""
    return f"arn:{get_partition(region)}:{EXECUTION_ROLE_POLICY_PATH}"
