import argparse
import sys

from botocore.exceptions import BotoCoreError, ClientError

from src.clients.iam_client import IAMClient
from src.clients.kms_client import KMSClient
from src.config import AWS_REGION, OUTPUT_DIR
from src.regcreds.task_execution_role import ExecutionRoleParams, create_task_execution_role
from src.utils.regcredio import read_creds_entries, write_creds_output


def parse_tags(values):
    tags = {}
    for value in values or []:
        key, sep, tag_value = value.partition("=")
        if not key:
            raise argparse.ArgumentTypeError(f"Invalid tag '{value}', expected KEY=VALUE")
        tags[key] = tag_value if sep else None
    return tags


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create an ECS task execution role with access to private registry credentials."
    )
    parser.add_argument("--role-name", required=True, help="Name of the task execution role")
    parser.add_argument("--creds-file", required=True, help="Registry credentials file (YAML)")
    parser.add_argument("--tag", action="append", metavar="KEY=VALUE", help="Tag to apply to a new role")
    parser.add_argument("--region", default=AWS_REGION)
    parser.add_argument("--output-dir", default=OUTPUT_DIR)
    return parser


def main(argv=None, iam_client=None, kms_client=None) -> int:
    """
    Provision the task execution role and write the dated credentials output file.

    Responsibility:
        - Loads registry credential entries from disk.
        - Creates or reuses the role, creates and attaches its policies.
        - Writes the output file stamped with the policy creation time.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        tags = parse_tags(args.tag)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    try:
        cred_entries = read_creds_entries(args.creds_file)
    except (OSError, ValueError) as e:
        print(f"[ERROR] Failed to read credentials file {args.creds_file}: {e}")
        return 1

    iam_client = iam_client or IAMClient.from_region(args.region)
    kms_client = kms_client or KMSClient.from_region(args.region)

    params = ExecutionRoleParams(
        cred_entries=cred_entries,
        role_name=args.role_name,
        region=args.region,
        tags=tags
    )
    try:
        created_at = create_task_execution_role(params, iam_client, kms_client)
    except (ClientError, BotoCoreError) as e:
        print(f"[ERROR] Failed to create task execution role {args.role_name}: {e}")
        return 1

    try:
        output_file = write_creds_output(cred_entries, args.role_name, created_at, args.output_dir)
    except OSError as e:
        print(f"[ERROR] Role {args.role_name} was created but the output file could not be written: {e}")
        return 1
    print(f"\nTask execution role: {args.role_name}")
    print(f"Output file: {output_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
