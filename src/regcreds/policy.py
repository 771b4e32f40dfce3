import json
from typing import Dict

from src.utils.regcredio import CredsOutputEntry

POLICY_VERSION = "2012-10-17"
SECRETS_ACTION = "secretsmanager:GetSecretValue"
KMS_DECRYPT_ACTION = "kms:Decrypt"


def _append_unique(items: list, value: str):
    if value not in items:
        items.append(value)


def generate_secrets_policy(cred_entries: Dict[str, CredsOutputEntry], kms_client) -> str:
    """
    Build the least-privilege policy letting a task read its registry credentials.

    Responsibility:
        - Grants GetSecretValue on every credentials secret.
        - Grants kms:Decrypt on each custom key, resolved to its full ARN.
    """
    if not cred_entries:
        raise ValueError("At least one registry credential is required to generate a policy")

    secret_arns = []
    key_arns = []
    for registry in sorted(cred_entries):
        entry = cred_entries[registry]
        _append_unique(secret_arns, entry.credentials_parameter)
        if entry.kms_key_id:
            _append_unique(key_arns, kms_client.get_valid_key_arn(entry.kms_key_id))

    statements = [
        {
            "Effect": "Allow",
            "Action": [SECRETS_ACTION],
            "Resource": secret_arns
        }
    ]
    if key_arns:
        statements.append({
            "Effect": "Allow",
            "Action": [KMS_DECRYPT_ACTION],
            "Resource": key_arns
        })

    return json.dumps({"Version": POLICY_VERSION, "Statement": statements})
