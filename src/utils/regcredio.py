"""
Registry credential file I/O.

- Reads the container credentials section of a registry credentials file.
- Writes the dated output file produced after the task execution role is set up.

Layout (YAML):

    version: "1"
    registry_credential_outputs:
      task_execution_role: <role name>
      container_credentials:
        <registry>:
          credentials_parameter: <secret ARN>
          kms_key_id: <key id or ARN, optional>
          container_names: [<container>, ...]
"""

import datetime
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

import yaml

ECS_CRED_FILE_TIME_FMT = "%Y%m%dT%H%M%SZ"
ECS_CRED_FILE_PREFIX = "ecs-registry-creds"
ECS_CRED_FILE_VERSION = "1"


@dataclass
class CredsOutputEntry:
    credentials_parameter: str
    kms_key_id: str = ""
    container_names: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        out = {"credentials_parameter": self.credentials_parameter}
        if self.kms_key_id:
            out["kms_key_id"] = self.kms_key_id
        out["container_names"] = list(self.container_names)
        return out


def _parse_entry(registry: str, raw: dict) -> CredsOutputEntry:
    if not isinstance(raw, dict) or not raw.get("credentials_parameter"):
        raise ValueError(f"Registry '{registry}' is missing 'credentials_parameter'")
    return CredsOutputEntry(
        credentials_parameter=raw["credentials_parameter"],
        kms_key_id=raw.get("kms_key_id") or "",
        container_names=list(raw.get("container_names") or []),
    )


def _mapping(value, section: str, path) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"Expected a mapping at {section} in {path}")
    return value


def read_creds_entries(path) -> Dict[str, CredsOutputEntry]:
    """
    Load credential entries keyed by registry name.

    Args:
        path: Registry credentials file (YAML).
    Returns:
        Mapping of registry name to CredsOutputEntry.
    """
    path = Path(path)
    with open(path, 'r') as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    outputs = _mapping(data, "top level", path).get("registry_credential_outputs") or {}
    creds = _mapping(outputs, "registry_credential_outputs", path).get("container_credentials") or {}
    creds = _mapping(creds, "container_credentials", path)
    if not creds:
        raise ValueError(f"No container credentials found in {path}")

    return {registry: _parse_entry(registry, raw) for registry, raw in creds.items()}


def creds_output_filename(created_at: datetime.datetime) -> str:
    return f"{ECS_CRED_FILE_PREFIX}_{created_at.strftime(ECS_CRED_FILE_TIME_FMT)}.yml"


def write_creds_output(entries: Dict[str, CredsOutputEntry], role_name: str,
                       created_at: datetime.datetime, output_dir=".") -> Path:
    """
    Persist the registry credentials output, dated to match the role policy.

    Responsibility:
        - Names the file after `created_at` so it lines up with the IAM policy name.
        - Records the task execution role alongside every container credential.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / creds_output_filename(created_at)

    data = {
        "version": ECS_CRED_FILE_VERSION,
        "registry_credential_outputs": {
            "task_execution_role": role_name,
            "container_credentials": {
                registry: entry.to_dict() for registry, entry in sorted(entries.items())
            },
        },
    }
    with open(output_file, 'w') as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    print(f"[INFO] Wrote registry credentials output to {output_file}")
    return output_file
