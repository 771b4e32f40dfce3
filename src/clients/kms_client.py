import boto3


class KMSClient:
    def __init__(self, client):
        self.client = client

    @classmethod
    def from_region(cls, region: str) -> "KMSClient":
        return cls(boto3.client("kms", region_name=region))

    def get_valid_key_arn(self, key_id: str) -> str:
        """Resolve a key id, alias or ARN to the full ARN of an existing key."""
        response = self.client.describe_key(KeyId=key_id)
        return response['KeyMetadata']['Arn']
