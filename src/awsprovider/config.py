import os
from dataclasses import dataclass

from awsprovider.models import Credentials

DEFAULT_REGION = "us-east-1"


@dataclass
class Config:
    aws_access_key_id: "str" = ""
    aws_secret_access_key: "str" = ""
    aws_region: "str" = DEFAULT_REGION
    # custom S3/Cost Explorer endpoint, e.g.
    # "http://localhost:4566" for LocalStack
    endpoint_url: "str" = ""
    # when set, operation metrics are written here on exit
    # for the node exporter textfile collector
    metrics_textfile: "str" = ""
    log_level: "str" = "info"

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            aws_access_key_id=os.environ.get("AWS_ACCESS_KEY_ID", ""),
            aws_secret_access_key=os.environ.get("AWS_SECRET_ACCESS_KEY", ""),
            aws_region=(
                os.environ.get("AWS_REGION")
                or os.environ.get("AWS_DEFAULT_REGION")
                or DEFAULT_REGION
            ),
            endpoint_url=os.environ.get("AWS_ENDPOINT_URL", ""),
        )

    @property
    def aws_enabled(self) -> "bool":
        return bool(self.aws_access_key_id and self.aws_secret_access_key)

    @property
    def credentials(self) -> "Credentials":
        return Credentials(
            access_key_id=self.aws_access_key_id,
            secret_access_key=self.aws_secret_access_key,
        )
