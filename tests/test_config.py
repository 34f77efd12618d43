from awsprovider.config import Config


class TestConfigFromEnv:
    def test_defaults(self, monkeypatch: "object") -> "None":
        for name in (
            "AWS_ACCESS_KEY_ID",
            "AWS_SECRET_ACCESS_KEY",
            "AWS_REGION",
            "AWS_DEFAULT_REGION",
            "AWS_ENDPOINT_URL",
        ):
            monkeypatch.delenv(name, raising=False)
        config = Config.from_env()
        assert config.aws_access_key_id == ""
        assert config.aws_secret_access_key == ""
        assert config.aws_region == "us-east-1"
        assert config.endpoint_url == ""

    def test_reads_env_vars(self, monkeypatch: "object") -> "None":
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIDTEST")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "secret")
        monkeypatch.setenv("AWS_REGION", "eu-west-2")
        monkeypatch.setenv("AWS_ENDPOINT_URL", "http://localhost:4566")
        config = Config.from_env()
        assert config.aws_access_key_id == "AKIDTEST"
        assert config.aws_secret_access_key == "secret"
        assert config.aws_region == "eu-west-2"
        assert config.endpoint_url == "http://localhost:4566"

    def test_falls_back_to_default_region_var(self, monkeypatch: "object") -> "None":
        monkeypatch.delenv("AWS_REGION", raising=False)
        monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-south-1")
        assert Config.from_env().aws_region == "ap-south-1"


class TestAwsEnabled:
    def test_enabled_when_both_keys_set(self) -> "None":
        config = Config(aws_access_key_id="AKID", aws_secret_access_key="secret")
        assert config.aws_enabled is True

    def test_disabled_when_secret_missing(self) -> "None":
        config = Config(aws_access_key_id="AKID")
        assert config.aws_enabled is False

    def test_credentials(self) -> "None":
        config = Config(aws_access_key_id="AKID", aws_secret_access_key="secret")
        assert config.credentials.access_key_id == "AKID"
        assert config.credentials.secret_access_key == "secret"
