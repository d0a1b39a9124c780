"""
tests/core/parallel/test_parallel_client.py - core/parallel/client.py 테스트
"""

from unittest.mock import MagicMock

from botocore.config import Config

from core.parallel.client import DEFAULT_MAX_ATTEMPTS, get_client


class TestGetClient:
    """get_client() 테스트"""

    def test_retry_config(self):
        session = MagicMock()

        get_client(session, "iam", region_name="us-east-1")

        args, kwargs = session.client.call_args
        assert args[0] == "iam"
        assert kwargs["region_name"] == "us-east-1"
        config = kwargs["config"]
        assert isinstance(config, Config)
        assert config.retries == {"max_attempts": DEFAULT_MAX_ATTEMPTS, "mode": "standard"}
        assert "endpoint_url" not in kwargs

    def test_explicit_endpoint(self):
        session = MagicMock()

        get_client(session, "sts", endpoint_url="http://localhost:4566")

        assert session.client.call_args.kwargs["endpoint_url"] == "http://localhost:4566"

    def test_endpoint_from_environment(self, monkeypatch):
        monkeypatch.setenv("IAM_CONFORMANCE_ENDPOINT_URL", "http://emulator:5000")
        session = MagicMock()

        get_client(session, "iam")

        assert session.client.call_args.kwargs["endpoint_url"] == "http://emulator:5000"

    def test_merges_existing_config(self):
        session = MagicMock()

        get_client(session, "iam", config=Config(user_agent_extra="iamcheck"))

        config = session.client.call_args.kwargs["config"]
        assert config.user_agent_extra == "iamcheck"
        assert config.retries["mode"] == "standard"
