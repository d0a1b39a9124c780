"""
tests/core/test_core_config.py - core/config.py 테스트
"""

from pathlib import Path

import pytest

from core.config import (
    Settings,
    get_default_profile,
    get_default_region,
    get_endpoint_url,
    get_env_bool,
    get_env_int,
    get_max_workers,
    get_project_root,
    get_version,
    is_live_mode,
    settings,
)


class TestSettings:
    """Settings 데이터클래스 테스트"""

    def test_settings_is_frozen(self):
        """설정이 불변인지 확인"""
        with pytest.raises(Exception):  # FrozenInstanceError
            settings.DEFAULT_REGION = "ap-northeast-2"

    def test_default_values(self):
        """기본값 확인"""
        assert isinstance(settings, Settings)
        assert settings.DEFAULT_REGION == "us-east-1"
        assert settings.API_TIMEOUT == 30
        assert settings.API_RETRY_COUNT == 3
        assert settings.WILDCARD_RESOURCE == "*"


class TestEnvHelpers:
    """환경 변수 헬퍼 테스트"""

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", "on"])
    def test_env_bool_true(self, monkeypatch, value):
        monkeypatch.setenv("X_FLAG", value)
        assert get_env_bool("X_FLAG") is True

    @pytest.mark.parametrize("value", ["0", "false", "no", "off", "whatever"])
    def test_env_bool_false(self, monkeypatch, value):
        monkeypatch.setenv("X_FLAG", value)
        assert get_env_bool("X_FLAG", default=True) is False

    def test_env_bool_default(self, monkeypatch):
        monkeypatch.delenv("X_FLAG", raising=False)
        assert get_env_bool("X_FLAG", default=True) is True

    def test_env_int(self, monkeypatch):
        monkeypatch.setenv("X_INT", "7")
        assert get_env_int("X_INT", 1) == 7

    def test_env_int_invalid(self, monkeypatch):
        monkeypatch.setenv("X_INT", "seven")
        assert get_env_int("X_INT", 1) == 1


class TestAwsDefaults:
    """AWS 기본값 테스트"""

    def test_region_prefers_aws_region(self, monkeypatch):
        monkeypatch.setenv("AWS_REGION", "eu-central-1")
        monkeypatch.setenv("AWS_DEFAULT_REGION", "us-west-2")
        assert get_default_region() == "eu-central-1"

    def test_region_falls_back_to_default_region(self, monkeypatch):
        monkeypatch.delenv("AWS_REGION", raising=False)
        monkeypatch.setenv("AWS_DEFAULT_REGION", "us-west-2")
        assert get_default_region() == "us-west-2"

    def test_region_falls_back_to_settings(self, monkeypatch):
        monkeypatch.delenv("AWS_REGION", raising=False)
        monkeypatch.delenv("AWS_DEFAULT_REGION", raising=False)
        assert get_default_region() == settings.DEFAULT_REGION

    def test_profile(self, monkeypatch):
        monkeypatch.delenv("AWS_PROFILE", raising=False)
        assert get_default_profile() is None
        monkeypatch.setenv("AWS_PROFILE", "audit")
        assert get_default_profile() == "audit"

    def test_endpoint_url(self, monkeypatch):
        assert get_endpoint_url() is None
        monkeypatch.setenv("IAM_CONFORMANCE_ENDPOINT_URL", "http://localhost:4566")
        assert get_endpoint_url() == "http://localhost:4566"

    def test_max_workers_minimum(self, monkeypatch):
        monkeypatch.setenv("IAM_CONFORMANCE_MAX_WORKERS", "0")
        assert get_max_workers() == 1

    def test_live_mode(self, monkeypatch):
        monkeypatch.setenv("IAM_CONFORMANCE_LIVE", "1")
        assert is_live_mode() is True


class TestProjectPaths:
    """프로젝트 경로 / 버전 테스트"""

    def test_get_project_root(self):
        root = get_project_root()
        assert isinstance(root, Path)
        assert (root / "core").exists()
        assert (root / "plugins").exists()

    def test_version_format(self):
        parts = get_version().split(".")
        assert len(parts) >= 2
        assert all(part.isdigit() for part in parts)
