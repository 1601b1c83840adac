"""Tests for skellige configuration module."""

import os
from unittest.mock import patch

from skellige.config import SkelligeSettings


class TestSkelligeSettings:
    """Tests for SkelligeSettings class."""

    def test_default_values(self) -> None:
        """Test that default values are set correctly."""
        settings = SkelligeSettings()

        assert settings.log_level == "info"
        assert settings.log_format == "console"
        assert settings.remote == "origin"
        assert settings.progress is False

    def test_env_override(self) -> None:
        """Test that environment variables override defaults."""
        with patch.dict(
            os.environ,
            {"SKELLIGE_REMOTE": "upstream", "SKELLIGE_PROGRESS": "true"},
        ):
            settings = SkelligeSettings()
            assert settings.remote == "upstream"
            assert settings.progress is True
