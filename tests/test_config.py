"""Application settings tests."""

from app.config import Settings
from src.snapshot_parser import DumpFormat


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.excluded_package_prefix == "org.cytoscape"
        assert settings.unversioned_sentinel == "0.0.0"
        assert settings.default_old_format == DumpFormat.HEADER_BLOCK

    def test_only_consumed_fields_declared(self):
        """Settings carry no fields that nothing reads."""
        assert set(Settings.model_fields) == {
            "log_level",
            "excluded_package_prefix",
            "unversioned_sentinel",
            "default_old_format",
            "default_new_format",
            "cyjdeps_script",
        }

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("UNVERSIONED_SENTINEL", "0.0.1")
        assert Settings(_env_file=None).unversioned_sentinel == "0.0.1"
