"""Tests for config document loading and enforcement."""

import json
from pathlib import Path

import pytest

from sandbox_guard.loader import check_config_file, enforce_safe_config, load_config_file
from sandbox_guard.utils.errors import ConfigLoadError, UnsafeConfigError

SAFE_DOC = {"agents": {"defaults": {"sandbox": {"docker": {"user": "1000", "tmpfs": ["/tmp"]}}}}}
UNSAFE_DOC = {"agents": {"defaults": {"sandbox": {"docker": {"user": "root"}}}}}


class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_load_json(self, tmp_path: Path) -> None:
        """Test loading a JSON document."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps(SAFE_DOC))
        assert load_config_file(path) == SAFE_DOC

    def test_load_yaml(self, tmp_path: Path) -> None:
        """Test loading a YAML document."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "agents:\n"
            "  defaults:\n"
            "    sandbox:\n"
            "      docker:\n"
            "        user: '1000'\n"
            "        tmpfs:\n"
            "          - /tmp\n"
        )
        assert load_config_file(str(path)) == SAFE_DOC

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file raises ConfigLoadError."""
        with pytest.raises(ConfigLoadError, match="not found"):
            load_config_file(tmp_path / "missing.json")

    def test_bad_extension(self, tmp_path: Path) -> None:
        """Test that unsupported extensions are refused."""
        path = tmp_path / "config.toml"
        path.write_text("")
        with pytest.raises(ConfigLoadError, match="extension"):
            load_config_file(path)

    @pytest.mark.parametrize(
        ("name", "content"),
        [("bad.json", "{not json"), ("bad.yml", "a: [unclosed")],
    )
    def test_parse_errors(self, tmp_path: Path, name: str, content: str) -> None:
        """Test that parse errors raise ConfigLoadError."""
        path = tmp_path / name
        path.write_text(content)
        with pytest.raises(ConfigLoadError, match="Invalid"):
            load_config_file(path)

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        """Test that a list document is refused."""
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigLoadError, match="mapping"):
            load_config_file(path)


class TestCheckConfigFile:
    """Tests for check_config_file."""

    def test_reports_violations(self, tmp_path: Path) -> None:
        """Test that violations in the file are reported."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps(UNSAFE_DOC))
        result = check_config_file(path)
        assert result.ok is False
        assert result.errors[0].path == "agents.defaults.sandbox.docker.user"


class TestEnforceSafeConfig:
    """Tests for enforce_safe_config."""

    def test_safe_document_passes(self) -> None:
        """Test that a safe document returns its result."""
        assert enforce_safe_config(SAFE_DOC).ok is True

    def test_unsafe_document_raises(self) -> None:
        """Test that an unsafe document is refused with the full result attached."""
        with pytest.raises(UnsafeConfigError) as exc_info:
            enforce_safe_config(UNSAFE_DOC)
        assert exc_info.value.result.ok is False
        assert len(exc_info.value.result.errors) == 1
