import json

import pytest

from ifacemaker.exceptions import ConfigError
from ifacemaker.synthesis.config import DEFAULT_COMMENT
from ifacemaker.user_config import DEFAULT_CONFIG, UserConfig, get_user_config, reset_user_config


def _write_config(root, data):
    config_dir = root / ".ifacemaker"
    config_dir.mkdir(parents=True, exist_ok=True)
    path = config_dir / "config.json"
    path.write_text(data if isinstance(data, str) else json.dumps(data))
    return path


class TestUserConfig:

    def test_defaults(self, tmp_path):
        config = UserConfig(project_root=tmp_path, home=tmp_path / "home")
        assert config.get("defaults.comment") == DEFAULT_COMMENT
        assert config.get("defaults.copy_docs") is True
        assert config.get("formatter.external_command") is None
        assert config.config == DEFAULT_CONFIG

    def test_missing_key(self, tmp_path):
        config = UserConfig(project_root=tmp_path, home=tmp_path / "home")
        assert config.get("defaults.nope") is None
        assert config.get("defaults.comment.deeper", "fallback") == "fallback"

    def test_local_overrides_global(self, tmp_path):
        home = tmp_path / "home"
        project = tmp_path / "project"
        _write_config(home, {"defaults": {"comment": "global", "with_promoted": True}})
        _write_config(project, {"defaults": {"comment": "local"}})

        config = UserConfig(project_root=project, home=home)

        assert config.get("defaults.comment") == "local"
        assert config.get("defaults.with_promoted") is True
        assert config.get("defaults.copy_docs") is True

    def test_formatter_config(self, tmp_path):
        _write_config(tmp_path, {"formatter": {"external_command": "goimports", "timeout": 5}})
        config = UserConfig(project_root=tmp_path, home=tmp_path / "home")
        assert config.formatter_config() == {"external_command": "goimports", "timeout": 5}

    def test_invalid_json(self, tmp_path):
        _write_config(tmp_path, "{broken")
        with pytest.raises(ConfigError):
            UserConfig(project_root=tmp_path, home=tmp_path / "home")

    def test_not_an_object(self, tmp_path):
        _write_config(tmp_path, "[1, 2]")
        with pytest.raises(ConfigError):
            UserConfig(project_root=tmp_path, home=tmp_path / "home")

    def test_config_is_a_copy(self, tmp_path):
        config = UserConfig(project_root=tmp_path, home=tmp_path / "home")
        config.config["defaults"]["comment"] = "changed"
        assert config.get("defaults.comment") == DEFAULT_COMMENT


def test_singleton(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    first = get_user_config()
    assert get_user_config() is first
    reset_user_config()
    assert get_user_config() is not first


def test_project_root_override(tmp_path):
    _write_config(tmp_path, {"defaults": {"copy_type_doc": True}})
    assert get_user_config(tmp_path).get("defaults.copy_type_doc") is True
