"""Tests for configuration defaults, validation and layered loading."""

import pytest

from depscope.config import AnalysisConfig, load_config
from depscope.exceptions import DepscopeError, InvalidConfigError


class TestAnalysisConfig:
    def test_defaults(self):
        config = AnalysisConfig()
        assert ".cpp" in config.extensions
        assert ".h" in config.extensions
        assert config.exclude_name_pattern == "test|mock"
        assert config.header_markers == [".h", ".hpp"]
        assert config.diagram_direction == "LR"
        assert config.keyword == ""
        assert config.enable_validation is True

    def test_frozen(self):
        with pytest.raises(AttributeError):
            AnalysisConfig().keyword = "x"  # type: ignore[misc]

    def test_normalized_extensions(self):
        config = AnalysisConfig(extensions=[".CPP", ".h"])
        assert config.normalized_extensions == frozenset({".cpp", ".h"})

    @pytest.mark.parametrize(
        "kwargs,key",
        [
            ({"extensions": []}, "extensions"),
            ({"extensions": ["cpp"]}, "extensions"),
            ({"exclude_name_pattern": "("}, "exclude_name_pattern"),
            ({"header_markers": []}, "header_markers"),
            ({"max_files": 0}, "max_files"),
            ({"diagram_direction": "UP"}, "diagram_direction"),
            ({"verbosity": "loud"}, "verbosity"),
        ],
    )
    def test_invalid_values(self, kwargs, key):
        with pytest.raises(InvalidConfigError) as exc_info:
            AnalysisConfig(**kwargs)
        assert exc_info.value.key == key


class TestLoadConfig:
    def test_defaults_without_sources(self, isolated_config_env):
        assert load_config() == AnalysisConfig()

    def test_project_file(self, isolated_config_env):
        (isolated_config_env / "depscope.toml").write_text('keyword = "net"\nmax_files = 10\n')
        config = load_config()
        assert config.keyword == "net"
        assert config.max_files == 10

    def test_depscope_table(self, isolated_config_env):
        (isolated_config_env / "depscope.toml").write_text(
            '[depscope]\nextensions = [".cpp", ".h"]\n'
        )
        assert load_config().extensions == [".cpp", ".h"]

    def test_project_overrides_global(self, isolated_config_env):
        (isolated_config_env / "home" / ".depscope.toml").write_text(
            'keyword = "global"\ndiagram_direction = "TB"\n'
        )
        (isolated_config_env / "depscope.toml").write_text('keyword = "project"\n')
        config = load_config()
        assert config.keyword == "project"
        assert config.diagram_direction == "TB"

    def test_explicit_file_overrides_project(self, isolated_config_env):
        (isolated_config_env / "depscope.toml").write_text('keyword = "project"\n')
        explicit = isolated_config_env / "custom.toml"
        explicit.write_text('keyword = "explicit"\n')
        assert load_config(config_file=explicit).keyword == "explicit"

    def test_env_overrides_files(self, isolated_config_env, monkeypatch):
        (isolated_config_env / "depscope.toml").write_text('keyword = "project"\n')
        monkeypatch.setenv("DEPSCOPE_KEYWORD", "env")
        monkeypatch.setenv("DEPSCOPE_MAX_FILES", "42")
        monkeypatch.setenv("DEPSCOPE_HEADER_MARKERS", ".h, .inl")
        monkeypatch.setenv("DEPSCOPE_ENABLE_VALIDATION", "off")
        config = load_config()
        assert config.keyword == "env"
        assert config.max_files == 42
        assert config.header_markers == [".h", ".inl"]
        assert config.enable_validation is False

    def test_overrides_win(self, isolated_config_env, monkeypatch):
        monkeypatch.setenv("DEPSCOPE_KEYWORD", "env")
        assert load_config(keyword="cli").keyword == "cli"

    def test_none_override_ignored(self, isolated_config_env):
        (isolated_config_env / "depscope.toml").write_text('keyword = "project"\n')
        assert load_config(keyword=None).keyword == "project"

    def test_verbosity_flags(self, isolated_config_env):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False).verbosity == "normal"

    def test_bad_env_bool(self, isolated_config_env, monkeypatch):
        monkeypatch.setenv("DEPSCOPE_FOLLOW_SYMLINKS", "maybe")
        with pytest.raises(DepscopeError, match="DEPSCOPE_FOLLOW_SYMLINKS"):
            load_config()

    def test_bad_env_int(self, isolated_config_env, monkeypatch):
        monkeypatch.setenv("DEPSCOPE_MAX_FILES", "lots")
        with pytest.raises(DepscopeError):
            load_config()

    def test_unknown_key(self, isolated_config_env):
        (isolated_config_env / "depscope.toml").write_text("colour = 1\n")
        with pytest.raises(DepscopeError, match="Invalid configuration"):
            load_config()

    def test_malformed_toml(self, isolated_config_env):
        (isolated_config_env / "depscope.toml").write_text("keyword = \n")
        with pytest.raises(DepscopeError, match="Invalid project config"):
            load_config()

    def test_missing_explicit_file(self, isolated_config_env):
        with pytest.raises(DepscopeError, match="not found"):
            load_config(config_file=isolated_config_env / "nope.toml")

    def test_invalid_value_from_file(self, isolated_config_env):
        (isolated_config_env / "depscope.toml").write_text('diagram_direction = "UP"\n')
        with pytest.raises(InvalidConfigError):
            load_config()
