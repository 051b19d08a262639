"""Loading and validating config.yml."""

import logging
from pathlib import Path

import pytest

from swampbot.config import BotConfig, Composition, ConfigError, TargetPolicy, load_config

REPO_CONFIG = Path(__file__).resolve().parent.parent / "config.yml"


def _write(tmp_path, text):
    path = tmp_path / "config.yml"
    path.write_text(text)
    return path


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "absent.yml") == BotConfig()

    def test_empty_file_gives_defaults(self, tmp_path):
        assert load_config(_write(tmp_path, "")) == BotConfig()

    def test_shipped_config_matches_defaults(self):
        assert load_config(REPO_CONFIG) == BotConfig()

    def test_overrides(self, tmp_path):
        config = load_config(_write(tmp_path, (
            "path_refresh_interval: 3\n"
            "target_policy: CONTINUOUS\n"
            "first_wave:\n  fighters: 4\n  medics: 2\n"
            "flank_enabled: false\n"
            "squad_names: [Red, Blue]\n"
        )))
        assert config.path_refresh_interval == 3
        assert config.target_policy == TargetPolicy.CONTINUOUS
        assert config.first_wave == Composition(4, 2)
        assert config.first_wave.size == 6
        assert config.flank_enabled is False
        assert config.squad_names == ("Red", "Blue")
        # untouched keys keep their defaults
        assert config.wave == Composition(3, 1)

    def test_unknown_key_is_ignored_with_warning(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="swampbot.config"):
            config = load_config(_write(tmp_path, "warp_speed: 9\n"))
        assert config == BotConfig()
        assert "warp_speed" in caplog.text


class TestInvalidConfig:
    def test_document_must_be_mapping(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, "- a\n- b\n"))

    def test_unknown_target_policy(self, tmp_path):
        with pytest.raises(ConfigError, match="target_policy"):
            load_config(_write(tmp_path, "target_policy: random\n"))

    def test_squad_needs_a_fighter(self, tmp_path):
        with pytest.raises(ConfigError, match="wave"):
            load_config(_write(tmp_path, "wave:\n  fighters: 0\n  medics: 3\n"))

    def test_composition_must_be_mapping(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, "flank_wave: 2\n"))

    def test_refresh_interval_positive(self, tmp_path):
        with pytest.raises(ConfigError, match="path_refresh_interval"):
            load_config(_write(tmp_path, "path_refresh_interval: 0\n"))

    def test_non_numeric_count(self, tmp_path):
        with pytest.raises(ConfigError, match="path_refresh_interval must be an integer"):
            load_config(_write(tmp_path, "path_refresh_interval: six\n"))

    def test_boolean_is_not_a_count(self, tmp_path):
        with pytest.raises(ConfigError, match="detection_radius"):
            load_config(_write(tmp_path, "detection_radius: yes\n"))

    def test_numeric_string_is_accepted(self, tmp_path):
        assert load_config(_write(tmp_path, "flee_radius: '8'\n")).flee_radius == 8

    def test_switch_must_be_boolean(self, tmp_path):
        with pytest.raises(ConfigError, match="flank_enabled"):
            load_config(_write(tmp_path, "flank_enabled: sometimes\n"))

    def test_squad_names_must_be_a_list(self, tmp_path):
        with pytest.raises(ConfigError, match="squad_names"):
            load_config(_write(tmp_path, "squad_names: Alpha\n"))

    @pytest.mark.parametrize(
        "key", ["cohesion_radius", "flee_radius", "base_defense_radius", "hold_range", "flank_reached_radius"]
    )
    def test_radius_must_not_be_negative(self, tmp_path, key):
        with pytest.raises(ConfigError, match=key):
            load_config(_write(tmp_path, f"{key}: -1\n"))

    def test_zero_radius_is_allowed(self, tmp_path):
        assert load_config(_write(tmp_path, "hold_range: 0\n")).hold_range == 0

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            BotConfig(squad_names=()).validate()
