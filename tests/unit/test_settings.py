import pytest
from pydantic import ValidationError

from cadquote.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings(_env_file=None)
        assert s.app_env == "dev"

    def test_default_limits(self) -> None:
        s = Settings(_env_file=None)
        assert s.max_file_size_bytes == 50 * 1024 * 1024
        assert s.max_files == 10
        assert s.max_name_length == 100
        assert "step" in s.allowed_extensions
        assert len(s.allowed_extensions) == 10

    def test_default_delays(self) -> None:
        s = Settings(_env_file=None)
        assert (s.upload_delay_min_ms, s.upload_delay_max_ms) == (100, 300)
        assert (s.step_delay_min_ms, s.step_delay_max_ms) == (500, 1500)
        assert s.quote_delay_ms == 1000

    def test_default_rates(self) -> None:
        s = Settings(_env_file=None)
        assert s.optimization_savings_rate == 0.3
        assert s.process_savings_rate == 0.2
        assert s.market_price_multiplier == 2.0

    def test_default_seed_is_unset(self) -> None:
        assert Settings(_env_file=None).random_seed is None


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert Settings(_env_file=None).log_level == "DEBUG"

    def test_loads_max_files(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_FILES", "4")
        assert Settings(_env_file=None).max_files == 4

    def test_loads_random_seed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RANDOM_SEED", "42")
        assert Settings(_env_file=None).random_seed == 42

    def test_loads_allowed_extensions_as_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ALLOWED_EXTENSIONS", '["stl", "step"]')
        assert Settings(_env_file=None).allowed_extensions == ["stl", "step"]


class TestSettingsValidation:
    def test_invalid_max_files_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_FILES", "many")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_invalid_rate_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MARKET_PRICE_MULTIPLIER", "double")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
