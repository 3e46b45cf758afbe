"""
Tests for Env defaults, load_env and TimeParser.
"""

import pytest
from pydantic import ValidationError

from mercury_p2p.env import Env, TimeParser, load_env


class TestTimeParser:
    """Tests for time string parsing."""

    @pytest.mark.parametrize(
        "time_amount,expected",
        [
            ("0s", 0.0),
            ("0.25s", 0.25),
            ("5", 5.0),
            ("1m", 60.0),
            ("1m30s", 90.0),
            ("2h", 7200.0),
        ],
    )
    def test_parses_units(self, time_amount, expected):
        """Seconds, minutes and hours are converted to seconds."""
        assert TimeParser(time_amount).time == expected

    @pytest.mark.parametrize(
        "time_amount",
        ["250ms", "abc", "-1s", "", "1.5.2s", "10 parsecs"],
    )
    def test_rejects_malformed_durations(self, time_amount):
        """Strings that are not entirely number-unit pairs raise ValueError."""
        with pytest.raises(ValueError):
            TimeParser(time_amount)


class TestEnv:
    """Tests for the Env model."""

    def test_defaults(self):
        """The default configuration blocks waits and delivers immediately."""
        env = Env()

        assert env.MERCURY_P2P_WORLD_SIZE == 2
        assert env.wait_timeout is None
        assert env.delivery_latency == 0.0
        assert env.MERCURY_P2P_LOG_OUTPUT == "stderr"

    def test_parsed_durations(self):
        """Time string fields are exposed as seconds."""
        env = Env(
            MERCURY_P2P_WAIT_TIMEOUT="2s",
            MERCURY_P2P_DELIVERY_LATENCY="0.5s",
        )

        assert env.wait_timeout == 2.0
        assert env.delivery_latency == 0.5

    def test_strict_types(self):
        """Values of the wrong type are rejected."""
        with pytest.raises(ValidationError):
            Env(MERCURY_P2P_WORLD_SIZE="2")

        with pytest.raises(ValidationError):
            Env(MERCURY_P2P_LOG_OUTPUT="file")

    @pytest.mark.parametrize(
        "field",
        ["MERCURY_P2P_WAIT_TIMEOUT", "MERCURY_P2P_DELIVERY_LATENCY"],
    )
    def test_rejects_malformed_durations(self, field):
        """Duration fields are validated when the model is built."""
        with pytest.raises(ValidationError):
            Env(**{field: "250ms"})


class TestLoadEnv:
    """Tests for loading configuration from the environment and .env files."""

    def test_malformed_duration_fails_at_load(self, monkeypatch, tmp_path):
        """A bad duration in the environment is rejected by load_env."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("MERCURY_P2P_WAIT_TIMEOUT", "soon")

        with pytest.raises(ValidationError):
            load_env(Env)

    def test_reads_process_environment(self, monkeypatch, tmp_path):
        """Environment variables are converted with the types map."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("MERCURY_P2P_WORLD_SIZE", "8")
        monkeypatch.setenv("MERCURY_P2P_WAIT_TIMEOUT", "1s")

        env = load_env(Env)

        assert env.MERCURY_P2P_WORLD_SIZE == 8
        assert env.wait_timeout == 1.0

    def test_reads_env_file(self, monkeypatch, tmp_path):
        """Values from a .env file override the process environment."""
        monkeypatch.setenv("MERCURY_P2P_WORLD_SIZE", "8")

        env_file = tmp_path / "p2p.env"
        env_file.write_text(
            "MERCURY_P2P_WORLD_SIZE=3\n"
            "MERCURY_P2P_LOG_LEVEL=debug\n"
            "UNRELATED_SETTING=ignored\n"
        )

        env = load_env(Env, env_file=str(env_file))

        assert env.MERCURY_P2P_WORLD_SIZE == 3
        assert env.MERCURY_P2P_LOG_LEVEL == "debug"

    def test_override_wins(self, monkeypatch, tmp_path):
        """Fields set on the override model take precedence."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("MERCURY_P2P_WORLD_SIZE", "8")

        env = load_env(
            Env,
            override=Env(MERCURY_P2P_WORLD_SIZE=5),
        )

        assert env.MERCURY_P2P_WORLD_SIZE == 5
