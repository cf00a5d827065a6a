"""Tests for configuration loading and window resolution."""

from datetime import datetime

import pytest
import yaml

from ledger_recon.config import (
    ReconConfig,
    generate_default_config,
    load_config,
    parse_window_bound,
    resolve_window,
)
from ledger_recon.utils.exceptions import ConfigurationError


def test_defaults_map_expected_headers():
    config = load_config(None)

    assert config.input.transactions.column_mappings == {
        "id": "trxID",
        "amount": "amount",
        "kind": "type",
        "timestamp": "transactionTime",
    }
    assert config.input.statements.column_mappings["external_id"] == "unique_identifier"
    assert config.input.transactions.timestamp_format == "%Y-%m-%d %H:%M:%S"
    assert config.window.start is None
    assert config.config_file_path is None


def test_user_config_is_merged_over_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.dump(
            {
                "input": {"transactions": {"column_mappings": {"id": "Reference"}}},
                "window": {"start": "2023-01-01", "end": "2023-12-31"},
            }
        )
    )

    config = load_config(path)

    mappings = config.input.transactions.column_mappings
    assert mappings["id"] == "Reference"
    assert mappings["timestamp"] == "transactionTime"
    assert config.window.start == "2023-01-01"
    assert config.config_file_path == str(path)


def test_unquoted_yaml_dates_are_accepted(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("window:\n  start: 2023-01-01\n  end: 2023-12-31 18:00:00\n")

    config = load_config(path)

    assert resolve_window(config) == (
        datetime(2023, 1, 1),
        datetime(2023, 12, 31, 18, 0, 0),
    )


def test_invalid_yaml_raises_configuration_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("input: [unclosed\n")

    with pytest.raises(ConfigurationError):
        load_config(path)


def test_schema_violation_raises_configuration_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("input:\n  skip_invalid_rows: [1, 2]\n")

    with pytest.raises(ConfigurationError):
        load_config(path)


def test_generated_config_round_trips(tmp_path):
    path = tmp_path / "nested" / "config.yaml"

    generate_default_config(path)

    assert path.exists()
    assert path.read_text().startswith("#")
    assert load_config(path).output.sheets.discrepancies.name == "Discrepancies"


class TestWindow:
    def test_explicit_bounds_override_config(self):
        config = ReconConfig()
        config.window.start = "2020-01-01"
        config.window.end = "2020-12-31"

        start, end = resolve_window(
            config, datetime(2023, 1, 1), datetime(2023, 12, 31)
        )

        assert (start, end) == (datetime(2023, 1, 1), datetime(2023, 12, 31))

    def test_missing_bound_raises(self):
        with pytest.raises(ConfigurationError, match="window"):
            resolve_window(ReconConfig(), start=datetime(2023, 1, 1))

    def test_inverted_window_is_allowed(self):
        start, end = resolve_window(
            ReconConfig(), datetime(2023, 12, 31), datetime(2023, 1, 1)
        )
        assert start > end

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2023-01-01", datetime(2023, 1, 1)),
            ("2023-01-01 10:11:12", datetime(2023, 1, 1, 10, 11, 12)),
            (datetime(2023, 2, 2), datetime(2023, 2, 2)),
        ],
    )
    def test_parse_window_bound(self, value, expected):
        assert parse_window_bound(value) == expected

    def test_parse_window_bound_rejects_other_layouts(self):
        with pytest.raises(ConfigurationError):
            parse_window_bound("01/01/2023")
