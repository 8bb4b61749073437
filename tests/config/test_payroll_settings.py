"""
Tests for payroll configuration loading.

Covers:
- The shipped default settings
- Overriding schedule and policy from a YAML file
- Schema violations (unknown keys, unquoted times, floats, bad values)
- Checksum determinism and the PAYROLL_CONFIG_TRACE record
"""

from decimal import Decimal
from pathlib import Path

import pytest
import yaml

from payroll_config import get_active_config
from payroll_config.loader import compute_checksum, parse_policy, parse_schedule
from payroll_kernel.domain.schedule import DEFAULT_POLICY, DEFAULT_SCHEDULE


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text(text)
    return path


CUSTOM = """
name: night-shift
version: 3
schedule:
  expected_time_in: "22:00"
  grace_period_minutes: 5
  meal_break_minutes: 30
policy:
  overtime_multiplier: "1.30"
  weekly_hours_target: 40
"""


class TestDefaultSettings:
    def test_matches_kernel_defaults(self):
        settings = get_active_config()

        assert settings.name == "default"
        assert settings.version == 1
        assert settings.schedule == DEFAULT_SCHEDULE
        assert settings.policy == DEFAULT_POLICY
        assert len(settings.checksum) == 64

    def test_emits_config_trace(self, captured_logs):
        settings = get_active_config()

        traces = [r for r in captured_logs() if r["message"] == "PAYROLL_CONFIG_TRACE"]
        assert traces[0]["config_name"] == "default"
        assert traces[0]["checksum"] == settings.checksum


class TestCustomSettings:
    def test_overrides_applied(self, tmp_path):
        settings = get_active_config(_write(tmp_path, CUSTOM))

        assert settings.name == "night-shift"
        assert settings.version == 3
        assert settings.schedule.expected_time_in == "22:00"
        assert settings.schedule.grace_period_minutes == 5
        assert settings.schedule.standard_shift_minutes == 480
        assert settings.schedule.meal_break_minutes == 30
        assert settings.policy.overtime_multiplier == Decimal("1.30")
        assert settings.policy.periods_per_month == Decimal("4")
        assert settings.policy.weekly_hours_target == Decimal("40")

    def test_string_path_accepted(self, tmp_path):
        settings = get_active_config(str(_write(tmp_path, CUSTOM)))

        assert settings.name == "night-shift"

    def test_sections_optional(self, tmp_path):
        settings = get_active_config(_write(tmp_path, "name: bare\nversion: 1\n"))

        assert settings.schedule == DEFAULT_SCHEDULE
        assert settings.policy == DEFAULT_POLICY

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_active_config(tmp_path / "absent.yaml")

    def test_missing_name(self, tmp_path):
        with pytest.raises(KeyError):
            get_active_config(_write(tmp_path, "version: 1\n"))

    def test_malformed_yaml(self, tmp_path):
        with pytest.raises(yaml.YAMLError):
            get_active_config(_write(tmp_path, "name: [unclosed\n"))


class TestSchemaViolations:
    def test_unquoted_time_rejected(self):
        # YAML 1.1 reads 8:00 as the base-60 integer 480
        with pytest.raises(ValueError, match="quoted"):
            parse_schedule(yaml.safe_load("expected_time_in: 8:00"))

    def test_malformed_time_rejected(self):
        with pytest.raises(ValueError, match="expected_time_in"):
            parse_schedule({"expected_time_in": "8 o'clock"})

    def test_unknown_schedule_key(self):
        with pytest.raises(ValueError, match="unknown keys"):
            parse_schedule({"grace_minutes": 10})

    def test_non_integer_minutes(self):
        with pytest.raises(ValueError, match="integer"):
            parse_schedule({"grace_period_minutes": "10"})

    def test_float_amount_rejected(self):
        with pytest.raises(ValueError, match="quoted decimal"):
            parse_policy({"overtime_multiplier": 1.25})

    def test_invalid_policy_value(self):
        with pytest.raises(ValueError):
            parse_policy({"periods_per_month": "0"})

    def test_unknown_top_level_key(self, tmp_path):
        with pytest.raises(ValueError, match="unknown keys"):
            get_active_config(_write(tmp_path, "name: x\nversion: 1\ncurrency: PHP\n"))

    def test_non_mapping_document(self, tmp_path):
        with pytest.raises(ValueError, match="mapping"):
            get_active_config(_write(tmp_path, "- just\n- a list\n"))


class TestComputeChecksum:
    def test_deterministic_and_key_order_independent(self):
        a = compute_checksum({"name": "x", "version": 1})
        b = compute_checksum({"version": 1, "name": "x"})

        assert a == b

    def test_changes_with_content(self):
        assert compute_checksum({"name": "x"}) != compute_checksum({"name": "y"})
