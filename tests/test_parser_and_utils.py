"""
Tests for RecordArgumentParser and record utilities.

This module tests:
- Parsing argument vectors into records
- Duplicate, unknown, missing-value and mandatory checks
- Help output
- Records without defaults
- Record to dict and command-line conversion, YAML export
"""

import sys
from dataclasses import dataclass, field
from typing import List

import pytest
import yaml

from recordCLI import (
    ParseSession,
    Parameter,
    PendingRecord,
    RecordArgumentParser,
    export_record_to_yaml,
    record_to_args,
    record_to_dict,
)
from recordCLI.exceptions import (
    ArgumentParseError,
    DuplicateArgumentError,
    MissingMandatoryError,
    MissingValueError,
    ParameterConstructionError,
    UnknownArgumentError,
    UnsupportedTypeError,
    ValueParseError,
)


def parser_params(record_type):
    return RecordArgumentParser(record_type).parameters


@dataclass
class DeployConfig:
    """Test deployment configuration."""

    PARAM_DOCS = {
        'target': 'Environment to deploy to',
    }

    target: str = field(default="staging", metadata={'cli': 'shortname:t;mandatory'})
    replicas: int = field(default=1, metadata={'cli': 'shortname:n;description:number of replicas'})
    dry_run: bool = False
    regions: List[str] = field(default_factory=lambda: ["eu"])
    ports: List[int] = field(default_factory=list, metadata={'cli': 'delimiter: '})


@dataclass
class RequiredPort:
    """Config whose fields have no defaults."""
    port: int = field(metadata={'cli': 'mandatory'})
    host: str
    name: str = "svc"
    attempts: int = field(default=0, init=False)


@dataclass
class WithUnsupported:
    """Config with a field that cannot be bound."""
    name: str = "x"
    ratio: float = 0.5


class TestParseSession:
    """Test per-pass matched-parameter state."""

    def test_mark(self):
        session = ParseSession()
        param = Parameter("port", int, 0)
        assert not session.is_matched(param)
        session.mark(param)
        assert session.is_matched(param)
        assert param.used is True

    def test_missing_mandatory(self):
        session = ParseSession()
        required = Parameter("port", int, 0, "mandatory")
        optional = Parameter("name", str, 1)
        assert session.missing_mandatory([required, optional]) == [required]
        session.mark(required)
        assert session.missing_mandatory([required, optional]) == []


class TestRecordArgumentParser:
    """Test scanning argument vectors."""

    def test_parse_all_types(self):
        parser = RecordArgumentParser(DeployConfig, prog="deploy")
        config = parser.parse_args([
            "--target", "prod",
            "--replicas", "3",
            "--dry_run",
            "--regions", "eu,us",
            "--ports", "80 443",
        ])

        assert config.target == "prod"
        assert config.replicas == 3
        assert config.dry_run is True
        assert config.regions == ["eu", "us"]
        assert config.ports == [80, 443]

    def test_short_names(self):
        config = RecordArgumentParser(DeployConfig).parse_args(["-t", "prod", "-n", "5"])
        assert config.target == "prod"
        assert config.replicas == 5

    def test_defaults_kept(self):
        config = RecordArgumentParser(DeployConfig).parse_args(["-t", "prod"])
        assert config.replicas == 1
        assert config.dry_run is False
        assert config.regions == ["eu"]

    def test_bool_consumes_no_value(self):
        config = RecordArgumentParser(DeployConfig).parse_args(["--dry_run", "-t", "qa"])
        assert config.dry_run is True
        assert config.target == "qa"

    def test_fills_given_record(self):
        existing = DeployConfig(replicas=9)
        result = RecordArgumentParser(DeployConfig).parse_args(["-t", "prod"], namespace=existing)
        assert result is existing
        assert existing.replicas == 9
        assert existing.target == "prod"

    def test_reads_sys_argv(self, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["deploy", "-t", "prod"])
        assert RecordArgumentParser(DeployConfig).parse_args().target == "prod"

    def test_unknown_argument(self):
        with pytest.raises(UnknownArgumentError) as exc_info:
            RecordArgumentParser(DeployConfig).parse_args(["-t", "prod", "--Target", "x"])
        assert exc_info.value.token == "--Target"

    def test_duplicate_argument(self):
        """Test that long and short forms of one field count as the same parameter."""
        with pytest.raises(DuplicateArgumentError) as exc_info:
            RecordArgumentParser(DeployConfig).parse_args(["--target", "a", "-t", "b"])
        assert exc_info.value.field_name == "target"

    def test_missing_value(self):
        with pytest.raises(MissingValueError):
            RecordArgumentParser(DeployConfig).parse_args(["-t"])

    def test_missing_mandatory(self):
        with pytest.raises(MissingMandatoryError) as exc_info:
            RecordArgumentParser(DeployConfig).parse_args(["--replicas", "2"])
        assert exc_info.value.names == ["--target"]
        assert isinstance(exc_info.value, ArgumentParseError)

    def test_value_error_propagates(self):
        with pytest.raises(ValueParseError):
            RecordArgumentParser(DeployConfig).parse_args(["-t", "prod", "--ports", "80 http"])

    def test_unsupported_field_only_fails_when_used(self):
        parser = RecordArgumentParser(WithUnsupported)
        assert parser.parse_args(["--name", "y"]).name == "y"
        with pytest.raises(UnsupportedTypeError):
            parser.parse_args(["--ratio", "0.1"])

    def test_parser_reusable(self):
        """Test that each parse pass starts with fresh state."""
        parser = RecordArgumentParser(DeployConfig)
        first = parser.parse_args(["-t", "a"])
        second = parser.parse_args(["-t", "b"])
        assert (first.target, second.target) == ("a", "b")

    def test_bad_annotation_fails_on_creation(self):
        @dataclass
        class Broken:
            level: int = field(default=0, metadata={'cli': 'shortname:a:b'})

        with pytest.raises(ParameterConstructionError):
            RecordArgumentParser(Broken)

    def test_record_without_defaults(self):
        """Test that fields without defaults are filled before the record is built."""
        parser = RecordArgumentParser(RequiredPort)
        config = parser.parse_args(["--port", "1", "--host", "db", "--attempts", "4"])
        assert config.port == 1
        assert config.host == "db"
        assert config.name == "svc"
        assert config.attempts == 4

    def test_record_without_defaults_mandatory_missing(self):
        """Test that the mandatory check runs before the record is built."""
        with pytest.raises(MissingMandatoryError) as exc_info:
            RecordArgumentParser(RequiredPort).parse_args(["--host", "db"])
        assert exc_info.value.names == ["--port"]

    def test_record_without_defaults_required_field_missing(self):
        """Test that a field without a default is reported even if not marked mandatory."""
        with pytest.raises(MissingMandatoryError) as exc_info:
            RecordArgumentParser(RequiredPort).parse_args(["--port", "1"])
        assert exc_info.value.names == ["--host"]

    def test_record_without_defaults_bad_value(self):
        with pytest.raises(ValueParseError):
            RecordArgumentParser(RequiredPort).parse_args(["--port", "x", "--host", "db"])

    def test_overrides_in_match_order(self):
        parser = RecordArgumentParser(DeployConfig)
        config, overrides = parser.parse_args_with_overrides(["--dry_run", "-n", "2", "-t", "prod"])
        assert overrides == ["dry_run", "replicas", "target"]
        assert config.replicas == 2

    def test_pending_record_collects_values(self):
        pending = PendingRecord(RequiredPort)
        param = next(p for p in parser_params(RequiredPort) if p.name == "host")
        param.setter_callback(pending)("db")
        assert pending.values == {"host": "db"}
        assert [a.name for a in pending.missing_required()] == ["port"]


class TestHelpOutput:
    """Test help formatting and the help flag."""

    def test_format_help(self):
        parser = RecordArgumentParser(DeployConfig, prog="deploy", description="Deploy a service")
        text = parser.format_help()

        assert text.startswith("usage: deploy [options]\r\n")
        assert "Deploy a service" in text
        assert "  --target -t str (mandatory) : Environment to deploy to\r\n" in text
        assert "  --replicas -n int : number of replicas\r\n" in text
        assert "  --ports list[int] delimiter whitespace \r\n" in text

    def test_help_flag_exits(self, capsys):
        parser = RecordArgumentParser(DeployConfig, prog="deploy")
        with pytest.raises(SystemExit) as exc_info:
            parser.parse_args(["--help"])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "usage: deploy" in captured.out
        assert "--dry_run bool" in captured.out

    def test_help_disabled(self):
        parser = RecordArgumentParser(DeployConfig, add_help=False)
        with pytest.raises(UnknownArgumentError):
            parser.parse_args(["-h"])


class TestUtils:
    """Test record conversion helpers."""

    def test_record_to_dict(self):
        config = DeployConfig(target="prod", ports=[80])
        assert record_to_dict(config) == {
            "target": "prod",
            "replicas": 1,
            "dry_run": False,
            "regions": ["eu"],
            "ports": [80],
        }

    def test_export_record_to_yaml(self, tmp_path):
        config = RecordArgumentParser(DeployConfig).parse_args(["-t", "prod", "--regions", "eu,us"])
        output_file = tmp_path / "deploy.yaml"

        export_record_to_yaml(config, str(output_file))

        with open(output_file) as f:
            loaded = yaml.safe_load(f)
        assert loaded["target"] == "prod"
        assert loaded["regions"] == ["eu", "us"]
        assert list(loaded) == ["target", "replicas", "dry_run", "regions", "ports"]

    def test_record_to_dict_selected_names(self):
        config = DeployConfig(target="prod", replicas=4)
        assert record_to_dict(config, ["replicas", "target"]) == {"target": "prod", "replicas": 4}

    def test_record_to_dict_copies_lists(self):
        config = DeployConfig()
        values = record_to_dict(config)
        values["regions"].append("us")
        assert config.regions == ["eu"]

    def test_record_to_args(self):
        """Test that the rebuilt command line uses long names and each field's delimiter."""
        config = DeployConfig(target="prod", dry_run=True, regions=["eu", "us"], ports=[80, 443])
        assert record_to_args(config) == [
            "--target", "prod",
            "--replicas", "1",
            "--dry_run",
            "--regions", "eu,us",
            "--ports", "80 443",
        ]

    def test_record_to_args_reparses(self):
        parser = RecordArgumentParser(DeployConfig)
        config, overrides = parser.parse_args_with_overrides(["-t", "prod", "--ports", "1 2"])
        args = record_to_args(config, overrides)
        assert args == ["--target", "prod", "--ports", "1 2"]
        assert parser.parse_args(args) == config

    def test_record_to_args_skips_unsupported_and_false(self):
        assert record_to_args(WithUnsupported()) == ["--name", "x"]
        assert "--dry_run" not in record_to_args(DeployConfig())

    def test_export_only_overrides(self, tmp_path):
        parser = RecordArgumentParser(DeployConfig)
        config, overrides = parser.parse_args_with_overrides(["-n", "3", "-t", "prod"])
        output_file = tmp_path / "overrides.yaml"

        export_record_to_yaml(config, str(output_file), names=overrides)

        with open(output_file) as f:
            assert yaml.safe_load(f) == {"target": "prod", "replicas": 3}
