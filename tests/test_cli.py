"""
Tests for the delivery-datagen command line.
"""

import pytest

from delivery_datagen.cli import build_config, main, parse_args

SMALL = [
    "--restaurants", "3",
    "--customers", "5",
    "--drivers", "4",
    "--orders", "10",
    "--promotions", "2",
    "--seed", "42",
]


class TestParseArgs:
    """Argument parsing and config layering."""

    def test_defaults(self):
        config = build_config(parse_args([]))
        assert config.orders == 5000
        assert config.seed is None
        assert not config.include_details

    def test_flags_override_yaml(self, tmp_path):
        path = tmp_path / "datagen.yaml"
        path.write_text("orders: 200\ncustomers: 30\n")
        config = build_config(parse_args(["--config", str(path), "--orders", "12"]))
        assert config.orders == 12
        assert config.customers == 30

    def test_switches(self, tmp_path):
        args = parse_args(["--with-details", "--reset-sequences", "--output", str(tmp_path)])
        config = build_config(args)
        assert config.include_details
        assert config.reset_sequences
        assert config.output_dir == tmp_path

    def test_verify_db_requires_schema(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--verify-db"])
        assert exc_info.value.code == 2


class TestMain:
    """Exit codes and output."""

    def test_success(self, tmp_path, capsys):
        output_dir = tmp_path / "results"
        assert main(SMALL + ["--output", str(output_dir)]) == 0
        out = capsys.readouterr().out
        assert "Success!" in out
        assert "[FAIL]" not in out
        assert (output_dir / "order_promotions.sql").exists()

    def test_invalid_count(self, tmp_path, capsys):
        output_dir = tmp_path / "results"
        assert main(["--orders", "0", "--output", str(output_dir)]) == 1
        assert "invalid configuration" in capsys.readouterr().err
        assert not output_dir.exists()

    def test_bad_config_file(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "missing.yaml")]) == 1
        assert "Cannot read" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "body,key",
        [
            ('promotion_rate: "0.2x"\n', "promotion_rate"),
            ("output_dir: null\n", "output_dir"),
            ("seed: abc\n", "seed"),
            ("reference_time: 2024-04-01 12:00:00+08:00\n", "reference_time"),
        ],
    )
    def test_malformed_yaml_value(self, tmp_path, capsys, body, key):
        """Wrongly typed config values exit 1 with a message, not a traceback."""
        path = tmp_path / "datagen.yaml"
        path.write_text(body)
        output_dir = tmp_path / "results"
        assert main(SMALL + ["--config", str(path), "--output", str(output_dir)]) == 1
        err = capsys.readouterr().err
        assert "invalid configuration" in err
        assert key in err
        assert not output_dir.exists()

    def test_quoted_numeric_rate_accepted(self, tmp_path):
        path = tmp_path / "datagen.yaml"
        path.write_text('promotion_rate: "0.2"\n')
        assert main(SMALL + ["--config", str(path), "--output", str(tmp_path / "out")]) == 0

    def test_unwritable_output(self, tmp_path, capsys):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        assert main(SMALL + ["--output", str(blocker / "results")]) == 1
        assert "Cannot write" in capsys.readouterr().err

    def test_skip_validation(self, tmp_path, capsys):
        assert main(SMALL + ["--skip-validation", "--output", str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert "Validation skipped" in out
        assert "Validation Suite" not in out
