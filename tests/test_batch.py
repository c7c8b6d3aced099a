"""Tests for batch.py: command-line batch runner."""

import pytest

import batch


class TestParser:

    def test_defaults_reproduce_sixty_degree_run(self):
        args = batch.build_parser().parse_args([])
        assert args.length == 1.0
        assert args.radius == 0.05
        assert args.theta0 == 1.047197551
        assert args.dt == 0.001
        assert args.t_end == 30.0
        assert args.fluid == "air"
        assert args.inertial_drag is False
        assert args.output == "deg_60.csv"

    def test_unknown_fluid_rejected(self):
        with pytest.raises(SystemExit):
            batch.build_parser().parse_args(["--fluid", "oil"])


class TestMain:

    def test_writes_samples(self, tmp_path):
        path = tmp_path / "run.csv"
        code = batch.main([
            "--t-end", "0.5", "--dt", "0.01", "--output", str(path),
        ])
        assert code == 0
        lines = path.read_text().splitlines()
        assert len(lines) == 51
        assert lines[0].startswith("0.000, 1.047197551")

    def test_water_with_inertial_drag(self, tmp_path):
        path = tmp_path / "water.csv"
        code = batch.main([
            "--fluid", "water", "--inertial-drag", "--theta0", "0.5",
            "--t-end", "1.0", "--dt", "0.1", "--output", str(path),
        ])
        assert code == 0
        assert len(path.read_text().splitlines()) == 11

    def test_unwritable_output_fails(self, tmp_path):
        code = batch.main([
            "--t-end", "0.1", "--dt", "0.01",
            "--output", str(tmp_path / "missing" / "run.csv"),
        ])
        assert code == 1

    def test_invalid_sampling_fails(self, tmp_path):
        code = batch.main([
            "--dt", "0", "--output", str(tmp_path / "run.csv"),
        ])
        assert code == 1

    def test_degenerate_geometry_fails(self, tmp_path):
        code = batch.main([
            "--length", "-1", "--output", str(tmp_path / "run.csv"),
        ])
        assert code == 2
