"""End-to-end tests for the report pipeline and the command line entry point."""

import pytest

from movie_tlbx.analysis.prediction import PredictionResult
from movie_tlbx.cli import main
from movie_tlbx.config import ReportConfig
from movie_tlbx.report import EXAMPLE_MOVIE, MovieReport, run_report


@pytest.fixture(scope="module")
def report(movies_dataset) -> MovieReport:
    return run_report(movies_dataset, ReportConfig(cv_folds=3))


class TestRunReport:
    def test_report_contents(self, report: MovieReport) -> None:
        assert report.comparison.reject_null
        assert isinstance(report.prediction, PredictionResult)
        assert report.prediction.level == 0.95
        assert report.final_model is report.selection.final_model
        assert report.diagnostics.model is report.final_model
        assert report.example == EXAMPLE_MOVIE

    def test_selection_improves_on_full_model(self, report: MovieReport) -> None:
        assert report.selection.final_step.criterion <= report.full_model.criterion
        assert set(report.final_model.features) <= set(report.full_model.features)
        assert report.diagnostics.metrics.cv_scores is not None

    def test_to_text(self, report: MovieReport) -> None:
        text = report.to_text()
        for heading in ("Rating comparison", "Model selection", "Final model coefficients", "Prediction for"):
            assert heading in text
        assert "Harbor Lights" in text

    def test_save_figures(self, report: MovieReport, tmp_path) -> None:
        paths = report.save_figures(tmp_path / "figs")
        assert sorted(p.name for p in paths) == [
            "rating_differences.png",
            "residual_diagnostics.png",
            "selection_path.png",
        ]
        assert all(p.stat().st_size > 0 for p in paths)


class TestReportConfig:
    def test_defaults(self) -> None:
        config = ReportConfig()
        assert config.scale == 10.0
        assert config.bounds == (0.0, 100.0)
        assert config.on_collinear == "drop"

    @pytest.mark.parametrize(
        "kwargs",
        [{"alpha": 1.5}, {"level": 0.0}, {"bounds": (100.0, 0.0)}, {"scale": 0.0}, {"warn_fraction": 2.0}],
    )
    def test_invalid_values(self, kwargs) -> None:
        with pytest.raises(ValueError):
            ReportConfig(**kwargs)


class TestCli:
    def test_main_writes_report(self, movies_raw, tmp_path, capsys) -> None:
        csv_path = tmp_path / "movies.csv"
        movies_raw.to_csv(csv_path, index=False)
        out_dir = tmp_path / "out"
        text_path = tmp_path / "report.txt"

        code = main(
            [
                "--csv",
                str(csv_path),
                "--out",
                str(out_dir),
                "--text",
                str(text_path),
                "--criterion",
                "bic",
                "--log-level",
                "WARNING",
            ],
        )

        assert code == 0
        assert "Movie rating report" in capsys.readouterr().out
        assert "Model selection (backward, BIC)" in text_path.read_text(encoding="utf-8")
        assert (out_dir / "selection_path.png").exists()

    def test_main_missing_csv(self, tmp_path) -> None:
        assert main(["--csv", str(tmp_path / "missing.csv"), "--log-level", "ERROR"]) == 1

    def test_invalid_choice_exits(self) -> None:
        with pytest.raises(SystemExit):
            main(["--direction", "sideways"])
