"""End-to-end tests for the command line interface."""

import pandas as pd
import pytest
import yaml

from modelSelector.cli.argument_parser import comma_separated_items, parse_arguments, str2bool
from modelSelector.main import main
import modelSelector.pipelines.compare as compare_pipeline
from modelSelector.utils.helpers import load_object


class TestArgumentParser:
    """Argument parsing."""

    def test_compare_defaults(self):
        args = parse_arguments(["compare", "--data_file", "palmetto.csv"])

        assert args.command == "compare"
        assert args.folds is None
        assert args.seed is None
        assert args.plots is True

    def test_pca_lists(self):
        args = parse_arguments(["pca", "--data_file", "usda.csv", "--food_groups", "A, B,", "--n_components", "2"])

        assert args.food_groups == ["A", "B"]
        assert args.n_components == 2

    def test_invalid_folds(self):
        with pytest.raises(SystemExit):
            parse_arguments(["compare", "--data_file", "x.csv", "--folds", "0"])

    def test_helpers(self):
        assert str2bool("yes") is True
        assert str2bool("0") is False
        assert comma_separated_items("") == []


class TestCompareCommand:
    """compare subcommand."""

    def test_outputs_written(self, tmp_path, palmetto_csv):
        output = tmp_path / "out"

        main(["compare", "--data_file", str(palmetto_csv), "--output", str(output)])

        for name in ["cv_fold_accuracy.csv", "cv_summary.csv", "aicc_ranking.csv", "final_coefficients.csv",
                     "final_predictions.csv", "classification_summary.csv", "confusion_matrix.csv",
                     "report.html", "results.json", "final_model.joblib", "run.log"]:
            assert (output / name).exists(), name
        assert (output / "figures" / "cv_accuracy.png").exists()

        ranking = pd.read_csv(output / "aicc_ranking.csv")
        assert ranking['Modnames'].tolist() == ["Model 1", "Model 2"]
        assert len(pd.read_csv(output / "cv_fold_accuracy.csv")) == 20

    def test_saved_model_predicts(self, tmp_path, palmetto_csv):
        output = tmp_path / "out"
        main(["compare", "--data_file", str(palmetto_csv), "--output", str(output), "--plots", "false"])

        classifier = load_object(output / "final_model.joblib")
        predictions = pd.read_csv(output / "final_predictions.csv")
        X = predictions[list(classifier.spec.predictors)].to_numpy()

        assert classifier.spec.label == "Model 1"
        assert classifier.predict_proba(X) == pytest.approx(predictions['probability'].to_numpy())

    def test_config_file(self, tmp_path, palmetto_csv):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump({
            "folds": 5,
            "specifications": {"Length": ["length"], "Width": ["width"]},
        }))
        output = tmp_path / "out"

        main(["compare", "--data_file", str(palmetto_csv), "--config", str(config_path),
              "--output", str(output), "--plots", "false"])

        folds = pd.read_csv(output / "cv_fold_accuracy.csv")
        assert sorted(folds['fold'].unique()) == [1, 2, 3, 4, 5]
        assert set(folds['model']) == {"Length", "Width"}

    def test_missing_data_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["compare", "--data_file", str(tmp_path / "missing.csv"), "--output", str(tmp_path / "out")])

        assert exc_info.value.code == 2

    def test_too_many_folds(self, tmp_path, palmetto_csv):
        with pytest.raises(SystemExit) as exc_info:
            main(["compare", "--data_file", str(palmetto_csv), "--output", str(tmp_path / "out"),
                  "--folds", "500", "--plots", "false"])

        assert exc_info.value.code == 3

    def test_unexpected_failure(self, tmp_path, palmetto_csv, monkeypatch):
        def broken_handler(args):
            raise RuntimeError("disk quota exceeded")

        monkeypatch.setattr(compare_pipeline, "handle_compare", broken_handler)

        with pytest.raises(SystemExit) as exc_info:
            main(["compare", "--data_file", str(palmetto_csv), "--output", str(tmp_path / "out")])

        assert exc_info.value.code == 1


class TestPCACommand:
    """pca subcommand."""

    def test_outputs_written(self, tmp_path, food_csv):
        output = tmp_path / "pca"

        main(["pca", "--data_file", str(food_csv), "--output", str(output),
              "--food_groups", "Fruits and Fruit Juices,Nut and Seed Products"])

        for name in ["pca_explained_variance.csv", "pca_loadings.csv", "pca_scores.csv", "pca_report.html"]:
            assert (output / name).exists(), name
        assert (output / "figures" / "pca_biplot.png").exists()

        scores = pd.read_csv(output / "pca_scores.csv")
        assert len(scores) == 60
        assert "food_group" in scores.columns

    def test_food_groups_without_group_column(self, tmp_path, food_csv):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump({"pca": {"group_column": None}}))

        with pytest.raises(SystemExit) as exc_info:
            main(["pca", "--data_file", str(food_csv), "--config", str(config_path),
                  "--output", str(tmp_path / "pca"), "--food_groups", "Fruits and Fruit Juices",
                  "--plots", "false"])

        assert exc_info.value.code == 3
