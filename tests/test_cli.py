"""Tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from bayes_classifier import NaiveBayesModel, load_model, save_model
from bayes_classifier.cli import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def model_file(tmp_path: Path, trained_food_model: NaiveBayesModel) -> Path:
    path = tmp_path / "foods.json"
    save_model(trained_food_model, path)
    return path


class TestTrainCommand:
    """Tests for ``bayes-classifier train``."""

    def test_trains_and_saves(self, runner: CliRunner, tmp_path: Path, food_tsv: Path) -> None:
        output = tmp_path / "out" / "model.json"
        result = runner.invoke(main, ["train", str(food_tsv), "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert "meat" in result.output
        assert "veggie" in result.output

        model = load_model(output)
        assert model.is_trained
        assert model.classify("salami pancetta beef ribs") == "meat"

    def test_smoothing_option(self, runner: CliRunner, tmp_path: Path, food_tsv: Path) -> None:
        output = tmp_path / "model.json"
        result = runner.invoke(
            main, ["train", str(food_tsv), "-o", str(output), "--smoothing", "0.1"]
        )
        assert result.exit_code == 0, result.output
        assert load_model(output).smoothing == 0.1

    def test_invalid_smoothing(self, runner: CliRunner, tmp_path: Path, food_tsv: Path) -> None:
        output = tmp_path / "model.json"
        result = runner.invoke(
            main, ["train", str(food_tsv), "-o", str(output), "--smoothing", "0"]
        )
        assert result.exit_code == 1
        assert "Error" in result.output
        assert not output.exists()

    def test_empty_corpus(self, runner: CliRunner, tmp_path: Path) -> None:
        corpus = tmp_path / "empty.tsv"
        corpus.write_text("\n", encoding="utf-8")
        result = runner.invoke(main, ["train", str(corpus), "-o", str(tmp_path / "m.json")])
        assert result.exit_code == 1
        assert "no documents" in result.output

    def test_malformed_corpus(self, runner: CliRunner, tmp_path: Path) -> None:
        corpus = tmp_path / "bad.tsv"
        corpus.write_text("meat pork\n", encoding="utf-8")
        result = runner.invoke(main, ["train", str(corpus), "-o", str(tmp_path / "m.json")])
        assert result.exit_code == 1
        assert "line 1" in result.output

    def test_output_required(self, runner: CliRunner, food_tsv: Path) -> None:
        result = runner.invoke(main, ["train", str(food_tsv)])
        assert result.exit_code == 2


class TestClassifyCommand:
    """Tests for ``bayes-classifier classify``."""

    def test_json_output(self, runner: CliRunner, model_file: Path) -> None:
        result = runner.invoke(
            main, ["classify", str(model_file), "salami pancetta beef ribs", "-o", "json"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data[0]["label"] == "meat"
        assert sum(data[0]["probabilities"].values()) == pytest.approx(1.0)

    def test_multiple_texts(self, runner: CliRunner, model_file: Path) -> None:
        result = runner.invoke(
            main, ["classify", str(model_file), "pork chop", "okra radish", "-o", "json"]
        )
        assert result.exit_code == 0, result.output
        assert [r["label"] for r in json.loads(result.output)] == ["meat", "veggie"]

    def test_file_input(self, runner: CliRunner, model_file: Path, tmp_path: Path) -> None:
        doc = tmp_path / "doc.txt"
        doc.write_text("azuki bean and okra", encoding="utf-8")
        result = runner.invoke(
            main, ["classify", str(model_file), "--file", str(doc), "-o", "json"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data[0]["input"] == str(doc)
        assert data[0]["label"] == "veggie"

    def test_rich_output(self, runner: CliRunner, model_file: Path) -> None:
        result = runner.invoke(main, ["classify", str(model_file), "pork"])
        assert result.exit_code == 0, result.output
        assert "meat" in result.output

    def test_requires_input(self, runner: CliRunner, model_file: Path) -> None:
        result = runner.invoke(main, ["classify", str(model_file)])
        assert result.exit_code == 2
        assert "TEXT" in result.output

    def test_untrained_model(self, runner: CliRunner, tmp_path: Path,
                             food_model: NaiveBayesModel) -> None:
        path = tmp_path / "untrained.json"
        save_model(food_model, path)
        result = runner.invoke(main, ["classify", str(path), "pork"])
        assert result.exit_code == 1
        assert "not trained" in result.output

    def test_corrupt_model(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "corrupt.json"
        path.write_text("{]", encoding="utf-8")
        result = runner.invoke(main, ["classify", str(path), "pork"])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output


class TestInspectCommand:
    """Tests for ``bayes-classifier inspect``."""

    def test_shows_labels_and_priors(self, runner: CliRunner, model_file: Path) -> None:
        result = runner.invoke(main, ["inspect", str(model_file)])
        assert result.exit_code == 0, result.output
        assert "meat" in result.output
        assert "veggie" in result.output
        assert "50.00%" in result.output

    def test_untrained_model(self, runner: CliRunner, tmp_path: Path,
                             food_model: NaiveBayesModel) -> None:
        path = tmp_path / "untrained.json"
        save_model(food_model, path)
        result = runner.invoke(main, ["inspect", str(path)])
        assert result.exit_code == 0, result.output
        assert "untrained" in result.output

    def test_verbose_flag(self, runner: CliRunner, model_file: Path) -> None:
        result = runner.invoke(main, ["-v", "inspect", str(model_file)])
        assert result.exit_code == 0, result.output


class TestUnreadableInput:
    """Non-UTF-8 input is reported as an error, not a traceback."""

    def test_binary_model_inspect(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe\x00garbage")
        result = runner.invoke(main, ["inspect", str(path)])
        assert result.exit_code == 1
        assert "Error" in result.output
        assert "UTF-8" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_binary_model_classify(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe\x00garbage")
        result = runner.invoke(main, ["classify", str(path), "pork"])
        assert result.exit_code == 1
        assert "UTF-8" in result.output

    def test_binary_text_file(self, runner: CliRunner, model_file: Path,
                              tmp_path: Path) -> None:
        doc = tmp_path / "doc.txt"
        doc.write_bytes(b"pork \xff\xfe")
        result = runner.invoke(main, ["classify", str(model_file), "--file", str(doc)])
        assert result.exit_code == 1
        assert "Error" in result.output
        assert "UTF-8" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)
