"""
Tests for the id3tree command-line interface.
"""

import json

import pytest

from id3tree.cli import EXIT_FAILURE, EXIT_OK, EXIT_UNRECOGNIZED, main


@pytest.fixture
def model_path(weather_csv, tmp_path):
    path = tmp_path / "model.json"
    assert main(["train", str(weather_csv), "--output", str(path)]) == EXIT_OK
    return path


class TestTrain:
    """Test the train sub-command."""

    def test_writes_model(self, model_path, capsys) -> None:
        """The saved model is a JSON list of node records."""
        records = json.loads(model_path.read_text())
        assert len(records) == 8
        assert records[0]["split_attribute_index"] == 0

    def test_reports_summary(self, weather_csv, tmp_path, capsys) -> None:
        main(["train", str(weather_csv), "-o", str(tmp_path / "m.json")])
        assert "Trained 8 nodes from 14 rows" in capsys.readouterr().out

    def test_print_tree_and_dot(self, weather_csv, tmp_path, capsys) -> None:
        dot_path = tmp_path / "tree.dot"
        status = main([
            "train", str(weather_csv),
            "-o", str(tmp_path / "m.json"),
            "--print-tree",
            "--dot", str(dot_path),
        ])
        assert status == EXIT_OK
        assert "Outlook = Rain, Wind = Strong, Label: No" in capsys.readouterr().out
        assert 'label="Outlook"' in dot_path.read_text()

    def test_threshold_flag(self, weather_csv, tmp_path) -> None:
        """A low threshold prunes the root into a single leaf."""
        path = tmp_path / "m.json"
        main(["train", str(weather_csv), "-o", str(path), "--threshold", "0.5"])
        records = json.loads(path.read_text())
        assert len(records) == 1
        assert records[0]["label"] == "Yes"

    def test_missing_csv(self, tmp_path, capsys) -> None:
        status = main(["train", str(tmp_path / "absent.csv"), "-o", str(tmp_path / "m.json")])
        assert status == EXIT_FAILURE
        assert "could not be opened" in capsys.readouterr().err
        assert not (tmp_path / "m.json").exists()

    def test_malformed_csv(self, tmp_path, capsys) -> None:
        path = tmp_path / "bad.csv"
        path.write_text("a,label\nx,yes\nx,y,no\n")
        assert main(["train", str(path), "-o", str(tmp_path / "m.json")]) == EXIT_FAILURE
        assert "Row 2" in capsys.readouterr().err

    def test_header_only_csv(self, tmp_path, capsys) -> None:
        """A CSV without data rows is reported, not a traceback."""
        path = tmp_path / "header.csv"
        path.write_text("a,label\n")
        assert main(["train", str(path), "-o", str(tmp_path / "m.json")]) == EXIT_FAILURE
        assert "empty dataset" in capsys.readouterr().err
        assert not (tmp_path / "m.json").exists()

    @pytest.mark.parametrize("threshold", ["2", "0", "-0.1"])
    def test_threshold_out_of_range(self, weather_csv, tmp_path, capsys, threshold) -> None:
        status = main([
            "train", str(weather_csv),
            "-o", str(tmp_path / "m.json"),
            "--threshold", threshold,
        ])
        assert status == EXIT_FAILURE
        assert "majority_threshold" in capsys.readouterr().err

    def test_logs_stay_off_stdout(self, weather_csv, tmp_path, capsys) -> None:
        """INFO logs go to stderr; stdout only has the summary."""
        main(["--log-level", "INFO", "train", str(weather_csv), "-o", str(tmp_path / "m.json")])
        captured = capsys.readouterr()
        assert captured.out.splitlines() == [
            f"Trained 8 nodes from 14 rows; model saved to {tmp_path / 'm.json'}"
        ]
        assert "Built tree with 8 nodes" in captured.err


class TestClassify:
    """Test the classify sub-command."""

    def test_prints_labels(self, model_path, capsys) -> None:
        capsys.readouterr()
        status = main([
            "classify", str(model_path),
            "Sunny,Cool,High,Strong",
            "Overcast,Hot,High,Weak",
        ])
        assert status == EXIT_OK
        assert capsys.readouterr().out.splitlines() == ["No", "Yes"]

    def test_custom_separator(self, model_path, capsys) -> None:
        capsys.readouterr()
        main(["classify", str(model_path), "Rain;Mild;High;Weak", "--sep", ";"])
        assert capsys.readouterr().out.strip() == "Yes"

    def test_unrecognized_category(self, model_path, capsys) -> None:
        """An unseen value is an error, never a label."""
        capsys.readouterr()
        status = main(["classify", str(model_path), "Fog,Hot,High,Weak", "Overcast,Hot,High,Weak"])
        captured = capsys.readouterr()
        assert status == EXIT_UNRECOGNIZED
        assert captured.out.splitlines() == ["Yes"]
        assert "Fog" in captured.err

    def test_info_logs_do_not_mix_with_labels(self, model_path, capsys) -> None:
        """With --log-level INFO the label output stays parseable."""
        capsys.readouterr()
        status = main([
            "--log-level", "INFO", "classify", str(model_path), "Sunny,Cool,Normal,Weak",
        ])
        captured = capsys.readouterr()
        assert status == EXIT_OK
        assert captured.out.splitlines() == ["Yes"]
        assert "Loaded 8 nodes" in captured.err

    def test_short_row(self, model_path, capsys) -> None:
        """A row missing the tested field is reported per row."""
        capsys.readouterr()
        status = main(["classify", str(model_path), "Sunny,Cool", "Overcast"])
        captured = capsys.readouterr()
        assert status == EXIT_UNRECOGNIZED
        assert captured.out.splitlines() == ["Yes"]
        assert "attribute 2" in captured.err

    def test_missing_model(self, tmp_path, capsys) -> None:
        assert main(["classify", str(tmp_path / "absent.json"), "a"]) == EXIT_FAILURE

    def test_corrupt_model(self, tmp_path) -> None:
        path = tmp_path / "model.json"
        path.write_text("{}")
        assert main(["classify", str(path), "a"]) == EXIT_FAILURE
