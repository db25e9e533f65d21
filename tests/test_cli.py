import json
from unittest.mock import patch

from dialogscript.__main__ import main, EXIT_OK, EXIT_DANGLING, EXIT_ERROR
from dialogscript.core.errors import GraphFormatError
from dialogscript.resources.graph_io import load_graph


def test_compile_to_default_output(script_file):
    assert main([str(script_file)]) == EXIT_OK
    assert load_graph(script_file.with_suffix(".json")).tags == ["start", "good_reply"]


def test_compile_to_explicit_output(script_file, tmp_path):
    output = tmp_path / "compiled.json"
    assert main([str(script_file), "-o", str(output)]) == EXIT_OK
    assert output.exists()


def test_no_flush(script_file):
    assert main([str(script_file), "--no-flush"]) == EXIT_OK
    assert load_graph(script_file.with_suffix(".json")).tags == ["start"]


def test_config_file(script_file, tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"start_tag": "opening"}), encoding="utf-8")
    script_file.write_text("Alice:\nHi\n", encoding="utf-8")

    assert main([str(script_file), "--config", str(config)]) == EXIT_OK
    assert load_graph(script_file.with_suffix(".json")).tags == ["opening"]


def test_invalid_config(script_file, tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"max_nodes": -1}), encoding="utf-8")

    assert main([str(script_file), "--config", str(config)]) == EXIT_ERROR


def test_missing_input(tmp_path):
    assert main([str(tmp_path / "missing.dlg")]) == EXIT_ERROR


def test_check_reports_dangling_targets(script_file, caplog):
    assert main([str(script_file), "--check"]) == EXIT_DANGLING
    assert "bad_reply" in caplog.text


def test_check_passes(script_file):
    script_file.write_text("Alice:\nHi\n\tAgain\n\t[start]\n", encoding="utf-8")
    assert main([str(script_file), "--check"]) == EXIT_OK


def test_check_with_empty_tag_content(script_file):
    script_file.write_text("[[]]\nAlice:\nHi\n", encoding="utf-8")

    assert main([str(script_file), "--check"]) == EXIT_OK
    assert load_graph(script_file.with_suffix(".json")).tags == ["start"]


def test_package_error_gives_error_status(script_file):
    with patch("dialogscript.__main__.compile_file", side_effect=GraphFormatError("bad graph")):
        assert main([str(script_file), "--check"]) == EXIT_ERROR
