import json
import logging

import pytest

from dialogscript.core.config import CompilerConfig
from dialogscript.core.errors import GraphFormatError
from dialogscript.graph.nodes import Command, Choice, DialogueNode, DialogueGraph
from dialogscript.resources.graph_io import (
    graph_to_dict,
    graph_from_dict,
    save_graph,
    load_graph,
    load_graph_directory,
    read_script,
    compile_file,
    compile_dialogue_file,
    find_dangling_targets,
)


@pytest.fixture
def graph():
    return DialogueGraph(nodes=(
        DialogueNode(
            tag="start",
            character_id="Alice",
            text="Hello there.\nHow are you?",
            commands=(Command(name="heal", parameter="10"), Command(name="shake")),
            choices=(Choice(text="Fine", target_tag="fine"),),
        ),
        DialogueNode(tag="fine", character_id="Alice", text="Good."),
    ))


def test_graph_to_dict(graph):
    data = graph_to_dict(graph, "intro")

    assert data["id"] == "intro"
    assert data["start"] == "start"
    first = data["nodes"][0]
    assert first["character"] == "Alice"
    assert first["commands"] == [
        {"name": "heal", "parameter": "10"},
        {"name": "shake", "parameter": None},
    ]
    assert first["choices"] == [{"text": "Fine", "target": "fine"}]


def test_save_and_load(tmp_path, graph):
    path = tmp_path / "intro.json"
    save_graph(graph, path)

    with open(path, encoding="utf-8") as f:
        assert json.load(f)["id"] == "intro"

    assert load_graph(path) == graph


def test_missing_optional_fields():
    graph = graph_from_dict({"nodes": [{"tag": "only"}]})

    node = graph.start
    assert node.tag == "only"
    assert node.character_id is None
    assert node.text == ""
    assert node.commands == ()


def test_schema_violation():
    with pytest.raises(GraphFormatError) as exc:
        graph_from_dict({"nodes": [{"text": "no tag"}]}, "broken.json")

    assert "broken.json" in str(exc.value)
    assert exc.value.source == "broken.json"


def test_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(GraphFormatError):
        load_graph(path)


def test_load_directory_skips_invalid(tmp_path, graph, caplog):
    save_graph(graph, tmp_path / "good.json")
    with open(tmp_path / "broken.json", "w", encoding="utf-8") as f:
        json.dump({"nodes": [{"tag": ""}]}, f)

    with caplog.at_level(logging.ERROR):
        graphs = load_graph_directory(tmp_path)

    assert list(graphs) == ["good"]
    assert "broken.json" in caplog.text


def test_load_missing_directory(tmp_path):
    assert load_graph_directory(tmp_path / "nowhere") == {}


def test_read_script_strips_bom(tmp_path):
    path = tmp_path / "bom.dlg"
    path.write_bytes("\ufeff[intro]\nAlice:\nHi\n".encode("utf-8"))

    assert read_script(path).startswith("[intro]")
    assert compile_file(path).tags == ["intro"]


def test_compile_file_with_config(script_file):
    graph = compile_file(script_file, CompilerConfig(flush_at_end=False))
    assert graph.tags == ["start"]


def test_compile_dialogue_file_default_output(script_file):
    output = compile_dialogue_file(script_file)

    assert output == script_file.with_suffix(".json")
    graph = load_graph(output)
    assert graph.tags == ["start", "good_reply"]

    with open(output, encoding="utf-8") as f:
        assert json.load(f)["id"] == "intro"


def test_compile_dialogue_file_explicit_output(script_file, tmp_path):
    target = tmp_path / "out" / "graph.json"
    target.parent.mkdir()

    assert compile_dialogue_file(script_file, target) == target
    assert target.exists()


def test_find_dangling_targets(sample_script):
    from dialogscript.compiler.compiler import compile_script

    graph = compile_script(sample_script)
    assert find_dangling_targets(graph) == [("start", "bad_reply")]


def test_no_dangling_targets(graph):
    assert find_dangling_targets(graph) == []
