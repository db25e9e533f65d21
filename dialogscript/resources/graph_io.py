"""
Graph resources - reading scripts and saving/loading compiled graphs.

Compiled graphs are stored as JSON:

```
{
  "id": "intro",
  "start": "start",
  "nodes": [
    {
      "tag": "start",
      "character": "Alice",
      "text": "Hello there.",
      "commands": [{"name": "heal", "parameter": "10"}],
      "choices": [{"text": "Bye", "target": "bye"}]
    }
  ]
}
```
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import jsonschema

from dialogscript.compiler.compiler import DialogueCompiler
from dialogscript.core.config import CompilerConfig
from dialogscript.core.errors import GraphFormatError
from dialogscript.graph.nodes import Command, Choice, DialogueNode, DialogueGraph

logger = logging.getLogger(__name__)

_NULLABLE_STRING = {"type": ["string", "null"]}

GRAPH_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["nodes"],
    "properties": {
        "id": _NULLABLE_STRING,
        "start": _NULLABLE_STRING,
        "nodes": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["tag"],
                "additionalProperties": False,
                "properties": {
                    "tag": {"type": "string", "minLength": 1},
                    "character": _NULLABLE_STRING,
                    "text": {"type": "string"},
                    "commands": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["name"],
                            "additionalProperties": False,
                            "properties": {
                                "name": {"type": "string"},
                                "parameter": _NULLABLE_STRING,
                            },
                        },
                    },
                    "choices": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["text"],
                            "additionalProperties": False,
                            "properties": {
                                "text": {"type": "string"},
                                "target": _NULLABLE_STRING,
                            },
                        },
                    },
                },
            },
        },
    },
}


def graph_to_dict(graph: DialogueGraph, graph_id: Optional[str] = None) -> dict[str, Any]:
    """Convert a graph to its JSON form."""
    start = graph.start
    return {
        'id': graph_id,
        'start': start.tag if start else None,
        'nodes': [
            {
                'tag': node.tag,
                'character': node.character_id,
                'text': node.text,
                'commands': [
                    {'name': command.name, 'parameter': command.parameter}
                    for command in node.commands
                ],
                'choices': [
                    {'text': choice.text, 'target': choice.target_tag}
                    for choice in node.choices
                ],
            }
            for node in graph.nodes
        ],
    }


def graph_from_dict(data: Any, source: Optional[str] = None) -> DialogueGraph:
    """
    Build a graph from its JSON form.

    Args:
        data: Decoded JSON
        source: Name used in error messages (usually the file path)

    Raises:
        GraphFormatError: If the data does not match GRAPH_SCHEMA
    """
    try:
        jsonschema.validate(instance=data, schema=GRAPH_SCHEMA)
    except jsonschema.ValidationError as e:
        raise GraphFormatError(e.message, source) from e

    nodes = []
    for entry in data['nodes']:
        nodes.append(DialogueNode(
            tag=entry['tag'],
            character_id=entry.get('character'),
            text=entry.get('text', ''),
            commands=tuple(
                Command(name=c['name'], parameter=c.get('parameter'))
                for c in entry.get('commands', [])
            ),
            choices=tuple(
                Choice(text=c['text'], target_tag=c.get('target'))
                for c in entry.get('choices', [])
            ),
        ))

    return DialogueGraph(nodes=tuple(nodes))


def save_graph(graph: DialogueGraph, path: str | Path, graph_id: Optional[str] = None) -> None:
    """Save a graph as JSON. The id defaults to the file stem."""
    path = Path(path)
    data = graph_to_dict(graph, graph_id or path.stem)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def load_graph(path: str | Path) -> DialogueGraph:
    """
    Load a graph saved with save_graph.

    Raises:
        GraphFormatError: If the file is not valid JSON or fails validation
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise GraphFormatError(f"invalid JSON: {e}", str(path)) from e

    return graph_from_dict(data, str(path))


def load_graph_directory(directory: str | Path) -> dict[str, DialogueGraph]:
    """
    Load every *.json graph in a directory, keyed by file stem.

    Files that cannot be read or fail validation are logged and skipped.
    """
    directory = Path(directory)
    graphs: dict[str, DialogueGraph] = {}

    if not directory.exists():
        logger.warning(f"Graph directory not found: {directory}")
        return graphs

    for file_path in sorted(directory.glob("*.json")):
        try:
            graphs[file_path.stem] = load_graph(file_path)
        except GraphFormatError as e:
            logger.error(f"Validation error in {file_path}: {e}")
        except OSError as e:
            logger.error(f"Failed to load {file_path}: {e}")

    logger.info(f"Loaded {len(graphs)} dialogue graphs from {directory}")
    return graphs


def read_script(path: str | Path) -> str:
    """Read a UTF-8 script file, ignoring a leading byte order mark."""
    with open(Path(path), 'r', encoding='utf-8-sig') as f:
        return f.read()


def compile_file(path: str | Path, config: CompilerConfig | None = None) -> DialogueGraph:
    """Compile a script file."""
    return DialogueCompiler(config).compile(read_script(path))


def compile_dialogue_file(
    input_path: str | Path,
    output_path: Optional[str | Path] = None,
    config: CompilerConfig | None = None,
) -> Path:
    """
    Compile a dialogue script to JSON.

    Args:
        input_path: Path to the script file
        output_path: Path to output .json file (default: same name with .json)
        config: Compiler settings (default: CompilerConfig())

    Returns:
        The path written
    """
    input_path = Path(input_path)
    if output_path is None:
        output_path = input_path.with_suffix('.json')
    else:
        output_path = Path(output_path)

    graph = compile_file(input_path, config)
    save_graph(graph, output_path, input_path.stem)
    logger.info(f"Compiled {input_path} -> {output_path} ({len(graph)} nodes)")
    return output_path


def find_dangling_targets(graph: DialogueGraph) -> list[tuple[str, str | None]]:
    """
    List choices whose target names no node in the graph.

    Returns:
        (node tag, target tag) pairs in graph order
    """
    tags = set(graph.tags)
    return [
        (node.tag, choice.target_tag)
        for node in graph.nodes
        for choice in node.choices
        if choice.target_tag not in tags
    ]
