"""
dialogscript

Compiles line-oriented dialogue scripts into dialogue graphs.

Quick Start:
    from dialogscript import DialogueCompiler

    graph = DialogueCompiler().compile(open("intro.dlg").read())
    node = graph.start
    print(node.character_id, node.text)
"""

__version__ = "0.1.0"

from dialogscript.core import (
    CompilerConfig,
    EventBus,
    Event,
    CompilerEvent,
    DropKind,
    DialogScriptError,
    GraphFormatError,
)
from dialogscript.graph import Command, Choice, DialogueNode, DialogueGraph
from dialogscript.compiler import DialogueCompiler, compile_script, LineType, classify
from dialogscript.resources import (
    compile_file,
    compile_dialogue_file,
    save_graph,
    load_graph,
)

__all__ = [
    # Compiler
    "DialogueCompiler",
    "CompilerConfig",
    "compile_script",
    "LineType",
    "classify",
    # Graph
    "Command",
    "Choice",
    "DialogueNode",
    "DialogueGraph",
    # Events
    "EventBus",
    "Event",
    "CompilerEvent",
    "DropKind",
    # Resources
    "compile_file",
    "compile_dialogue_file",
    "save_graph",
    "load_graph",
    # Errors
    "DialogScriptError",
    "GraphFormatError",
]
