"""
Compiler module - dialogue script to graph translation.

Provides:
- Line classification and indentation handling
- Token parsers for commands, character labels and tags
- The state machine compiler
"""

from dialogscript.compiler.lines import LineType, classify, is_blank, is_indented, strip_indent
from dialogscript.compiler.tokens import parse_command, parse_character_id, parse_tag
from dialogscript.compiler.builder import NodeBuilder, GraphAssembler
from dialogscript.compiler.session import CompileSession, CompilerState
from dialogscript.compiler.compiler import DialogueCompiler, compile_script

__all__ = [
    "LineType",
    "classify",
    "is_blank",
    "is_indented",
    "strip_indent",
    "parse_command",
    "parse_character_id",
    "parse_tag",
    "NodeBuilder",
    "GraphAssembler",
    "CompileSession",
    "CompilerState",
    "DialogueCompiler",
    "compile_script",
]
