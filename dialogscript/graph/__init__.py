"""
Graph module - the compiled dialogue structure.
"""

from dialogscript.graph.nodes import Command, Choice, DialogueNode, DialogueGraph

__all__ = [
    "Command",
    "Choice",
    "DialogueNode",
    "DialogueGraph",
]
