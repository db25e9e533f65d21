"""
Resources module - script files and compiled graph files.
"""

from dialogscript.resources.graph_io import (
    GRAPH_SCHEMA,
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

__all__ = [
    "GRAPH_SCHEMA",
    "graph_to_dict",
    "graph_from_dict",
    "save_graph",
    "load_graph",
    "load_graph_directory",
    "read_script",
    "compile_file",
    "compile_dialogue_file",
    "find_dangling_targets",
]
