"""
Command line entry point.

    python -m dialogscript intro.dlg -o intro.json
    python -m dialogscript intro.dlg --check
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from dialogscript.core.config import CompilerConfig
from dialogscript.core.errors import DialogScriptError
from dialogscript.resources.graph_io import (
    compile_file,
    find_dangling_targets,
    save_graph,
)

logger = logging.getLogger("dialogscript")

EXIT_OK = 0
EXIT_DANGLING = 1
EXIT_ERROR = 2


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dialogscript",
        description="Compile a dialogue script into a JSON dialogue graph.",
    )
    p.add_argument("input", help="Input script")
    p.add_argument("-o", "--output", default=None, help="Output .json (default: alongside input)")
    p.add_argument("--config", default=None, help="Compiler settings as JSON (optional)")
    p.add_argument(
        "--no-flush",
        action="store_true",
        help="Drop the node or choice block still open at end of input",
    )
    p.add_argument(
        "--check",
        action="store_true",
        help="Report choices whose target tag names no node (exit status 1 if any)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def load_config(path: str | None, no_flush: bool) -> CompilerConfig:
    """Read compiler settings from a JSON file, applying command line overrides."""
    data = {}
    if path:
        with open(Path(path), 'r', encoding='utf-8') as f:
            data = json.load(f)

    config = CompilerConfig.from_dict(data)
    if no_flush:
        config.flush_at_end = False
    return config


def main(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config, args.no_flush)
        input_path = Path(args.input)
        output_path = Path(args.output) if args.output else input_path.with_suffix('.json')

        graph = compile_file(input_path, config)
        save_graph(graph, output_path, input_path.stem)
    except (OSError, json.JSONDecodeError, ValidationError, DialogScriptError) as e:
        logger.error(f"Compilation failed: {e}")
        return EXIT_ERROR

    logger.info(f"Compiled {input_path} -> {output_path} ({len(graph)} nodes)")

    if args.check:
        dangling = find_dangling_targets(graph)
        for node_tag, target in dangling:
            logger.warning(f"Node {node_tag!r}: choice target {target!r} names no node")
        if dangling:
            return EXIT_DANGLING

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
