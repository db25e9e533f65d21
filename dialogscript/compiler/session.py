"""
Compile session - the transient working state of one compile call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from dialogscript.compiler.builder import NodeBuilder, GraphAssembler
from dialogscript.core.config import CompilerConfig
from dialogscript.core.events import DropKind


class CompilerState(Enum):
    """State of the compiler state machine."""
    IDLE = auto()
    DIALOGUE = auto()
    CHOICE = auto()


@dataclass
class CompileSession:
    """
    Everything a single compile call mutates.

    A new session is created at the start of every compile, so a
    compiler instance carries nothing over between scripts.

    Attributes:
        config: Settings the session was created with
        builder: Pending node data
        assembler: Closed nodes
        state: Current state machine state
        next_id: Sequential id of the next synthesized tag
        line_number: 1-based number of the line being processed
        dropped: Count of entries refused per kind, for diagnostics
    """
    config: CompilerConfig
    builder: NodeBuilder
    assembler: GraphAssembler
    state: CompilerState = CompilerState.IDLE
    next_id: int = 0
    line_number: int = 0
    dropped: dict[DropKind, int] = field(default_factory=dict)

    @classmethod
    def start(cls, config: CompilerConfig) -> CompileSession:
        return cls(
            config=config,
            builder=NodeBuilder(config),
            assembler=GraphAssembler(config.max_nodes),
        )

    def synthesize_tag(self) -> str:
        """Return the next default tag and advance the counter."""
        tag = self.config.default_tag(self.next_id)
        self.next_id += 1
        return tag

    def record_drop(self, kind: DropKind) -> None:
        self.dropped[kind] = self.dropped.get(kind, 0) + 1
