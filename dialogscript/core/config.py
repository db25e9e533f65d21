"""
Compiler configuration.

Capacities and tag conventions used by the dialogue compiler.

Usage:
    config = CompilerConfig(max_choices=6)
    compiler = DialogueCompiler(config)
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CompilerConfig(BaseModel):
    """
    Settings for a DialogueCompiler.

    Attributes:
        max_commands: Commands kept per node, extra ones are dropped
        max_choices: Choices kept per node, extra ones are dropped
        max_nodes: Nodes kept per graph, extra ones are dropped
        indent_threshold: Leading spaces that make a line a choice line
        start_tag: Tag of the first node when none is given
        default_tag_prefix: Prefix of synthesized tags (node_0, node_1...)
        flush_at_end: Emit the node/choice block still open at end of input
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid',
    )

    max_commands: int = Field(default=3, ge=0)
    max_choices: int = Field(default=4, ge=0)
    max_nodes: int = Field(default=512, ge=0)
    indent_threshold: int = Field(default=4, ge=1)
    start_tag: str = Field(default="start", min_length=1)
    default_tag_prefix: str = Field(default="node_", min_length=1)
    flush_at_end: bool = True

    def default_tag(self, index: int) -> str:
        """Synthesized tag for the given sequential id."""
        return f"{self.default_tag_prefix}{index}"

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CompilerConfig:
        return cls.model_validate(data)
