"""
Dialogue graph model - commands, choices, nodes.

All models are frozen: a graph returned by the compiler cannot be
modified. Choices reference other nodes by tag only, those references
are resolved by whatever walks the graph at runtime.
"""

from __future__ import annotations

from typing import Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field


class GraphModel(BaseModel):
    """Base for immutable graph values."""

    model_config = ConfigDict(
        frozen=True,
        extra='forbid',
    )


class Command(GraphModel):
    """
    A directive to run when its node is reached.

    Attributes:
        name: Command name, without the leading '@'
        parameter: Raw parameter text, None when the command has none
    """
    name: str
    parameter: Optional[str] = None


class Choice(GraphModel):
    """
    A selectable branch offered at a node.

    Attributes:
        text: Text shown to the player
        target_tag: Tag of the node this choice leads to
    """
    text: str
    target_tag: Optional[str] = None


class DialogueNode(GraphModel):
    """
    A single unit of dialogue.

    Attributes:
        tag: Identifier other nodes use to reference this one
        character_id: Speaker label, None before any label was seen
        text: Dialogue text, lines joined with newlines
        commands: Commands to run when the node plays
        choices: Outgoing branches
    """
    tag: str = Field(min_length=1)
    character_id: Optional[str] = None
    text: str = ""
    commands: tuple[Command, ...] = ()
    choices: tuple[Choice, ...] = ()

    @property
    def has_choices(self) -> bool:
        return len(self.choices) > 0

    def with_choices(self, choices: tuple[Choice, ...]) -> DialogueNode:
        """Copy of this node carrying the given choices."""
        return self.model_copy(update={"choices": tuple(choices)})


class DialogueGraph(GraphModel):
    """
    Compiled dialogue, nodes in creation order.
    """
    nodes: tuple[DialogueNode, ...] = ()

    @property
    def start(self) -> DialogueNode | None:
        return self.nodes[0] if self.nodes else None

    @property
    def tags(self) -> list[str]:
        return [node.tag for node in self.nodes]

    def get(self, tag: str) -> DialogueNode | None:
        """Find a node by tag. With duplicate tags the last one wins."""
        found = None
        for node in self.nodes:
            if node.tag == tag:
                found = node
        return found

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[DialogueNode]:
        return iter(self.nodes)

    def __getitem__(self, index: int) -> DialogueNode:
        return self.nodes[index]
