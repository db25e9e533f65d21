"""
Node building and graph assembly.

NodeBuilder holds everything pending for the node being built. The
GraphAssembler collects finished nodes up to a fixed capacity.
"""

from __future__ import annotations

from typing import Optional

from dialogscript.core.buffers import BoundedBuffer
from dialogscript.core.config import CompilerConfig
from dialogscript.graph.nodes import Command, Choice, DialogueNode, DialogueGraph


class NodeBuilder:
    """
    Pending data for the node currently being built.

    Attributes:
        tag: Tag the next closed node receives
        character_id: Speaker label, carried over between nodes
        choice_target: Target tag of the choice entry being built
        commands: Commands collected for the next node
        choices: Choices collected for the current choice block
    """

    def __init__(self, config: CompilerConfig):
        self.tag: str = config.start_tag
        self.character_id: Optional[str] = None
        self.choice_target: Optional[str] = None
        self.commands: BoundedBuffer[Command] = BoundedBuffer(config.max_commands)
        self.choices: BoundedBuffer[Choice] = BoundedBuffer(config.max_choices)
        self._text_lines: list[str] = []

    @property
    def has_text(self) -> bool:
        return len(self._text_lines) > 0

    def append_text(self, line: str) -> None:
        self._text_lines.append(line)

    def take_text(self) -> str:
        """Return the pending text joined with newlines and clear it."""
        text = '\n'.join(self._text_lines)
        self._text_lines.clear()
        return text

    def build_node(self) -> DialogueNode:
        """Snapshot pending text, speaker, tag and commands into a node."""
        node = DialogueNode(
            tag=self.tag,
            character_id=self.character_id,
            text=self.take_text(),
            commands=self.commands.to_tuple(),
        )
        self.commands.clear()
        return node

    def take_choice(self) -> Choice | None:
        """Turn the pending text into a choice entry, None if there is no text."""
        text = self.take_text()
        if not text:
            return None
        return Choice(text=text, target_tag=self.choice_target)

    def take_choices(self) -> tuple[Choice, ...]:
        choices = self.choices.to_tuple()
        self.choices.clear()
        return choices


class GraphAssembler:
    """
    Bounded, ordered collection of closed nodes.

    Once full, further nodes are refused. The most recently closed node
    can still receive its choices until the next node is appended.
    """

    def __init__(self, capacity: int):
        self._capacity = capacity
        self._nodes: list[DialogueNode] = []
        # Index of the most recently closed node, None if it was refused
        self._last_index: int | None = None

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def last_node(self) -> DialogueNode | None:
        if self._last_index is None:
            return None
        return self._nodes[self._last_index]

    def try_append(self, node: DialogueNode) -> bool:
        """
        Record a closed node.

        Returns:
            True if stored, False if the graph is already at capacity
        """
        if len(self._nodes) >= self._capacity:
            self._last_index = None
            return False

        self._nodes.append(node)
        self._last_index = len(self._nodes) - 1
        return True

    def attach_choices(self, choices: tuple[Choice, ...]) -> DialogueNode | None:
        """
        Give the most recently closed node its choices.

        Returns:
            The updated node, or None if there is no recorded node to attach to
        """
        if self._last_index is None:
            return None

        node = self._nodes[self._last_index].with_choices(choices)
        self._nodes[self._last_index] = node
        return node

    def build(self) -> DialogueGraph:
        return DialogueGraph(nodes=tuple(self._nodes))

    def __len__(self) -> int:
        return len(self._nodes)
