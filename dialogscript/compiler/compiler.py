"""
Dialogue compiler - turns a dialogue script into a DialogueGraph.

Script format:

```
@play_music town
[start]
Alice:
Hello there.
How are you?

	Good, thanks!
	[good_reply]
	Not so great.
	[bad_reply]

[good_reply]
Alice:
Great to hear!
```

Each line is classified (see `lines`) and fed to a three-state machine:

    IDLE      waiting for a label, a command, a tag or a choice block
    DIALOGUE  collecting text lines after a character label
    CHOICE    collecting indented choice entries

A line that ends one construct may start the next, so a handler can
hand the same line back for processing under another state.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from dialogscript.compiler.lines import LineType, classify, is_blank, strip_indent
from dialogscript.compiler.session import CompileSession, CompilerState
from dialogscript.compiler.tokens import parse_command, parse_character_id, parse_tag
from dialogscript.core.config import CompilerConfig
from dialogscript.core.events import EventBus, CompilerEvent, DropKind
from dialogscript.graph.nodes import DialogueGraph

logger = logging.getLogger(__name__)

# Returns the state to reprocess the line under, or None once consumed
StateHandler = Callable[[CompileSession, str, LineType], Optional[CompilerState]]


class DialogueCompiler:
    """
    Compiles dialogue scripts.

    The compiler is lenient: malformed lines never raise, entries beyond
    the configured capacities are dropped, and choice targets are not
    checked against existing tags.

    Usage:
        compiler = DialogueCompiler()
        graph = compiler.compile(script)
        for node in graph:
            print(node.tag, node.character_id, node.text)
    """

    def __init__(
        self,
        config: CompilerConfig | None = None,
        event_bus: EventBus | None = None,
    ):
        self.config = config or CompilerConfig()
        self.event_bus = event_bus

        self._handlers: dict[CompilerState, StateHandler] = {
            CompilerState.IDLE: self._process_idle,
            CompilerState.DIALOGUE: self._process_dialogue,
            CompilerState.CHOICE: self._process_choice,
        }

    def compile(self, script: str) -> DialogueGraph:
        """Compile a whole script string."""
        return self.compile_lines(script.split('\n'))

    def compile_lines(self, lines: Iterable[str]) -> DialogueGraph:
        """
        Compile a script given as individual lines.

        Args:
            lines: Script lines, with or without trailing line breaks

        Returns:
            The compiled graph, nodes in creation order
        """
        session = CompileSession.start(self.config)
        self._emit(CompilerEvent.COMPILE_STARTED, config=self.config)

        for raw in lines:
            session.line_number += 1
            raw = raw.rstrip('\r\n')

            if is_blank(raw):
                continue

            line_type = classify(raw, self.config.indent_threshold)
            self.process_line(session, strip_indent(raw), line_type)

        if self.config.flush_at_end:
            self._finish(session)
        elif session.state is not CompilerState.IDLE:
            logger.debug("Input ended in state %s, open block discarded", session.state.name)

        graph = session.assembler.build()
        logger.debug(
            "Compiled %d lines into %d nodes (dropped: %s)",
            session.line_number, len(graph),
            {kind.name: count for kind, count in session.dropped.items()} or "none",
        )
        self._emit(CompilerEvent.COMPILE_FINISHED, graph=graph, dropped=dict(session.dropped))
        return graph

    def process_line(self, session: CompileSession, line: str, line_type: LineType) -> None:
        """
        Feed one de-indented line to the state machine.

        Handlers may ask for the same line to be processed again under a
        new state; this loops until the line is consumed.
        """
        next_state = self._handlers[session.state](session, line, line_type)

        while next_state is not None:
            session.state = next_state
            next_state = self._handlers[next_state](session, line, line_type)

    # State handlers

    def _process_idle(
        self, session: CompileSession, line: str, line_type: LineType
    ) -> CompilerState | None:
        builder = session.builder

        if line_type is LineType.CHARACTER_ID:
            builder.character_id = parse_character_id(line)
            # Set in place: the label is consumed here, reprocessing it
            # under DIALOGUE would close a node
            session.state = CompilerState.DIALOGUE

        elif line_type is LineType.DIALOGUE_LINE:
            builder.append_text(line)

        elif line_type is LineType.COMMAND:
            command = parse_command(line)
            if not builder.commands.try_push(command):
                self._dropped(session, DropKind.COMMAND, command.name)

        elif line_type is LineType.TAG:
            tag = parse_tag(line)
            if tag:
                builder.tag = tag
            else:
                logger.debug("Line %d: malformed tag %r ignored", session.line_number, line)

        elif line_type is LineType.CHOICE:
            return CompilerState.CHOICE

        return None

    def _process_dialogue(
        self, session: CompileSession, line: str, line_type: LineType
    ) -> CompilerState | None:
        if line_type is LineType.DIALOGUE_LINE:
            session.builder.append_text(line)
            return None

        self._close_node(session)
        return CompilerState.IDLE

    def _process_choice(
        self, session: CompileSession, line: str, line_type: LineType
    ) -> CompilerState | None:
        builder = session.builder
        # The line is already de-indented, so a nested tag reads as TAG here
        inner_type = classify(line, self.config.indent_threshold)

        if inner_type is LineType.DIALOGUE_LINE:
            builder.append_text(line)
            return None

        if inner_type is LineType.TAG:
            builder.choice_target = parse_tag(line)
        elif line_type is LineType.CHOICE:
            # Indented command or label: not part of a choice entry
            return None

        self._flush_choice_entry(session)

        if line_type is LineType.CHOICE:
            return None

        self._close_choice_block(session)
        return CompilerState.IDLE

    # Helpers

    def _close_node(self, session: CompileSession) -> None:
        builder = session.builder
        node = builder.build_node()

        if session.assembler.try_append(node):
            logger.debug(
                "Line %d: closed node %r (%s)",
                session.line_number, node.tag, node.character_id,
            )
            self._emit(CompilerEvent.NODE_CLOSED, node=node, index=len(session.assembler) - 1)
        else:
            self._dropped(session, DropKind.NODE, node.tag)

        builder.tag = session.synthesize_tag()

    def _flush_choice_entry(self, session: CompileSession) -> None:
        choice = session.builder.take_choice()
        if choice is None:
            return

        if not session.builder.choices.try_push(choice):
            self._dropped(session, DropKind.CHOICE, choice.text)

    def _close_choice_block(self, session: CompileSession) -> None:
        choices = session.builder.take_choices()
        node = session.assembler.attach_choices(choices)

        if node is None:
            if choices:
                logger.debug(
                    "Line %d: %d choices with no node to attach to",
                    session.line_number, len(choices),
                )
            return

        logger.debug("Line %d: attached %d choices to %r", session.line_number, len(choices), node.tag)
        self._emit(CompilerEvent.CHOICES_ATTACHED, node=node, choices=choices)

    def _finish(self, session: CompileSession) -> None:
        """Emit whatever is still open when the input ends."""
        if session.state is CompilerState.DIALOGUE:
            self._close_node(session)
        elif session.state is CompilerState.CHOICE:
            self._flush_choice_entry(session)
            self._close_choice_block(session)

        session.state = CompilerState.IDLE

    def _dropped(self, session: CompileSession, kind: DropKind, detail: str) -> None:
        session.record_drop(kind)
        logger.debug(
            "Line %d: %s %r dropped, capacity reached",
            session.line_number, kind.name.lower(), detail,
        )
        self._emit(CompilerEvent.ENTRY_DROPPED, kind=kind, detail=detail, line=session.line_number)

    def _emit(self, event_type: CompilerEvent, **data) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(event_type, **data)


def compile_script(script: str, config: CompilerConfig | None = None) -> DialogueGraph:
    """Compile a script with a throwaway compiler."""
    return DialogueCompiler(config).compile(script)
