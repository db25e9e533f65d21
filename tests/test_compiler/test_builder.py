from dialogscript.compiler.builder import NodeBuilder, GraphAssembler
from dialogscript.core.config import CompilerConfig
from dialogscript.graph.nodes import Command, Choice, DialogueNode


def test_builder_starts_with_start_tag():
    builder = NodeBuilder(CompilerConfig())
    assert builder.tag == "start"
    assert builder.character_id is None
    assert not builder.has_text


def test_text_joined_without_trailing_separator():
    builder = NodeBuilder(CompilerConfig())
    builder.append_text("Hello there.")
    builder.append_text("How are you?")

    assert builder.take_text() == "Hello there.\nHow are you?"
    assert not builder.has_text


def test_build_node_snapshots_and_clears_commands():
    builder = NodeBuilder(CompilerConfig())
    builder.tag = "intro"
    builder.character_id = "Alice"
    builder.append_text("Hi")
    builder.commands.try_push(Command(name="heal", parameter="10"))

    node = builder.build_node()

    assert node.tag == "intro"
    assert node.character_id == "Alice"
    assert node.text == "Hi"
    assert node.commands == (Command(name="heal", parameter="10"),)
    assert len(builder.commands) == 0
    # Speaker carries over to the next node
    assert builder.character_id == "Alice"


def test_take_choice_needs_text():
    builder = NodeBuilder(CompilerConfig())
    builder.choice_target = "somewhere"
    assert builder.take_choice() is None

    builder.append_text("Go")
    assert builder.take_choice() == Choice(text="Go", target_tag="somewhere")


def test_command_capacity_follows_config():
    builder = NodeBuilder(CompilerConfig(max_commands=1))
    assert builder.commands.try_push(Command(name="a"))
    assert not builder.commands.try_push(Command(name="b"))


def test_assembler_refuses_past_capacity():
    assembler = GraphAssembler(2)
    assert assembler.capacity == 2
    assert assembler.try_append(DialogueNode(tag="a"))
    assert assembler.try_append(DialogueNode(tag="b"))
    assert not assembler.try_append(DialogueNode(tag="c"))

    assert assembler.build().tags == ["a", "b"]


def test_attach_choices_to_last_node():
    assembler = GraphAssembler(4)
    assembler.try_append(DialogueNode(tag="a"))
    assembler.try_append(DialogueNode(tag="b"))

    node = assembler.attach_choices((Choice(text="Back", target_tag="a"),))

    assert node.tag == "b"
    graph = assembler.build()
    assert graph.get("b").choices == (Choice(text="Back", target_tag="a"),)
    assert graph.get("a").choices == ()


def test_attach_choices_without_node():
    assembler = GraphAssembler(4)
    assert assembler.attach_choices((Choice(text="x"),)) is None
    assert len(assembler.build()) == 0


def test_attach_choices_after_refused_node():
    assembler = GraphAssembler(1)
    assembler.try_append(DialogueNode(tag="kept"))
    assembler.try_append(DialogueNode(tag="refused"))

    assert assembler.last_node is None
    assert assembler.attach_choices((Choice(text="x"),)) is None
    assert assembler.build().get("kept").choices == ()


def test_capacities_follow_config():
    config = CompilerConfig(max_commands=2, max_choices=5)
    builder = NodeBuilder(config)

    assert builder.commands.capacity == 2
    assert builder.choices.capacity == 5
