import os
import sys

import pytest

# Ensure the package can be imported without installing
sys.path.append(os.getcwd())

SAMPLE_SCRIPT = """\
[start]
Alice:
Hello there.
How are you?

\tGood, thanks!
\t[good_reply]
\tNot so great.
\t[bad_reply]
[good_reply]
Alice:
Great to hear!
"""


@pytest.fixture
def compiler():
    """Fresh compiler with default settings."""
    from dialogscript.compiler.compiler import DialogueCompiler
    return DialogueCompiler()


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from dialogscript.core.events import EventBus
    return EventBus()


@pytest.fixture
def sample_script():
    return SAMPLE_SCRIPT


@pytest.fixture
def script_file(tmp_path, sample_script):
    """Sample script written to a temporary file."""
    path = tmp_path / "intro.dlg"
    path.write_text(sample_script, encoding="utf-8")
    return path
