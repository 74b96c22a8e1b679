import logging
import sys
from pathlib import Path
from typing import Any

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture
def isolate_logging():
    """Isolate logging configuration between tests.

    The CLI calls logging.basicConfig; without this the root handlers it
    installs leak into later tests.
    """
    original_handlers = logging.root.handlers[:]
    original_level = logging.root.level

    logging.root.handlers.clear()
    logging.root.addHandler(logging.NullHandler())

    yield

    logging.root.handlers.clear()
    logging.root.handlers.extend(original_handlers)
    logging.root.setLevel(original_level)


@pytest.fixture
def sample_document() -> list[dict[str, Any]]:
    """A short talk: agenda, a divider, then two sections around a whiteboard."""
    from helpers import h, hr, li, p, whiteboard

    return [
        h(1, "Agenda"),
        li("Intro"),
        li("Demo"),
        hr(),
        h(1, "Intro"),
        p("Why slides"),
        whiteboard([{"id": "e1", "type": "arrow"}], title="Architecture"),
        h(1, "Demo"),
        p("Live"),
    ]
