import logging
import socket
from dataclasses import dataclass, field

import pytest

from glow_label.gradient import RGB, ColorStop
from glow_label.text import TextComponent

RED = RGB(255, 0, 0)
GREEN = RGB(0, 255, 0)
BLUE = RGB(0, 0, 255)
YELLOW = RGB(255, 255, 0)
BLACK = RGB(0, 0, 0)


@dataclass
class FakeSubject:
    """Subject that records every delivered frame."""
    key: str
    name: str = "Steve"
    frames: list[TextComponent] = field(default_factory=list)
    fail_deliver: bool = False
    fail_label: bool = False

    def label(self) -> str:
        if self.fail_label:
            raise RuntimeError("label unavailable")
        return f"FancyItem | {self.name}"

    def deliver(self, component: TextComponent) -> None:
        if self.fail_deliver:
            raise ConnectionResetError("cannot attach label")
        self.frames.append(component)


@dataclass
class FakeRegistry:
    """Registry backed by a plain list the test can mutate between ticks."""
    subjects: list[FakeSubject] = field(default_factory=list)

    def active_subjects(self) -> list[FakeSubject]:
        return list(self.subjects)


@pytest.fixture
def registry():
    return FakeRegistry()


@pytest.fixture
def red_blue():
    """Two-stop gradient spanning exactly [0, 1]."""
    return [ColorStop(RED, 0.0), ColorStop(BLUE, 1.0)]


@pytest.fixture
def red_green_blue():
    return [ColorStop(RED, 0.0), ColorStop(GREEN, 0.5), ColorStop(BLUE, 1.0)]


@pytest.fixture
def busy_port():
    """A local port that already has a listener on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        sock.listen()
        yield sock.getsockname()[1]


@pytest.fixture(autouse=True)
def reset_package_logger():
    """CLI tests install stdout handlers; drop them so they don't outlive capsys."""
    yield
    logger = logging.getLogger("glow_label")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
