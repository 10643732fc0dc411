import sys
from pathlib import Path
import importlib
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture()
def m():
    """Lazily import the main module for tests to avoid module-level import."""
    return importlib.import_module("main")


class ListSource:
    """Byte source serving bytes from a list, for channel-contract tests."""

    def __init__(self, data):
        self.data = list(data)
        self.reads = 0

    def next_byte(self):
        self.reads += 1
        if not self.data:
            return None
        return self.data.pop(0)


class ListSink:
    """Byte sink recording every put and flush."""

    def __init__(self):
        self.data = []
        self.flushes = 0

    def put_byte(self, value):
        self.data.append(value)

    def flush_sink(self):
        self.flushes += 1


@pytest.fixture()
def list_source():
    """Factory building a :class:`ListSource` over the given bytes."""
    return ListSource


@pytest.fixture()
def list_sink():
    return ListSink()


@pytest.fixture()
def bits_file(tmp_path: Path):
    """Write a text file of bit symbols and return its path."""

    def _make(text: str) -> Path:
        p = tmp_path / "bits.txt"
        p.write_text(text, encoding="utf-8")
        return p

    return _make
