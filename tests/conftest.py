"""
Shared test fixtures and configuration.
"""

import pytest
import os
import sys
from pathlib import Path

# Add the parent directory to the path so we can import the autocreds package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from autocreds.config import Settings
from autocreds.utils.file_store import FileStore


class MemoryFileStore(FileStore):
    """In-memory FileStore for tests."""

    def __init__(self, files=None):
        self.files = {str(Path(p)): content for p, content in (files or {}).items()}
        self.dirs = set()
        self.executable = set()
        self.writes = []

    def exists(self, path):
        key = str(Path(path))
        if key in self.files or key in self.dirs:
            return True
        return any(f.startswith(key + os.sep) for f in self.files)

    def read_text(self, path):
        key = str(Path(path))
        if key not in self.files:
            raise FileNotFoundError(key)
        return self.files[key]

    def write_text(self, path, content):
        key = str(Path(path))
        self.ensure_dir(Path(path).parent)
        self.files[key] = content
        self.writes.append(key)

    def ensure_dir(self, path):
        self.dirs.add(str(Path(path)))

    def set_executable(self, path):
        self.executable.add(str(Path(path)))


SAMPLE_CONFIG = """
[default]
region = us-east-1

[profile dev]
region = us-west-2
output = text
"""


@pytest.fixture
def store():
    """Empty in-memory file store."""
    return MemoryFileStore()


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a config file and script dir under tmp_path."""
    return Settings(tmp_path / ".aws" / "config", tmp_path / ".aws")


@pytest.fixture
def config_path(settings):
    return settings.config_path


@pytest.fixture
def make_store():
    """Factory for in-memory stores pre-populated with files."""
    return MemoryFileStore
