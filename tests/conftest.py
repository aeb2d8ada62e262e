"""Shared fixtures for the DocIndexLib test suite."""

import pytest

from docindexlib.adapters.memory import MemoryNodeSource
from docindexlib.testing import MemoryReportWriter, RecordingSource, build_tree


# A
# ├── B/
# │   └── C (text/plain)
# └── D (text/plain)
SAMPLE_TREE = {"B": {"C": "text/plain"}, "D": "text/plain"}


@pytest.fixture
def sample_root():
    return build_tree("A", SAMPLE_TREE)


@pytest.fixture
def sample_source(sample_root):
    return MemoryNodeSource(sample_root)


@pytest.fixture
def recording_source(sample_root):
    return RecordingSource(sample_root)


@pytest.fixture
def memory_writer():
    return MemoryReportWriter()
