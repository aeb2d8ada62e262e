"""Testing utilities for DocIndexLib consumers."""

from .fixtures import MemoryReportWriter, RecordingSource, build_chain, build_tree

__all__ = ['MemoryReportWriter', 'RecordingSource', 'build_chain', 'build_tree']
