"""Tests for IndexPlan and the high-level API."""

import pytest

from docindexlib import api
from docindexlib.config import FilterConfig, IndexConfig, RenderSchema
from docindexlib.errors import ConfigurationError, DestinationError, TraversalError
from docindexlib.planning import IndexPlan
from docindexlib.rendering import Cell
from docindexlib.testing import MemoryReportWriter, RecordingSource


def previous_report():
    writer = MemoryReportWriter()
    writer.header = ["old"]
    writer.rows = {1: [Cell("old row")]}
    return writer


class TestIndexPlan:

    def test_execute(self, sample_source):
        writer = MemoryReportWriter()
        report = IndexPlan(IndexConfig.from_defaults("A"), sample_source).execute(writer)

        assert report.root_name == "A"
        assert report.row_count == 4
        assert report.complete
        assert writer.header == ["No.", "Type", "MIME Type", "File Path", "File Name"]
        assert [row[3] for row in writer.values()] == ["A", "A > B", "A > B > C", "A > D"]

    def test_per_level(self, sample_source):
        config = IndexConfig.from_defaults("A")
        config.schema = RenderSchema.PER_LEVEL
        writer = MemoryReportWriter()

        report = IndexPlan(config, sample_source).execute(writer)

        assert len(report.header) == 7
        assert all(len(row) == 7 for row in writer.rows.values())

    def test_invalid_config_touches_nothing(self, recording_source):
        config = IndexConfig(root="A", max_depth=0)
        with pytest.raises(ConfigurationError):
            IndexPlan(config, recording_source)
        assert recording_source.calls == []

    def test_traversal_failure_leaves_destination_alone(self, sample_root):
        source = RecordingSource(sample_root, fail_on={"A/B"})
        writer = previous_report()

        with pytest.raises(TraversalError):
            IndexPlan(IndexConfig.from_defaults("A"), source).execute(writer)

        assert writer.clear_count == 0
        assert writer.header == ["old"]
        assert writer.values() == [["old row"]]

    def test_unresolvable_root(self, sample_source):
        writer = previous_report()
        with pytest.raises(TraversalError):
            IndexPlan(IndexConfig.from_defaults("Z"), sample_source).execute(writer)
        assert writer.clear_count == 0

    def test_skip_errors_reports_incomplete(self, sample_root):
        source = RecordingSource(sample_root, fail_on={"A/B"})
        config = IndexConfig.from_defaults("A")
        config.skip_errors = True
        writer = MemoryReportWriter()

        report = IndexPlan(config, source).execute(writer)

        assert not report.complete
        assert [e['node_id'] for e in report.skipped] == ["A/B", "A/B"]
        assert report.skipped_folders == ["A/B"]
        assert [row[3] for row in writer.values()] == ["A", "A > B", "A > D"]

    def test_plan_runs_again_after_skipped_folder_recovers(self, sample_root):
        source = RecordingSource(sample_root, fail_on={"A/B"})
        config = IndexConfig.from_defaults("A")
        config.skip_errors = True
        plan = IndexPlan(config, source)

        first = plan.execute(MemoryReportWriter())
        source.fail_on.clear()
        second = plan.execute(MemoryReportWriter())

        assert not first.complete
        assert second.complete
        assert second.skipped == []
        assert second.row_count == 4

    def test_writer_failure(self, sample_source):
        writer = MemoryReportWriter(fail_on_row=2)
        with pytest.raises(DestinationError, match="row 2"):
            IndexPlan(IndexConfig.from_defaults("A"), sample_source).execute(writer)

    def test_rows_numbered_from_one(self, sample_source):
        writer = MemoryReportWriter()
        IndexPlan(IndexConfig.from_defaults("A"), sample_source).execute(writer)
        assert sorted(writer.rows) == [1, 2, 3, 4]
        assert [writer.rows[i][0].value for i in sorted(writer.rows)] == [1, 2, 3, 4]

    def test_filter(self, sample_source):
        config = IndexConfig(root="A", filter=FilterConfig(include_files=False))
        report = IndexPlan(config, sample_source).execute(MemoryReportWriter())
        assert report.row_count == 2

    def test_summary(self, sample_source):
        summary = IndexPlan(IndexConfig.from_defaults("A"), sample_source).get_summary()
        assert summary['max_depth'] == 5
        assert summary['schema'] == "delimited"
        assert summary['renderer'] == "DelimitedPathRenderer"
        assert summary['error_policy'] == "FailFastPolicy"


class TestApi:

    def test_collect(self, sample_source, sample_root):
        entries = api.collect(sample_source, sample_root, max_depth=1)
        assert [e.joined_path("/") for e in entries] == ["A", "A/B", "A/D"]

    def test_render_index(self, sample_source, sample_root):
        rows = api.render_index(sample_source, sample_root, schema="per-level")
        assert len(rows) == 4
        assert len(rows[0]) == 7

    def test_generate_index_by_reference(self, sample_source):
        writer = MemoryReportWriter()
        report = api.generate_index(sample_source, writer, "A", path_separator="/")
        assert report.row_count == 4
        assert writer.values()[2][3] == "A/B/C"

    def test_generate_index_by_node(self, sample_source, sample_root):
        b = sample_root.folders[0]
        writer = MemoryReportWriter()
        report = api.generate_index(sample_source, writer, b)
        assert report.root_name == "B"
        assert [row[3] for row in writer.values()] == ["B", "B > C"]

    def test_generate_index_bad_schema(self, sample_source):
        with pytest.raises(ConfigurationError):
            api.generate_index(sample_source, MemoryReportWriter(), "A", schema="grid")

    def test_run(self, sample_source):
        report = api.run(IndexConfig.folders_only("A"), sample_source, MemoryReportWriter())
        assert report.row_count == 2
