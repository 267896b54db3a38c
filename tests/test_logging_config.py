"""Tests for the classification event logger."""

import json

from oncomerge.utils.logging_config import ClassificationLogger, get_logger, reset_logger


class TestClassificationLogger:
    """Tests for ClassificationLogger."""

    def test_jsonl_events(self, tmp_path):
        """Test that events are written as one JSON object per line."""
        event_logger = ClassificationLogger(log_dir=tmp_path)

        event_logger.log_merge("gene_protein_change_event", 3, 2, 2, 1)
        event_logger.log_classification("mutations", {"data": 1, "vus": 2}, {"hotspot_annotations_active": True}, [])
        event_logger.log_source_failure("oncokb", "HTTP 503")

        lines = event_logger.log_file.read_text().splitlines()
        events = [json.loads(line) for line in lines]

        assert [e["event_type"] for e in events] == ["merge", "classification", "source_failure"]
        assert events[0]["uncalled_dropped"] == 1
        assert events[1]["counts"] == {"data": 1, "vus": 2}
        assert events[2]["reason"] == "HTTP 503"

    def test_console_only(self, tmp_path):
        """Test that no file is created when file logging is off."""
        event_logger = ClassificationLogger(log_dir=tmp_path, enable_file_logging=False)
        event_logger.log_merge("event", 1, 0, 1, 0)
        assert event_logger.log_file is None
        assert event_logger.file_handler is None
        assert len(event_logger.logger.handlers) == 1
        assert list(tmp_path.iterdir()) == []

    def test_global_logger(self):
        """Test the module-level singleton."""
        first = get_logger(enable_file_logging=False)
        assert get_logger() is first
        reset_logger()
        assert get_logger(enable_file_logging=False) is not first
