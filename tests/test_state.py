"""Tests for state module."""

from datetime import datetime, timedelta, timezone

import pytest
from mcp_learning.state import LearningStore, default_config


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


class TestConfig:
    """Test user configuration updates."""

    def test_snapshot_is_a_copy(self):
        """Test that snapshots cannot modify the store."""
        store = LearningStore()
        snapshot = store.config_snapshot()
        snapshot["preferences"]["showHints"] = False
        assert store.config_snapshot() == default_config()

    def test_update(self):
        """Test updating fields and preferences."""
        store = LearningStore()
        config = store.update_config(theme="dark", auto_save=False, language=None)
        assert config["theme"] == "dark"
        assert config["language"] == "en"
        assert config["preferences"]["autoSave"] is False
        assert store.config_snapshot() == config

    def test_invalid_theme(self):
        """Test that unknown themes are rejected."""
        with pytest.raises(ValueError, match="Invalid theme"):
            LearningStore().update_config(theme="neon")

    def test_unknown_key(self):
        """Test that unknown keys are rejected."""
        with pytest.raises(ValueError, match="Unknown configuration keys: colour"):
            LearningStore().update_config(colour="red")


class TestProgress:
    """Test learning progress tracking."""

    def test_initial_snapshot(self):
        """Test the derived progress figures."""
        progress = LearningStore().progress_snapshot()
        assert progress["completedDays"] == [1, 2]
        assert progress["progressPercentage"] == 29
        assert progress["nextMilestone"] == "Complete Day 3"
        assert progress["estimatedTimeRemaining"] == 300

    def test_mark_day_complete(self):
        """Test completing a day."""
        store = LearningStore()
        progress = store.mark_day_complete(3, ["Resources"], 45)
        assert progress["completedDays"] == [1, 2, 3]
        assert progress["currentDay"] == 4
        assert progress["timeSpent"] == 225
        assert progress["skillsLearned"][-1] == "Resources"

    def test_mark_day_twice(self):
        """Test that a day is only counted once."""
        store = LearningStore()
        store.mark_day_complete(1)
        assert store.progress_snapshot()["completedDays"] == [1, 2]

    def test_all_days_completed(self):
        """Test the final milestone."""
        store = LearningStore()
        for day in range(1, 8):
            store.mark_day_complete(day)
        progress = store.progress_snapshot()
        assert progress["nextMilestone"] == "All days completed!"
        assert progress["progressPercentage"] == 100

    def test_day_out_of_range(self):
        """Test that days outside 1-7 are rejected."""
        with pytest.raises(ValueError, match="between 1 and 7"):
            LearningStore().mark_day_complete(8)


class TestAnalytics:
    """Test resource access analytics."""

    def test_empty(self):
        """Test analytics before any access."""
        analytics = LearningStore().analytics()
        assert analytics["totalAccesses"] == 0
        assert analytics["mostAccessedResource"] == "none"
        assert analytics["accessLog"] == []

    def test_counts(self):
        """Test counting accesses."""
        store = LearningStore(clock=FakeClock())
        store.record_access("project://info")
        store.record_access("docs://getting-started")
        store.record_access("project://info")

        analytics = store.analytics()
        assert analytics["totalAccesses"] == 3
        assert analytics["uniqueResources"] == 2
        assert analytics["mostAccessedResource"] == "project://info"
        assert analytics["accessLog"][0]["uri"] == "project://info"
        assert analytics["accessLog"][0]["accessCount"] == 2
        assert analytics["accessLog"][0]["timestamp"] == "2024-01-01T00:00:03+00:00"
