"""Tests for the learning resources and tools."""

import json

import pytest
from mcp_learning.capabilities import build_handler
from mcp_learning.dispatcher import Request
from mcp_learning.registry import CapabilityKind
from mcp_learning.response import ErrorKind
from mcp_learning.state import LearningStore

TOOL = CapabilityKind.TOOL
RESOURCE = CapabilityKind.RESOURCE


@pytest.fixture
def store():
    return LearningStore()


@pytest.fixture
def dispatcher(store):
    return build_handler(store=store).dispatcher()


def read(dispatcher, uri):
    return dispatcher.dispatch(Request(RESOURCE, uri))


class TestResources:
    """Test the learning resources."""

    def test_listing(self, dispatcher):
        """Test resource order and metadata."""
        entries = dispatcher.list(RESOURCE)
        assert [e["uri"] for e in entries] == [
            "learning-guide://mcp-basics",
            "project://info",
            "config://user-settings",
            "progress://learning-status",
            "examples://code-library",
            "docs://getting-started",
            "analytics://resource-usage",
        ]
        assert entries[1] == {
            "uri": "project://info",
            "name": "Project Information",
            "description": "General information about the MCP learning project",
            "mimeType": "application/json",
        }

    def test_guide_is_markdown(self, dispatcher):
        """Test the basics guide."""
        block = read(dispatcher, "learning-guide://mcp-basics").content[0]
        assert block.mime_type == "text/markdown"
        assert block.uri == "learning-guide://mcp-basics"
        assert block.text.startswith("# MCP Learning Guide - Basics")

    def test_project_info(self, dispatcher):
        """Test the JSON project info."""
        data = json.loads(read(dispatcher, "project://info").text)
        assert data["name"] == "MCP Learning Project"
        assert len(data["features"]) == 5

    def test_progress(self, dispatcher):
        """Test the progress resource includes derived figures."""
        data = json.loads(read(dispatcher, "progress://learning-status").text)
        assert data["progressPercentage"] == 29
        assert data["nextMilestone"] == "Complete Day 3"

    def test_unknown_resource(self, dispatcher):
        """Test reading an unregistered URI."""
        response = read(dispatcher, "project://missing")
        assert response.error.kind is ErrorKind.NOT_FOUND
        assert response.error.message == "Resource not found: project://missing"

    def test_analytics_tracks_reads(self, dispatcher):
        """Test that resource reads are recorded."""
        read(dispatcher, "project://info")
        read(dispatcher, "project://info")
        read(dispatcher, "docs://getting-started")

        data = json.loads(read(dispatcher, "analytics://resource-usage").text)
        assert data["totalAccesses"] == 4
        assert data["uniqueResources"] == 3
        assert data["mostAccessedResource"] == "project://info"


class TestLearningTools:
    """Test the tools that update learning state."""

    def test_update_config(self, dispatcher, store):
        """Test changing settings through the tool."""
        response = dispatcher.dispatch(
            Request(TOOL, "update-config", {"theme": "dark", "show_hints": False})
        )
        assert response.text.startswith("Configuration updated successfully! New settings:\n")
        config = json.loads(read(dispatcher, "config://user-settings").text)
        assert config["theme"] == "dark"
        assert config["preferences"]["showHints"] is False
        assert store.config_snapshot() == config

    def test_update_config_invalid_theme(self, dispatcher):
        """Test that the theme enum is validated before the store is touched."""
        response = dispatcher.dispatch(Request(TOOL, "update-config", {"theme": "neon"}))
        assert response.error.kind is ErrorKind.INVALID_ARGUMENTS
        assert "light, dark" in response.error.message

    def test_mark_day_complete(self, dispatcher):
        """Test completing a day."""
        response = dispatcher.dispatch(Request(
            TOOL, "mark-day-complete",
            {"day": 3, "skills_learned": "Resources, URI schemes", "time_spent": 90},
        ))
        assert response.text == (
            "Day 3 marked as complete!\n\n"
            "Progress: 43% (3/7 days)\n"
            "Total skills learned: 7\n"
            "Total time invested: 270 minutes\n\n"
            "Keep up the great work!"
        )

    def test_mark_day_out_of_range(self, dispatcher):
        """Test that the day range is validated."""
        response = dispatcher.dispatch(Request(TOOL, "mark-day-complete", {"day": 9}))
        assert response.error.kind is ErrorKind.INVALID_ARGUMENTS
        assert "between 1 and 7" in response.error.message
