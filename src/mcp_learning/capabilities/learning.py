"""Learning-project resources and the tools that update learning state."""

import functools
import json
from typing import Any, Callable, Optional

from ..handler import LearningHandler
from ..response import HandlerError
from ..schema import BooleanField, EnumField, NumberField, StringField
from ..state import DIFFICULTIES, THEMES, LearningStore

PROJECT_INFO = {
    "name": "MCP Learning Project",
    "version": "1.0.0",
    "description": "A comprehensive learning project for Model Context Protocol development",
    "features": [
        "Step-by-step learning exercises",
        "Day-by-day progression",
        "Hands-on tool building",
        "Resource management",
        "Claude Desktop integration",
    ],
}

CODE_EXAMPLES = {
    "basic-tool": '''@handler.tool(name="example-tool", description="Say hello")
def example_tool() -> str:
    return "Tool executed successfully!"''',
    "resource-handler": '''@handler.resource(uri="example://resource", mime_type="text/plain")
def example_resource() -> str:
    return "Resource content here"''',
    "validation-schema": '''ARGUMENTS = [
    StringField("name", "Your name", min_length=1),
    NumberField("age", "Your age", minimum=0, integer=True),
    EnumField("role", "Your role", choices=("student", "mentor"), default="student"),
]

result = validate_arguments(ArgumentShape(ARGUMENTS), raw_arguments)
if not result.ok:
    print(result.error.message)''',
}

MCP_BASICS = """# MCP Learning Guide - Basics

## What is MCP?
Model Context Protocol (MCP) is an open protocol that enables AI assistants to securely connect to external data sources and tools.

## Core Concepts

### 1. Tools
Tools are functions that can be executed by AI assistants with user approval. They enable:
- API calls to external services
- File operations
- Database queries
- Complex computations

### 2. Resources
Resources provide file-like data that can be read by clients:
- Documentation
- Configuration files
- Data sources
- API responses

### 3. Prompts
Prompts are pre-written templates that help users accomplish specific tasks:
- Code generation templates
- Analysis frameworks
- Structured responses

## Getting Started
1. Set up your MCP server with the SDK
2. Define your tools, resources, and prompts
3. Configure transport (stdio for desktop apps)
4. Test with Claude Desktop or other clients

## Best Practices
- Declare argument shapes for every tool and prompt
- Implement proper error handling
- Validate inputs before running handlers
- Provide clear descriptions
- Test thoroughly before deployment
"""

GETTING_STARTED = """# MCP Getting Started Guide

## What is Model Context Protocol (MCP)?

MCP is a protocol that allows AI assistants like Claude to securely access external tools and data sources. Think of it as a bridge between AI and the tools you use every day.

## Key Concepts

### Tools 🔧
- Functions that AI can call (with your permission)
- Examples: calculators, text processors, API clients
- Tools perform actions and return results

### Resources 📁
- File-like data that AI can read
- Examples: documentation, configuration files, data exports
- Resources provide information without executing code

### Prompts 🧠
- Pre-written templates for specific tasks
- Examples: code review templates, writing assistants
- Prompts help AI understand context and requirements

## Your Learning Journey

### Day 1: Basic Tools
Learn to create simple tools that perform single actions.

### Day 2: Advanced Tools
Build complex tools with validation and error handling.

### Day 3: Resources
Create resources that provide data and documentation.

### Day 4-7: Advanced Topics
Prompts, API integration, best practices, and deployment.

## Next Steps

1. Follow the daily exercises
2. Build and test each day's project
3. Experiment with the bonus challenges
4. Join the MCP community to share your creations!

Happy learning! 🚀
"""


def _tracked(store: LearningStore, uri: str, func: Callable[[], Any]) -> Callable[[], Any]:
    @functools.wraps(func)
    def wrapper():
        store.record_access(uri)
        return func()
    return wrapper


def register_guide(handler: LearningHandler, store: LearningStore) -> None:
    uri = "learning-guide://mcp-basics"
    handler.resource(
        uri=uri,
        name="MCP Learning Guide - Basics",
        description="Introduction to MCP tools, resources and prompts",
        mime_type="text/markdown",
    )(_tracked(store, uri, lambda: MCP_BASICS))


def register_resources(handler: LearningHandler, store: LearningStore) -> None:
    resources = [
        (
            "project://info", "Project Information",
            "General information about the MCP learning project",
            "application/json", lambda: PROJECT_INFO,
        ),
        (
            "config://user-settings", "User Configuration",
            "User preferences and settings for the learning environment",
            "application/json", store.config_snapshot,
        ),
        (
            "progress://learning-status", "Learning Progress",
            "Track your progress through the MCP learning journey",
            "application/json", store.progress_snapshot,
        ),
        (
            "examples://code-library", "Code Examples",
            "Collection of MCP code examples and patterns",
            "application/json", lambda: CODE_EXAMPLES,
        ),
        (
            "docs://getting-started", "Getting Started Guide",
            "Comprehensive guide to get started with MCP development",
            "text/markdown", lambda: GETTING_STARTED,
        ),
        (
            "analytics://resource-usage", "Resource Usage Analytics",
            "Analytics data for resource access patterns",
            "application/json", store.analytics,
        ),
    ]

    for uri, name, description, mime_type, func in resources:
        handler.resource(
            uri=uri, name=name, description=description, mime_type=mime_type
        )(_tracked(store, uri, func))


def register_tools(handler: LearningHandler, store: LearningStore) -> None:
    def update_config(
        theme: Optional[str] = None,
        language: Optional[str] = None,
        difficulty: Optional[str] = None,
        show_hints: Optional[bool] = None,
        enable_bonus_challenges: Optional[bool] = None,
        auto_save: Optional[bool] = None,
    ) -> str:
        config = store.update_config(
            theme=theme,
            language=language,
            difficulty=difficulty,
            show_hints=show_hints,
            enable_bonus_challenges=enable_bonus_challenges,
            auto_save=auto_save,
        )
        return "Configuration updated successfully! New settings:\n" + json.dumps(config, indent=2)

    def mark_day_complete(
        day: int,
        skills_learned: Optional[str] = None,
        time_spent: float = 0,
    ) -> str:
        skills = [s.strip() for s in (skills_learned or "").split(",") if s.strip()]
        try:
            progress = store.mark_day_complete(day, skills, time_spent)
        except ValueError as e:
            raise HandlerError(str(e)) from e

        completed = len(progress["completedDays"])
        return (
            f"Day {day} marked as complete!\n\n"
            f"Progress: {progress['progressPercentage']}% "
            f"({completed}/{progress['totalDays']} days)\n"
            f"Total skills learned: {len(progress['skillsLearned'])}\n"
            f"Total time invested: {progress['timeSpent']:g} minutes\n\n"
            "Keep up the great work!"
        )

    handler.tool(
        name="update-config",
        description="Update the learning environment configuration",
        arguments=[
            EnumField("theme", "Color theme", required=False, choices=THEMES),
            StringField("language", "Interface language code", required=False),
            EnumField("difficulty", "Exercise difficulty", required=False, choices=DIFFICULTIES),
            BooleanField("show_hints", "Show hints during exercises", required=False),
            BooleanField("enable_bonus_challenges", "Enable bonus challenges", required=False),
            BooleanField("auto_save", "Save progress automatically", required=False),
        ],
    )(update_config)

    handler.tool(
        name="mark-day-complete",
        description="Mark a learning day as complete and update progress",
        arguments=[
            NumberField("day", "Day number (1-7)", minimum=1, maximum=7, integer=True),
            StringField("skills_learned", "Comma-separated skills learned that day", required=False),
            NumberField("time_spent", "Minutes spent", required=False, minimum=0),
        ],
    )(mark_day_complete)

