"""Prompt templates and the tools that browse them."""

import json
from typing import Any, Dict, Optional

from ..handler import LearningHandler
from ..response import HandlerError
from ..schema import EnumField, StringField

PROGRAMMING_LANGUAGES = (
    "typescript", "javascript", "python", "java", "csharp", "cpp",
    "rust", "go", "swift", "kotlin", "php", "ruby", "other",
)
WRITING_STYLES = (
    "professional", "casual", "academic", "creative", "technical",
    "persuasive", "friendly", "formal",
)
MEETING_TYPES = (
    "standup", "planning", "retrospective", "brainstorming",
    "decision-making", "status-update", "client-meeting", "all-hands",
)
LEARNING_LEVELS = ("beginner", "intermediate", "advanced", "expert")
LEARNING_STYLES = ("visual", "auditory", "kinesthetic", "reading")
PROJECT_CONTEXTS = (
    "software-development", "marketing-campaign", "research-project",
    "business-initiative", "creative-project", "team-building", "general",
)

COMPLEXITY_GUIDANCE = {
    "simple": "Focus on basic code quality and readability.",
    "moderate": "Provide balanced analysis of code quality, performance, and best practices.",
    "complex": "Deep dive into architecture, performance optimization, and advanced patterns.",
}

LENGTH_GUIDANCE = {
    "short": "Keep responses concise and impactful.",
    "medium": "Provide balanced detail and clarity.",
    "long": "Include comprehensive analysis and detailed suggestions.",
}

MEETING_FOCUS = {
    "standup": "Yesterday's Progress, Today's Plans, Blockers",
    "planning": "Objectives, Tasks, Timeline, Resources",
    "retrospective": "What Went Well, What Could Improve, Action Items",
    "brainstorming": "Ideas Generated, Themes, Next Steps",
    "decision-making": "Options Discussed, Decision Made, Rationale",
    "status-update": "Progress, Challenges, Next Milestones",
    "client-meeting": "Requirements, Feedback, Deliverables",
    "all-hands": "Announcements, Updates, Q&A",
}

STYLE_ADAPTATIONS = {
    "visual": "Include diagrams, charts, and visual representations",
    "auditory": "Focus on verbal explanations and discussion points",
    "kinesthetic": "Emphasize hands-on practice and interactive exercises",
    "reading": "Provide detailed written explanations and resources",
}

LEVEL_GUIDANCE = {
    "beginner": "Start with fundamentals and build up gradually",
    "intermediate": "Connect to existing knowledge and introduce complexity",
    "advanced": "Focus on nuanced understanding and application",
    "expert": "Explore edge cases and advanced theoretical concepts",
}

CONTEXT_PHASES = {
    "software-development": "Requirements, Architecture, Development, Testing, Deployment",
    "marketing-campaign": "Strategy, Creative, Channels, Launch, Measurement",
    "research-project": "Literature Review, Methodology, Data Collection, Analysis, Reporting",
    "business-initiative": "Planning, Resource Allocation, Execution, Monitoring, Evaluation",
    "creative-project": "Concept, Design, Production, Review, Launch",
    "team-building": "Assessment, Planning, Activities, Implementation, Follow-up",
    "general": "Planning, Execution, Monitoring, Evaluation, Closure",
}

SAMPLE_ARGUMENTS: Dict[str, Dict[str, str]] = {
    "code-review": {
        "language": "typescript",
        "code": "function add(a: number, b: number) { return a + b; }",
        "focus_areas": "performance, readability",
        "complexity": "simple",
    },
    "writing-helper": {
        "style": "professional",
        "audience": "technical team",
        "purpose": "inform about new process",
        "content": "We are implementing a new deployment process.",
        "length": "medium",
    },
    "meeting-summary": {
        "meeting_type": "planning",
        "participants": "Alice, Bob, Charlie",
        "duration": "1 hour",
        "key_topics": "Sprint planning, resource allocation",
        "action_items": "Update documentation, schedule follow-up",
    },
    "learning-tutor": {
        "topic": "Python dataclasses",
        "level": "intermediate",
        "learning_style": "reading",
        "goals": "Understand advanced dataclass patterns",
        "time_available": "2 hours",
    },
    "project-planner": {
        "context": "software-development",
        "timeline": "3 months",
        "team_size": "5 developers",
        "objectives": "Build new customer portal",
        "constraints": "Legacy system integration required",
        "budget": "$50,000",
    },
}

CATEGORIES = """# Prompt Categories

## Analysis & Review
- **code-review**: Comprehensive code analysis and improvement suggestions
- **meeting-summary**: Structured meeting documentation and action items

## Writing & Communication
- **writing-helper**: Context-aware writing enhancement and style improvement

## Learning & Development
- **learning-tutor**: Adaptive learning assistance and educational guidance

## Planning & Strategy
- **project-planner**: Strategic project planning and execution frameworks

## Usage Examples:
- Use code-review for pull request analysis
- Use writing-helper for emails, documents, presentations
- Use meeting-summary for consistent meeting documentation
- Use learning-tutor for skill development and training
- Use project-planner for initiative planning and management

Each prompt includes customizable arguments to tailor the output to your specific needs."""


def _optional_line(label: str, value: Optional[str]) -> str:
    return f"\n**{label}**: {value}" if value else ""


def code_review(
    language: str,
    code: str,
    focus_areas: Optional[str] = None,
    complexity: str = "moderate",
):
    focus = f"\n**Focus Areas**: {focus_areas}\n" if focus_areas else ""
    text = f"""# Code Review Assistant

**Language**: {language}
**Complexity**: {complexity}{focus}

## Analysis Framework

{COMPLEXITY_GUIDANCE[complexity]}

1. **Code Quality & Readability**
   - Variable and function naming
   - Code organization and structure
   - Comments and documentation
   - Consistency with conventions

2. **Functionality & Logic**
   - Correctness of implementation
   - Edge case handling
   - Error handling and validation
   - Algorithm efficiency

3. **Best Practices**
   - Language-specific idioms
   - Design patterns usage
   - Security considerations
   - Performance implications

4. **Maintainability**
   - Code reusability
   - Testing considerations
   - Future extensibility
   - Technical debt assessment

## Code to Review:
```{language}
{code}
```

Please provide a comprehensive review following this framework. Include specific suggestions for improvement and highlight both strengths and areas for enhancement."""
    return (
        f"Code review prompt for {language} code",
        [{"role": "user", "content": text}],
    )


def writing_helper(
    style: str,
    audience: str,
    purpose: str,
    content: str,
    length: str = "medium",
):
    text = f"""# Writing Enhancement Assistant

**Style**: {style}
**Audience**: {audience}
**Purpose**: {purpose}
**Target Length**: {length}

## Enhancement Framework

{LENGTH_GUIDANCE[length]}

1. **Content & Structure**
   - Logical flow and organization
   - Key message clarity
   - Supporting evidence
   - Conclusion effectiveness

2. **Style & Tone**
   - Appropriate for {audience}
   - Consistent {style} voice
   - Engaging and purposeful language
   - Clarity and readability

3. **Technical Quality**
   - Grammar and syntax
   - Word choice and vocabulary
   - Sentence variety and flow
   - Paragraph structure

4. **Audience Alignment**
   - Meets {audience} expectations
   - Achieves {purpose} effectively
   - Appropriate complexity level
   - Call-to-action clarity

## Content to Enhance:
{content}

Please enhance this content focusing on the framework above while maintaining the intended {style} style for {audience}. Provide both the improved version and specific feedback on changes made."""
    return (
        f"Writing assistance for {style} style targeting {audience}",
        [{"role": "user", "content": text}],
    )


def meeting_summary(
    meeting_type: str,
    participants: str,
    duration: str,
    key_topics: Optional[str] = None,
    action_items: Optional[str] = None,
):
    extras = (
        _optional_line("Key Topics Discussed", key_topics)
        + _optional_line("Action Items", action_items)
    )
    text = f"""# Meeting Summary Assistant

**Meeting Type**: {meeting_type}
**Participants**: {participants}
**Duration**: {duration}{extras}

## Summary Framework for {meeting_type}

Focus Areas: {MEETING_FOCUS[meeting_type]}

1. **Meeting Overview**
   - Date, time, and duration
   - Attendees and roles
   - Main objectives

2. **Key Discussion Points**
   - Primary topics covered
   - Important decisions made
   - Outstanding questions

3. **Action Items & Next Steps**
   - Specific tasks assigned
   - Owners and deadlines
   - Follow-up meetings needed

4. **Summary & Outcomes**
   - Key achievements
   - Blockers identified
   - Success metrics

Please create a comprehensive meeting summary following this structure. Include all relevant details while keeping it concise and actionable for follow-up."""
    return (
        f"Meeting summary template for {meeting_type} meeting",
        [{"role": "user", "content": text}],
    )


def learning_tutor(
    topic: str,
    level: str,
    goals: str,
    learning_style: str = "reading",
    time_available: Optional[str] = None,
):
    extras = _optional_line("Time Available", time_available)
    text = f"""# Learning Tutor Assistant

**Topic**: {topic}
**Level**: {level}
**Learning Style**: {learning_style}
**Goals**: {goals}{extras}

## Learning Framework

**Adaptation**: {STYLE_ADAPTATIONS[learning_style]}
**Approach**: {LEVEL_GUIDANCE[level]}

1. **Foundation Building**
   - Key concepts and terminology
   - Prerequisites review
   - Learning objectives clarification

2. **Core Content Delivery**
   - Main topic explanation
   - Examples and applications
   - Common misconceptions

3. **Practice & Application**
   - Hands-on exercises
   - Real-world scenarios
   - Problem-solving opportunities

4. **Assessment & Progress**
   - Knowledge check questions
   - Skill demonstration
   - Next learning steps

Please create a comprehensive learning experience for {topic} that:
- Matches the {level} level
- Adapts to {learning_style} learning style
- Achieves the specified goals: {goals}
- Provides engaging and effective instruction

Include specific activities, examples, and assessment methods."""
    return (
        f"Learning assistance for {topic} at {level} level",
        [{"role": "user", "content": text}],
    )


def project_planner(
    context: str,
    timeline: str,
    team_size: str,
    objectives: str,
    constraints: Optional[str] = None,
    budget: Optional[str] = None,
):
    extras = _optional_line("Constraints", constraints) + _optional_line("Budget", budget)
    text = f"""# Project Planning Assistant

**Context**: {context}
**Timeline**: {timeline}
**Team Size**: {team_size}
**Objectives**: {objectives}{extras}

## Planning Framework for {context}

Key Phases: {CONTEXT_PHASES[context]}

1. **Project Definition**
   - Clear scope and deliverables
   - Success criteria and metrics
   - Stakeholder identification

2. **Resource Planning**
   - Team roles and responsibilities
   - Required skills and expertise
   - Tools and infrastructure needs

3. **Timeline & Milestones**
   - Phase breakdown and dependencies
   - Key milestone definitions
   - Risk assessment and mitigation

4. **Execution Strategy**
   - Communication plan
   - Progress tracking methods
   - Quality assurance approach

5. **Success Measurement**
   - KPIs and success metrics
   - Review and evaluation process
   - Lessons learned capture

Please create a comprehensive project plan that:
- Addresses the specific objectives: {objectives}
- Works within the timeline: {timeline}
- Utilizes the team effectively: {team_size}
- Considers all constraints and budget factors

Include specific tasks, timelines, and success criteria."""
    return (
        f"Project planning template for {context} project",
        [{"role": "user", "content": text}],
    )


def preview(prompt_name: str, args: Dict[str, Any]) -> str:
    """One-line summary of what a prompt would generate."""
    if prompt_name == "code-review":
        return (
            f"Code Review Assistant for {args.get('language')} code focusing on "
            f"{args.get('focus_areas') or 'general quality'}"
        )
    if prompt_name == "writing-helper":
        return f"Writing enhancement in {args.get('style')} style for {args.get('audience')}"
    if prompt_name == "meeting-summary":
        return (
            f"{args.get('meeting_type')} meeting summary for {args.get('duration')} "
            f"with {args.get('participants')}"
        )
    if prompt_name == "learning-tutor":
        return (
            f"{args.get('level')} level tutoring for {args.get('topic')} using "
            f"{args.get('learning_style')} approach"
        )
    if prompt_name == "project-planner":
        return (
            f"{args.get('context')} project plan for {args.get('timeline')} "
            f"with team of {args.get('team_size')}"
        )
    return f"Preview for {prompt_name} with provided arguments"


def list_prompt_categories() -> str:
    return CATEGORIES


def preview_prompt(prompt_name: str, sample_args: Optional[str] = None) -> str:
    """Render a preview from JSON sample arguments, or the built-in samples."""
    if sample_args:
        try:
            sample = json.loads(sample_args)
        except json.JSONDecodeError as e:
            raise HandlerError(f"sample_args is not valid JSON: {e}") from e
        if not isinstance(sample, dict):
            raise HandlerError("sample_args must be a JSON object")
    else:
        sample = SAMPLE_ARGUMENTS.get(prompt_name, {})
    return f"""# Prompt Preview: {prompt_name}

## Sample Arguments:
{json.dumps(sample, indent=2)}

## Generated Prompt:
{preview(prompt_name, sample)}

---
*This is a preview using sample arguments. Use the actual prompt with your specific parameters for real tasks.*"""


def register_prompts(handler: LearningHandler) -> None:
    handler.prompt(
        name="code-review",
        description="Generate comprehensive code review prompts with analysis framework",
        arguments=[
            EnumField("language", "Programming language of the code", choices=PROGRAMMING_LANGUAGES),
            StringField("code", "Code content to review", min_length=1),
            StringField(
                "focus_areas",
                'Specific areas to focus on (e.g., "performance, security")',
                required=False,
            ),
            EnumField(
                "complexity", "Code complexity level (simple, moderate, complex)",
                default="moderate", choices=tuple(COMPLEXITY_GUIDANCE),
            ),
        ],
    )(code_review)

    handler.prompt(
        name="writing-helper",
        description="Create context-aware writing assistance prompts",
        arguments=[
            EnumField("style", "Writing style (professional, casual, academic, etc.)", choices=WRITING_STYLES),
            StringField("audience", "Target audience for the writing", min_length=1),
            StringField(
                "purpose", "Purpose of the writing (inform, persuade, entertain, etc.)",
                min_length=1,
            ),
            StringField("content", "Content to improve or enhance", min_length=1),
            EnumField(
                "length", "Desired content length (short, medium, long)",
                default="medium", choices=tuple(LENGTH_GUIDANCE),
            ),
        ],
    )(writing_helper)

    handler.prompt(
        name="meeting-summary",
        description="Generate structured meeting summary templates",
        arguments=[
            EnumField(
                "meeting_type", "Type of meeting (standup, planning, retrospective, etc.)",
                choices=MEETING_TYPES,
            ),
            StringField("participants", "List of meeting participants", min_length=1),
            StringField("duration", "Meeting duration", min_length=1),
            StringField("key_topics", "Key topics discussed", required=False),
            StringField("action_items", "Action items from the meeting", required=False),
        ],
    )(meeting_summary)

    handler.prompt(
        name="learning-tutor",
        description="Create adaptive learning assistance prompts",
        arguments=[
            StringField("topic", "Subject or topic to learn", min_length=1),
            EnumField(
                "level", "Learning level (beginner, intermediate, advanced, expert)",
                choices=LEARNING_LEVELS,
            ),
            EnumField(
                "learning_style",
                "Preferred learning style (visual, auditory, kinesthetic, reading)",
                default="reading", choices=LEARNING_STYLES,
            ),
            StringField("goals", "Specific learning goals", min_length=1),
            StringField("time_available", "Available time for learning", required=False),
        ],
    )(learning_tutor)

    handler.prompt(
        name="project-planner",
        description="Generate strategic project planning templates",
        arguments=[
            EnumField(
                "context", "Project context (software-development, marketing-campaign, etc.)",
                choices=PROJECT_CONTEXTS,
            ),
            StringField("timeline", "Project timeline or deadline", min_length=1),
            StringField("team_size", "Size and composition of the team", min_length=1),
            StringField("objectives", "Main project objectives", min_length=1),
            StringField("constraints", "Project constraints or limitations", required=False),
            StringField("budget", "Budget considerations", required=False),
        ],
    )(project_planner)


def register_tools(handler: LearningHandler) -> None:
    handler.tool(
        name="list-prompt-categories",
        description="List the available prompt templates by category",
        arguments=[],
    )(list_prompt_categories)

    handler.tool(
        name="preview-prompt",
        description="Preview a prompt template using sample arguments",
        arguments=[
            StringField("prompt_name", "Name of the prompt to preview", min_length=1),
            StringField(
                "sample_args",
                "Arguments to preview with, as a JSON object (default: built-in samples)",
                required=False,
            ),
        ],
    )(preview_prompt)
