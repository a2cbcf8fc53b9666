"""
Keyword heuristics used by the normalizer.

Every inference is driven by an ordered table of rules. The first rule whose
keyword list has a substring match in the lowercased text wins, so table
order is the tie-break for overlapping keywords. Adding a category or a
label is a change to these tables only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class KeywordRule:
    """Maps a label to the keywords that select it.

    Attributes:
        label: Value returned when the rule matches
        keywords: Substrings searched for in lowercased text
    """

    label: str
    keywords: tuple[str, ...]

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


DEFAULT_CATEGORY = "Other"

CATEGORY_RULES: tuple[KeywordRule, ...] = (
    KeywordRule("VS Code Extension", ("vscode", "vs code", "visual studio code", "extension", "editor")),
    KeywordRule("CLI Tool", ("cli", "terminal", "command line", "command-line", "shell")),
    KeywordRule("API Wrapper", ("api", "sdk", "wrapper", "client", "library")),
    KeywordRule("Browser Extension", ("chrome", "browser", "extension", "firefox")),
    KeywordRule("MCP Server", ("mcp", "model context protocol", "mcp server")),
    KeywordRule("AI Agent", ("agent", "autonomous", "agentic", "workflow")),
    KeywordRule("Code Generation", ("code generation", "code gen", "codegen", "copilot", "autocomplete")),
    KeywordRule("Productivity", ("productivity", "automation", "workflow", "task")),
    KeywordRule("Writing", ("writing", "content", "copywriting", "text")),
    KeywordRule("Data Analysis", ("data", "analysis", "analytics", "visualization")),
    KeywordRule("Education", ("education", "learning", "tutorial", "course")),
    KeywordRule("Chat Interface", ("chat", "chatbot", "conversation", "ui", "interface")),
)

CATEGORIES: tuple[str, ...] = tuple(rule.label for rule in CATEGORY_RULES) + (DEFAULT_CATEGORY,)

PRICING_RULES: tuple[KeywordRule, ...] = (
    KeywordRule("paid", ("paid", "subscription", "premium")),
    KeywordRule("freemium", ("freemium", "free tier")),
)

DIFFICULTY_RULES: tuple[KeywordRule, ...] = (
    KeywordRule("advanced", ("docker", "kubernetes", "terraform")),
    KeywordRule("beginner", ("npm install", "pip install", "easy")),
    KeywordRule("intermediate", ("api key", "configuration")),
)

AUDIENCE_RULES: tuple[KeywordRule, ...] = (
    KeywordRule("beginners", ("beginner", "no-code", "non-technical")),
    KeywordRule("enterprise", ("enterprise", "team", "organization")),
    KeywordRule("developers", ("developer", "coding", "api")),
)

PROBLEM_SOLVED: dict[str, str] = {
    "VS Code Extension": "Brings AI coding assistance directly into VS Code",
    "CLI Tool": "Provides command-line access to Claude AI features",
    "API Wrapper": "Simplifies integration with the Anthropic Claude API",
    "Browser Extension": "Brings Claude AI capabilities directly into your browser",
    "MCP Server": "Extends Claude's capabilities through the Model Context Protocol",
    "AI Agent": "Enables building autonomous AI agents powered by Claude",
    "Code Generation": "Helps developers write, review, and improve code using Claude AI",
    "Productivity": "Automates workflows and tasks using Claude",
    "Writing": "Helps draft, edit, and polish written content with Claude",
    "Data Analysis": "Turns data into insights with Claude-assisted analysis",
    "Education": "Helps learn and experiment with Claude",
    "Chat Interface": "Provides a conversational interface to interact with Claude AI",
}
DEFAULT_PROBLEM_SOLVED = "Provides AI-powered tools and integrations using Claude"

BEST_FOR: dict[str, str] = {
    "VS Code Extension": "developers using VS Code who want AI-assisted coding",
    "CLI Tool": "developers comfortable with terminal who want quick AI access",
    "API Wrapper": "developers building applications on top of Claude API",
    "Browser Extension": "anyone who wants Claude AI integrated in their browser",
    "MCP Server": "developers extending Claude Code with custom tools",
    "AI Agent": "teams building automated workflows with AI",
    "Code Generation": "developers looking to speed up coding with AI",
    "Productivity": "professionals who want to automate repetitive tasks",
    "Writing": "content creators and writers using AI assistance",
    "Data Analysis": "analysts working with data who need AI insights",
    "Education": "students and educators using AI for learning",
    "Chat Interface": "users who prefer a chat-based interaction with Claude",
}
DEFAULT_BEST_FOR = "anyone looking to leverage Claude AI"


def first_match(rules: Iterable[KeywordRule], text: str, default: str) -> str:
    lowered = text.lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule.label
    return default


def infer_category(name: str, description: str, topics: Iterable[str] = ()) -> str:
    """Pick the first category whose keywords occur in name, description or topics."""
    text = f"{name} {description} {' '.join(topics)}"
    return first_match(CATEGORY_RULES, text, DEFAULT_CATEGORY)


def infer_pricing(description: str) -> str:
    return first_match(PRICING_RULES, description, "free")


def infer_difficulty(description: str, topics: Iterable[str] = ()) -> str:
    text = f"{description} {' '.join(topics)}"
    return first_match(DIFFICULTY_RULES, text, "intermediate")


def infer_audience(description: str) -> str:
    return first_match(AUDIENCE_RULES, description, "developers")


def problem_solved_for(category: str) -> str:
    return PROBLEM_SOLVED.get(category, DEFAULT_PROBLEM_SOLVED)


def best_for(category: str) -> str:
    return BEST_FOR.get(category, DEFAULT_BEST_FOR)
