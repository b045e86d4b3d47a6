"""
Agents package for generative feedback.

Each agent follows a consistent structure with agent.py, tools.py, and prompts.py.
"""

from agents.base import TextGenerator, GeminiTextGenerator

__all__ = [
    "TextGenerator",
    "GeminiTextGenerator",
]
