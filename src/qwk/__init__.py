"""
qwk - named prompt shortcuts for AI agent CLIs.

    qwk --set review "Review the staged changes"
    qwk review -- --model opus
"""

__version__ = "0.1.0"
