"""
Thoughtscan - Tree-of-Thought Security Reasoning
Heuristic scanner that organises risky code patterns into a weighted
reasoning tree and flags compound critical paths.
"""

__version__ = "1.0.0"
__author__ = "Thoughtscan Contributors"
__license__ = "AGPL-3.0-or-later"

__all__ = ["__version__"]
