"""
wiki-path.

Finds a chain of hyperlinks between two Wikipedia articles by
exploring live pages concurrently under a shared request budget.
"""

__version__ = "0.1.0"
