"""
codelecture - Annotate source lines with Markdown notes and replay them as lessons.

Subpackages:
- schemas: Pydantic models for lessons, notes and the master index
- classroom: Lesson store, annotation session, review navigator
- viewer: Rendering helpers for code excerpts and status text
- utils: Workspace paths and configuration
"""

__version__ = "0.1.0"
