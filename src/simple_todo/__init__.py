# src/simple_todo/__init__.py

"""Single-list task keeper: in-memory task store with local JSON persistence."""

__version__ = "0.3.0"
