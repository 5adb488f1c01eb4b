# src/todo_app/__init__.py

"""Todo list: a small JSON-file backed Task Service and its console client."""

__version__ = "1.0.0"
