"""duke-tasks: a personal task-tracking command interpreter."""

__version__ = "0.1.0"
