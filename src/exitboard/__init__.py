"""exitboard - task board state manager for exit-planning engagements."""

__version__ = "0.1.0"
