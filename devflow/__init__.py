"""DevFlow - a question and answer site backend."""

__version__ = "0.1.0"
