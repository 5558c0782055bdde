"""Agent builder: render, containerize and publish agents from creation events."""

__version__ = "0.1.0"
