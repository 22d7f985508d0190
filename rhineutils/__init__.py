"""Location-service utilities: logging, lists, message queues, timers, target detection, configuration and permission tables."""

__version__ = "0.1.0"