"""taskdeck: task identity, classification and ordering model."""

__version__ = "0.3.0"
