"""contentdesk — normalize, render and persist generated social content."""

__version__ = "0.3.0"
