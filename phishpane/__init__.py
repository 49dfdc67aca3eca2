"""phishpane: submit the open message for phishing analysis and present the result."""

__version__ = "0.1.0"
