"""A small modal terminal editor with split panes, tabs, a hex view and a minimal language-server client."""

__version__ = "0.1.0"