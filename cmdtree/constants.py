"""Shared constants for cmdtree."""

__all__ = [
    "DEFAULT_WIDTH",
    "ENV_DEBUG",
    "ENV_FIRST_CALL",
    "ENV_PREFIX",
    "ENV_STYLE",
    "ENV_TIMEOUT",
    "ENV_WIDTH",
    "HELP_NAME",
    "HELP_SHORT",
    "MIN_NAME_WIDTH",
    "MISSING_DESCRIPTION",
    "SEPARATOR_CHAR",
]

# Environment variables understood by every cmdtree program
ENV_STYLE = "CMDLINE_STYLE"
ENV_WIDTH = "CMDLINE_WIDTH"
ENV_FIRST_CALL = "CMDLINE_FIRST_CALL"  # non-empty: output is nested in a parent's dump
ENV_PREFIX = "CMDLINE_PREFIX"  # command path of the parent, for delegated binaries
ENV_TIMEOUT = "CMDLINE_TIMEOUT"
ENV_DEBUG = "CMDLINE_DEBUG"

# Name of the synthesized help command
HELP_NAME = "help"
HELP_SHORT = "Display help for commands or topics"

# Placeholder for binaries which can't describe themselves
MISSING_DESCRIPTION = "No description available"

# Layout defaults
DEFAULT_WIDTH = 80
MIN_NAME_WIDTH = 11
SEPARATOR_CHAR = "="
