"""Usage rendering for cmdtree commands.

This package provides:
- layout: Separators and documentation-friendly section headers
- usage: Usage text of a single command
- walker: Recursive documentation of a whole command tree ("help ...")
- dispatch: The synthesized help command and its path resolution
"""
