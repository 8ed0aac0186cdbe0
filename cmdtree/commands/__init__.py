"""Command tree handling for cmdtree.

This package provides:
- models: Data structures (Command, Topic, Runner, RunnerFunc)
- tree: Path naming and tree queries shared by parsing and help rendering
"""
