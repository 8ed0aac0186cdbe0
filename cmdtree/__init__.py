"""cmdtree - help rendering and dispatch for hierarchical command-line tools.

Applications describe their commands as a tree of `Command` nodes with
flags, sub-commands and help topics. cmdtree parses the command line,
renders usage in several styles, documents a whole tree with
``help ...`` and extends the tree with ``<parent>-<sub>`` executables
found on the PATH.
"""
