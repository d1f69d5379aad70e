"""
Thoughtscan Core Module
Reasoning tree, directory scanning, critical-path detection and reporting
"""

# Submodules are imported on-demand; the analyzers package depends on
# core.tree, so importing the engine here would create an import cycle.
# from thoughtscan.core.engine import TreeOfThoughtEngine
