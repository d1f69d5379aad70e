#!/usr/bin/env python3
"""
Thoughtscan Critical-Path Detector
Flags root-to-leaf reasoning chains that combine into critical risk
"""

from typing import List

from thoughtscan.core.tree import Severity, ThoughtNode


class CriticalPathDetector:
    """
    A path is critical when any node on it reaches CRITICAL compound
    severity with confidence at or above the floor.
    """

    DEFAULT_CONFIDENCE_FLOOR = 0.8

    def __init__(self, confidence_floor: float = DEFAULT_CONFIDENCE_FLOOR):
        self.confidence_floor = confidence_floor

    def is_critical_node(self, node: ThoughtNode) -> bool:
        return (node.calculate_compound_severity() == Severity.CRITICAL
                and node.confidence >= self.confidence_floor)

    def is_critical(self, path: List[ThoughtNode]) -> bool:
        return any(self.is_critical_node(node) for node in path)

    def detect(self, root: ThoughtNode) -> List[List[ThoughtNode]]:
        """All critical root-to-leaf paths, in depth-first order"""
        return [path for path in root.get_all_paths() if self.is_critical(path)]
