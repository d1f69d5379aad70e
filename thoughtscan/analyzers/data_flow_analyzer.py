#!/usr/bin/env python3
"""
Thoughtscan Data Flow Analyzer
Detects direct writes into the global window object
"""

from typing import List

from thoughtscan.analyzers.base import BaseAnalyzer, Branch, Signature
from thoughtscan.core.tree import Severity


class DataFlowAnalyzer(BaseAnalyzer):
    """
    Data Flow Risk Analyzer

    Detects:
    - MEMORY_POLLUTION: window[...] = value (assignments of null are cleanup)
    """

    BRANCH = Branch.DATA_FLOW_RISKS

    MEMORY_POLLUTION = Signature(
        name='MEMORY_POLLUTION',
        pattern=r'window\[(?:[^\[\]\n]|\[[^\[\]\n]*\])*\]\s*=(?!=)(?!\s*null\b)[^\n]*',
        severity=Severity.HIGH,
        description='Global scope pollution detected',
        reasoning=(
            'Direct window object manipulation can lead to memory leaks and '
            'global state pollution'
        ),
        confidence=0.75,
        evidence_template="Found {count} global assignments in {file}",
        mitigations=[
            'Keep shared values in a module scope or an explicit store',
        ],
    )

    def get_signatures(self) -> List[Signature]:
        return [self.MEMORY_POLLUTION]
