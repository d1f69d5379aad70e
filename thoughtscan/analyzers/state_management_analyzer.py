#!/usr/bin/env python3
"""
Thoughtscan State Management Analyzer
Detects getters that hand out references to mutable internal state
"""

from typing import List

from thoughtscan.analyzers.base import BaseAnalyzer, Branch, Signature
from thoughtscan.core.context import CodeContext
from thoughtscan.core.tree import Severity, ThoughtNode


class StateManagementAnalyzer(BaseAnalyzer):
    """
    State Management Risk Analyzer

    Detects:
    - MUTABLE_GETTER_EXPOSURE: getter body directly returns this.<field> or STATE
    - STATE_MANAGEMENT_DETECTED: the file also uses state-management tokens,
      which raises confidence in the getter finding
    """

    BRANCH = Branch.STATE_MANAGEMENT_RISKS

    STATE_CONFIDENCE_BUMP = 0.15

    MUTABLE_GETTER_EXPOSURE = Signature(
        name='MUTABLE_GETTER_EXPOSURE',
        pattern=r'\bget(?:\s+\w+|\w*)\s*\(\)[^{};]{0,200}\{\s*return\s+(?:this\.|STATE)',
        severity=Severity.HIGH,
        description='Getters exposing mutable state references',
        reasoning='Getters returning direct references to mutable state allow external manipulation',
        confidence=0.8,
        evidence_template="Found {count} potential violations in {file}",
        mitigations=[
            'Return a copy or a frozen view of internal state',
        ],
    )

    def get_signatures(self) -> List[Signature]:
        return [self.MUTABLE_GETTER_EXPOSURE]

    def apply_compound_rules(self, signature: Signature, node: ThoughtNode,
                             content: str, context: CodeContext):
        if not context.has_state_management:
            return

        node.bump_confidence(self.STATE_CONFIDENCE_BUMP)
        detected = node.add_child(ThoughtNode(
            'STATE_MANAGEMENT_DETECTED',
            'File contains state management patterns',
            Severity.MEDIUM,
            f"Patterns: {', '.join(context.state_management[:3])}",
            0.9,
        ))
        detected.add_dependency(node)
