#!/usr/bin/env python3
"""
Thoughtscan Code Execution Analyzer
Detects non-deterministic control flow driven by Math.random()
"""

from typing import List

from thoughtscan.analyzers.base import BaseAnalyzer, Branch, Signature
from thoughtscan.core.context import CodeContext
from thoughtscan.core.tree import Severity, ThoughtNode


class CodeExecutionAnalyzer(BaseAnalyzer):
    """
    Code Execution Risk Analyzer

    Detects:
    - RANDOM_CONTROL_FLOW: Math.random() inside a conditional or comparison
    - ASYNC_RANDOM_COMPOUND: the same file also performs async operations
    """

    BRANCH = Branch.CODE_EXECUTION_RISKS

    RANDOM_CONTROL_FLOW = Signature(
        name='RANDOM_CONTROL_FLOW',
        pattern=r'\bif\s*\([^)]*Math\.random\(|Math\.random\(\)\s*[<>]=?',
        severity=Severity.CRITICAL,
        description='Non-deterministic control flow detected',
        reasoning=(
            'Math.random() in control flow creates unpredictable execution paths '
            'that can be exploited for collapse vectors'
        ),
        confidence=0.9,
        mitigations=[
            'Inject a seeded random source so branches are reproducible in tests',
            'Move randomised decisions out of security-relevant control flow',
        ],
    )

    def get_signatures(self) -> List[Signature]:
        return [self.RANDOM_CONTROL_FLOW]

    def apply_compound_rules(self, signature: Signature, node: ThoughtNode,
                             content: str, context: CodeContext):
        if not context.has_async_operations:
            return

        compound = node.add_child(ThoughtNode(
            'ASYNC_RANDOM_COMPOUND',
            'Random control flow combined with async operations',
            Severity.CRITICAL,
            f"Async operations: {len(context.async_operations)}",
            0.95,
        ))
        compound.set_reasoning(
            'Combination of randomness and async operations significantly increases '
            'collapse vector risk'
        )
        compound.add_dependency(node)
