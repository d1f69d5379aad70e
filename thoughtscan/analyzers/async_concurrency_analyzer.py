#!/usr/bin/env python3
"""
Thoughtscan Async/Concurrency Analyzer
Detects un-awaited async work and event publishing cascades
"""

from typing import List

from thoughtscan.analyzers.base import BaseAnalyzer, Branch, Signature
from thoughtscan.core.context import CodeContext
from thoughtscan.core.tree import Severity, ThoughtNode


class AsyncConcurrencyAnalyzer(BaseAnalyzer):
    """
    Async/Concurrency Risk Analyzer

    Detects:
    - ASYNC_WITHOUT_AWAIT: async assignment with no await later on the line
    - NO_ERROR_HANDLING: ...and the file has no error handling at all
    - EVENT_CASCADE_RISK: two .publish( calls within the cascade window
    - NO_EVENT_CLEANUP: ...and the file never unsubscribes listeners
    """

    BRANCH = Branch.ASYNC_CONCURRENCY_RISKS

    DEFAULT_CASCADE_WINDOW = 10

    CLEANUP_TOKENS = ('removeEventListener', 'unsubscribe')

    ASYNC_WITHOUT_AWAIT = Signature(
        name='ASYNC_WITHOUT_AWAIT',
        pattern=r'\basync\b[^\n=]*=(?![^\n]*\bawait\b)[^\n]*',
        severity=Severity.MEDIUM,
        description='Async operations without proper await handling',
        reasoning='Async operations without await can lead to race conditions and state corruption',
        confidence=0.7,
        mitigations=[
            'Await the promise or return it to the caller',
        ],
    )

    def __init__(self, config=None):
        super().__init__(config)
        window = getattr(config, 'cascade_window', None)
        self.cascade_window = self.DEFAULT_CASCADE_WINDOW if window is None else int(window)
        self.event_cascade = self._build_cascade_signature(self.cascade_window)

    @staticmethod
    def _build_cascade_signature(window: int) -> Signature:
        return Signature(
            name='EVENT_CASCADE_RISK',
            pattern=r'\.publish\([^\n]*(?:\n[^\n]*){0,%d}?\.publish\(' % window,
            severity=Severity.CRITICAL,
            description='Potential event publishing cascade detected',
            reasoning='Rapid event cascades can overwhelm the system and create collapse conditions',
            confidence=0.8,
            evidence_template="Found {count} cascade patterns in {file}",
            mitigations=[
                'Batch or debounce related events into a single publish',
            ],
        )

    def get_signatures(self) -> List[Signature]:
        return [self.ASYNC_WITHOUT_AWAIT, self.event_cascade]

    def apply_compound_rules(self, signature: Signature, node: ThoughtNode,
                             content: str, context: CodeContext):
        if signature is self.ASYNC_WITHOUT_AWAIT:
            self._check_error_handling(node, context)
        elif signature is self.event_cascade:
            self._check_event_cleanup(node, content)

    def _check_error_handling(self, node: ThoughtNode, context: CodeContext):
        if context.has_error_handling:
            return

        # Separate signal, not linked to the parent finding.
        error_issue = node.add_child(ThoughtNode(
            'NO_ERROR_HANDLING',
            'Missing error handling for async operations',
            Severity.HIGH,
            'No try/catch or error handling detected',
            0.85,
        ))
        error_issue.set_reasoning('Unhandled async errors can propagate and cause system instability')

    def _check_event_cleanup(self, node: ThoughtNode, content: str):
        if any(token in content for token in self.CLEANUP_TOKENS):
            return

        cleanup_issue = node.add_child(ThoughtNode(
            'NO_EVENT_CLEANUP',
            'Missing event listener cleanup',
            Severity.MEDIUM,
            'No cleanup patterns detected',
            0.7,
        ))
        cleanup_issue.set_reasoning(
            'Without proper cleanup, event cascades can accumulate and cause memory leaks'
        )
        cleanup_issue.add_dependency(node)
