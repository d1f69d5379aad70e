#!/usr/bin/env python3
"""
Thoughtscan Base Analyzer Class
Abstract base class for the pattern analyzers that populate the reasoning tree
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Optional

from thoughtscan.core.context import CodeContext
from thoughtscan.core.tree import Severity, ThoughtNode

if TYPE_CHECKING:
    from thoughtscan.core.engine import TreeBranches


class Branch(Enum):
    """The four fixed top-level branches of the reasoning tree"""
    CODE_EXECUTION_RISKS = "CODE_EXECUTION_RISKS"
    STATE_MANAGEMENT_RISKS = "STATE_MANAGEMENT_RISKS"
    ASYNC_CONCURRENCY_RISKS = "ASYNC_CONCURRENCY_RISKS"
    DATA_FLOW_RISKS = "DATA_FLOW_RISKS"


@dataclass
class Signature:
    """
    A single regex heuristic

    New heuristics are added by declaring a Signature on an analyzer;
    tree-building logic does not change.
    """
    name: str
    pattern: str
    severity: Severity
    description: str
    reasoning: str
    confidence: float
    evidence_template: str = "Found {count} instances in {file}"
    mitigations: List[str] = field(default_factory=list)
    flags: int = 0

    _compiled: Optional[re.Pattern] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        """Compile the regex once"""
        self._compiled = re.compile(self.pattern, self.flags)

    def find(self, content: str) -> List[str]:
        """Return every non-overlapping match in content"""
        return [match.group(0) for match in self._compiled.finditer(content)]

    def count(self, content: str) -> int:
        return len(self.find(content))

    def create_node(self, count: int, file_path: str) -> ThoughtNode:
        """Build the finding node for count matches in file_path"""
        node = ThoughtNode(
            self.name,
            self.description,
            self.severity,
            self.evidence_template.format(count=count, file=file_path),
            self.confidence,
        )
        node.set_reasoning(self.reasoning)
        for mitigation in self.mitigations:
            node.add_mitigation(mitigation)
        return node


class BaseAnalyzer(ABC):
    """
    Abstract base class for all Thoughtscan pattern analyzers

    Each analyzer implements:
    - Branch selection (which top-level branch its findings hang under)
    - Signature set (which regex heuristics it runs)
    - Compound rules (optional follow-up reasoning on a finding)

    Analyzers never touch the filesystem; content arrives already read.
    """

    BRANCH: Branch

    def __init__(self, config=None):
        self.name = self.__class__.__name__
        self.config = config

    @abstractmethod
    def get_signatures(self) -> List[Signature]:
        """Return the signatures this analyzer runs, in reporting order"""
        pass

    def analyze(self,
                file_path: str,
                content: str,
                context: CodeContext,
                branches: 'TreeBranches') -> List[ThoughtNode]:
        """
        Match signatures against a file and attach findings to the tree

        Args:
            file_path: Path used in evidence strings
            content: File content
            context: Extracted code context for the same file
            branches: The tree's fixed branches

        Returns:
            Newly created top-level finding nodes (already attached)
        """
        parent = branches.get(self.BRANCH)
        findings = []

        for signature in self.get_signatures():
            count = signature.count(content)
            if not count:
                continue

            node = parent.add_child(signature.create_node(count, file_path))
            self.apply_compound_rules(signature, node, content, context)
            findings.append(node)

        return findings

    def apply_compound_rules(self,
                             signature: Signature,
                             node: ThoughtNode,
                             content: str,
                             context: CodeContext):
        """Hook for follow-up reasoning on a fresh finding (default: none)"""
        return None


class AnalyzerRegistry:
    """Ordered registry of analyzer instances"""

    def __init__(self):
        self.analyzers: List[BaseAnalyzer] = []

    def register(self, analyzer: BaseAnalyzer):
        """Register an analyzer instance"""
        self.analyzers.append(analyzer)

    def get_all_analyzers(self) -> List[BaseAnalyzer]:
        return list(self.analyzers)

    def get_enabled(self, disabled: Iterable[str] = ()) -> List[BaseAnalyzer]:
        """Analyzers whose class name is not in disabled"""
        disabled = set(disabled)
        return [a for a in self.analyzers if a.name not in disabled]

    def get_analyzer(self, name: str) -> Optional[BaseAnalyzer]:
        for analyzer in self.analyzers:
            if analyzer.name == name:
                return analyzer
        return None
