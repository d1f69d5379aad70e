#!/usr/bin/env python3
"""
Thoughtscan Reasoning Tree
Hierarchical, severity-weighted tree of security findings

The tree has two relations:
- children: an ownership tree (a node has at most one parent, no cycles)
- dependencies: integer ids of related nodes in the same tree, used only
  to compute compound severity

Nodes are registered in a ReasoningTree arena which hands out ids in
registration order. Dependencies are stored as those ids rather than as
object references, so walking children can never loop.
"""

import math
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterator, List, Optional, Set, Tuple

from rich.markup import escape


class Severity(Enum):
    """Finding severity levels"""
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    INFO = "INFO"

    @property
    def weight(self) -> int:
        """Ordinal weight, INFO=0 through CRITICAL=4"""
        return SEVERITY_WEIGHTS[self]

    @classmethod
    def from_weight(cls, weight: int) -> 'Severity':
        """Map an ordinal weight back to a label (clamped to the valid range)"""
        weight = min(max(int(weight), 0), MAX_SEVERITY_WEIGHT)
        return _WEIGHT_TO_SEVERITY[weight]

    @classmethod
    def parse(cls, value: Any) -> 'Severity':
        """
        Accept a Severity or a case-insensitive label

        Raises:
            ValueError: if the label is not a known severity
        """
        if isinstance(value, Severity):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown severity: {value!r}") from None


SEVERITY_WEIGHTS = {
    Severity.INFO: 0,
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}
MAX_SEVERITY_WEIGHT = SEVERITY_WEIGHTS[Severity.CRITICAL]
_WEIGHT_TO_SEVERITY = {weight: severity for severity, weight in SEVERITY_WEIGHTS.items()}


class Confidence(float):
    """
    Heuristic certainty bounded to the unit interval

    Construction clamps into [0, 1] and arithmetic saturates, so an
    additive bump can never push a node above 1.0.
    """

    def __new__(cls, value: float = 0.0):
        value = float(value)
        if math.isnan(value):
            raise ValueError("Confidence cannot be NaN")
        return super().__new__(cls, min(max(value, 0.0), 1.0))

    def __add__(self, other) -> 'Confidence':
        return Confidence(float(self) + float(other))

    __radd__ = __add__

    def __sub__(self, other) -> 'Confidence':
        return Confidence(float(self) - float(other))

    def __rsub__(self, other) -> 'Confidence':
        return Confidence(float(other) - float(self))

    def __repr__(self) -> str:
        return f"Confidence({float(self)!r})"

    def as_percent(self) -> str:
        return f"{float(self) * 100:.1f}%"


SEVERITY_STYLES = {
    Severity.CRITICAL: 'red',
    Severity.HIGH: 'yellow',
    Severity.MEDIUM: 'cyan',
    Severity.LOW: 'blue',
    Severity.INFO: 'dim',
}


class ThoughtNode:
    """A single finding or grouping node in the reasoning tree"""

    def __init__(self,
                 node_type: str,
                 description: str,
                 severity: Any = Severity.INFO,
                 evidence: Optional[str] = None,
                 confidence: float = 0.0,
                 reasoning: Optional[str] = None):
        self.type = node_type
        self.description = description
        self.evidence = evidence
        self.reasoning = reasoning
        self.mitigations: List[str] = []
        self.children: List['ThoughtNode'] = []

        self.node_id: Optional[int] = None
        self.parent_id: Optional[int] = None
        self._tree: Optional['ReasoningTree'] = None
        self._has_parent = False
        self._severity = Severity.parse(severity)
        self._confidence = Confidence(confidence)
        self._dependency_ids: Set[int] = set()
        self._compound_memo: Optional[Tuple[int, Severity]] = None

    def __repr__(self) -> str:
        return f"ThoughtNode(id={self.node_id}, type={self.type!r}, severity={self._severity.value})"

    @property
    def severity(self) -> Severity:
        return self._severity

    @severity.setter
    def severity(self, value: Any):
        self._severity = Severity.parse(value)
        if self._tree is not None:
            self._tree.touch()

    @property
    def confidence(self) -> Confidence:
        return self._confidence

    @confidence.setter
    def confidence(self, value: float):
        self._confidence = Confidence(value)

    @property
    def tree(self) -> Optional['ReasoningTree']:
        return self._tree

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def dependency_ids(self) -> FrozenSet[int]:
        return frozenset(self._dependency_ids)

    @property
    def dependencies(self) -> List['ThoughtNode']:
        """Resolve dependency ids through the owning tree (sorted by id)"""
        if self._tree is None:
            return []
        return [self._tree.get(node_id) for node_id in sorted(self._dependency_ids)]

    def add_child(self, node: 'ThoughtNode') -> 'ThoughtNode':
        """
        Append a child and return it for chaining

        Raises:
            ValueError: if the node already has a parent, is a tree root,
                or belongs to a different tree
        """
        if node is self:
            raise ValueError("A node cannot be its own child")
        if node._has_parent:
            raise ValueError(f"{node.type} already has a parent")
        if node._tree is not None and node._tree.root is node:
            raise ValueError(f"{node.type} is the root of a tree")
        if node._tree is not None and node._tree is not self._tree:
            raise ValueError(f"{node.type} belongs to a different tree")

        self.children.append(node)
        node._has_parent = True
        if self._tree is not None:
            self._tree.register(node)
            node.parent_id = self.node_id
        return node

    def add_dependency(self, node: 'ThoughtNode') -> 'ThoughtNode':
        """
        Declare that this finding's severity is compounded by another node

        Raises:
            ValueError: if either node is not registered in the same tree
        """
        if self._tree is None or node._tree is not self._tree:
            raise ValueError("Dependencies must link nodes of the same tree")
        self._dependency_ids.add(node.node_id)
        self._tree.touch()
        return self

    def add_mitigation(self, strategy: str) -> 'ThoughtNode':
        self.mitigations.append(strategy)
        return self

    def set_reasoning(self, reasoning: str) -> 'ThoughtNode':
        self.reasoning = reasoning
        return self

    def bump_confidence(self, delta: float) -> 'ThoughtNode':
        """Adjust confidence by delta, saturating at the unit interval"""
        self._confidence = self._confidence + delta
        return self

    def calculate_compound_severity(self, _visiting: Optional[FrozenSet[int]] = None) -> Severity:
        """
        Severity adjusted upward by the severities of declared dependencies

        compound = min(base + floor(max(dependency compound) * 0.5), CRITICAL)

        The result never falls below the node's base severity. Results are
        memoised against the tree revision, which changes whenever a
        dependency is added anywhere in the tree. A dependency already on the
        evaluation stack contributes its base severity, which breaks cycles.
        """
        if not self._dependency_ids:
            return self._severity

        revision = self._tree.revision
        if self._compound_memo is not None and self._compound_memo[0] == revision:
            return self._compound_memo[1]

        visiting = (_visiting or frozenset()) | {self.node_id}
        dep_weight = 0
        for dep in self.dependencies:
            if dep.node_id in visiting:
                dep_severity = dep.severity
            else:
                dep_severity = dep.calculate_compound_severity(visiting)
            dep_weight = max(dep_weight, dep_severity.weight)

        compound_weight = min(self._severity.weight + math.floor(dep_weight * 0.5), MAX_SEVERITY_WEIGHT)
        result = Severity.from_weight(compound_weight)

        # Values computed mid-cycle depend on the entry point, only top-level
        # evaluations are cached.
        if _visiting is None:
            self._compound_memo = (revision, result)
        return result

    def get_all_paths(self, current_path: Optional[List['ThoughtNode']] = None) -> List[List['ThoughtNode']]:
        """Depth-first list of root-to-leaf paths, one per leaf"""
        new_path = list(current_path or []) + [self]
        if not self.children:
            return [new_path]

        paths = []
        for child in self.children:
            paths.extend(child.get_all_paths(new_path))
        return paths

    def iter_subtree(self) -> Iterator['ThoughtNode']:
        """Pre-order traversal of this node and its descendants"""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def render(self, indent: int = 0) -> str:
        """Rich markup rendering of this subtree, one level of indent per depth"""
        prefix = '  ' * indent
        style = SEVERITY_STYLES.get(self._severity, 'default')

        label = self._severity.value
        compound = self.calculate_compound_severity()
        if compound != self._severity:
            label = f"{label} → {compound.value}"

        result = f"{prefix}[{style}]\\[{label}] {escape(self.type)}: {escape(self.description)}[/{style}]\n"

        if self.evidence:
            result += f"{prefix}  [dim]Evidence: {escape(self.evidence)}[/dim]\n"

        if self.reasoning:
            result += f"{prefix}  [dim]Reasoning: {escape(self.reasoning)}[/dim]\n"

        if self._confidence > 0:
            result += f"{prefix}  [dim]Confidence: {self._confidence.as_percent()}[/dim]\n"

        for mitigation in self.mitigations:
            result += f"{prefix}  [dim green]Mitigation: {escape(mitigation)}[/dim green]\n"

        for child in self.children:
            result += child.render(indent + 1)

        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            'id': self.node_id,
            'type': self.type,
            'description': self.description,
            'severity': self._severity.value,
            'compound_severity': self.calculate_compound_severity().value,
            'evidence': self.evidence,
            'confidence': float(self._confidence),
            'reasoning': self.reasoning,
            'mitigations': list(self.mitigations),
            'dependencies': sorted(self._dependency_ids),
            'children': [child.to_dict() for child in self.children],
        }


class ReasoningTree:
    """
    Arena owning every node of one reasoning tree

    Node ids are indexes into the arena. The revision counter changes
    whenever a dependency or severity changes so memoised compound
    severities can be invalidated.
    """

    def __init__(self, root: ThoughtNode):
        if root._has_parent or root._tree is not None:
            raise ValueError(f"{root.type} is already part of a tree")
        self._nodes: List[ThoughtNode] = []
        self._revision = 0
        self.root = root
        self.register(root)

    def register(self, node: ThoughtNode):
        """Assign ids to node and its (possibly pre-built) subtree"""
        if node._tree is self:
            return
        if node._tree is not None:
            raise ValueError(f"{node.type} belongs to a different tree")

        node.node_id = len(self._nodes)
        node._tree = self
        self._nodes.append(node)
        for child in node.children:
            self.register(child)
            child.parent_id = node.node_id

    def touch(self):
        self._revision += 1

    @property
    def revision(self) -> int:
        return self._revision

    def get(self, node_id: int) -> ThoughtNode:
        return self._nodes[node_id]

    def leaves(self) -> List[ThoughtNode]:
        return [node for node in self.root.iter_subtree() if node.is_leaf]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[ThoughtNode]:
        return iter(self._nodes)

    def __contains__(self, node: object) -> bool:
        return isinstance(node, ThoughtNode) and node._tree is self
