#!/usr/bin/env python3
"""
Thoughtscan Tree-of-Thought Engine
Orchestrates scan -> context extraction -> analyzers -> critical paths

Execution is sequential on purpose: files are analysed in scan order so
the reasoning tree and the reported paths are deterministic.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from thoughtscan.analyzers import AnalyzerRegistry, Branch, create_default_registry
from thoughtscan.config import ConfigManager, ThoughtscanConfig
from thoughtscan.core.context import CodeContextExtractor
from thoughtscan.core.critical_path import CriticalPathDetector
from thoughtscan.core.scanner import DirectoryScanner, SuppressedError
from thoughtscan.core.tree import ReasoningTree, Severity, ThoughtNode


ROOT_TYPE = 'SECURITY_ANALYSIS_ROOT'

BRANCH_DESCRIPTIONS = {
    Branch.CODE_EXECUTION_RISKS: 'Analysis of dynamic code execution and injection vectors',
    Branch.STATE_MANAGEMENT_RISKS: 'Analysis of state mutation and data flow security',
    Branch.ASYNC_CONCURRENCY_RISKS: 'Analysis of race conditions and async security vectors',
    Branch.DATA_FLOW_RISKS: 'Analysis of data exposure and leakage vectors',
}


@dataclass
class TreeBranches:
    """The root node and its four fixed branches"""
    root: ThoughtNode
    code_execution: ThoughtNode
    state_management: ThoughtNode
    async_concurrency: ThoughtNode
    data_flow: ThoughtNode

    def get(self, branch: Branch) -> ThoughtNode:
        return {
            Branch.CODE_EXECUTION_RISKS: self.code_execution,
            Branch.STATE_MANAGEMENT_RISKS: self.state_management,
            Branch.ASYNC_CONCURRENCY_RISKS: self.async_concurrency,
            Branch.DATA_FLOW_RISKS: self.data_flow,
        }[branch]

    def all(self) -> List[ThoughtNode]:
        return [self.code_execution, self.state_management, self.async_concurrency, self.data_flow]


@dataclass
class FileAnalysis:
    """Result from analysing a single file"""
    file_path: str
    findings: List[ThoughtNode] = field(default_factory=list)
    success: bool = True
    error_message: Optional[str] = None


@dataclass
class AnalysisResult:
    """Outcome of one engine run"""
    tree: ReasoningTree
    branches: TreeBranches
    critical_paths: List[List[ThoughtNode]]
    total_issues: int
    files_analyzed: int
    analysis_time_ms: int
    failed_files: List[FileAnalysis] = field(default_factory=list)
    suppressed_errors: List[SuppressedError] = field(default_factory=list)
    missing_roots: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.critical_paths

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1

    def to_dict(self) -> Dict:
        return {
            'success': self.success,
            'critical_paths': len(self.critical_paths),
            'total_issues': self.total_issues,
            'files_analyzed': self.files_analyzed,
            'analysis_time_ms': self.analysis_time_ms,
            'failed_files': [f.file_path for f in self.failed_files],
            'suppressed_errors': [e.to_dict() for e in self.suppressed_errors],
            'missing_roots': list(self.missing_roots),
        }


class TreeOfThoughtEngine:
    """Build and populate one reasoning tree for a project"""

    def __init__(self,
                 config: ThoughtscanConfig = None,
                 project_root: Path = None,
                 registry: AnalyzerRegistry = None,
                 console: Console = None):
        self.project_root = Path(project_root or Path.cwd())
        self.config = config or ConfigManager.load_config(start_path=self.project_root)
        self.registry = registry or create_default_registry(self.config)
        self.console = console or Console()
        self.extractor = CodeContextExtractor()
        self.scanner = DirectoryScanner.from_config(self.config, self.project_root)
        self.detector = CriticalPathDetector(self.config.confidence_floor)

        for name in self.config.analyzers_disabled:
            if self.registry.get_analyzer(name) is None:
                self.console.print(f"[yellow]⚠️  Unknown analyzer in analyzers.disabled: {escape(name)}[/yellow]")

    def build_tree(self):
        """
        Create the root and its four fixed branches

        Returns:
            (ReasoningTree, TreeBranches)
        """
        root = ThoughtNode(
            ROOT_TYPE,
            'Comprehensive security vector analysis using tree-of-thought reasoning',
            Severity.INFO,
            None,
            1.0,
        )
        tree = ReasoningTree(root)

        nodes = {}
        for branch in Branch:
            nodes[branch] = root.add_child(ThoughtNode(
                branch.value,
                BRANCH_DESCRIPTIONS[branch],
                self.config.get_branch_severity(branch.value),
            ))

        branches = TreeBranches(
            root=root,
            code_execution=nodes[Branch.CODE_EXECUTION_RISKS],
            state_management=nodes[Branch.STATE_MANAGEMENT_RISKS],
            async_concurrency=nodes[Branch.ASYNC_CONCURRENCY_RISKS],
            data_flow=nodes[Branch.DATA_FLOW_RISKS],
        )
        return tree, branches

    def display_path(self, file_path: Path) -> str:
        """Path relative to the project root when possible (used in evidence)"""
        try:
            return str(Path(file_path).relative_to(self.project_root))
        except ValueError:
            return str(file_path)

    def analyze_file(self, file_path: Path, branches: TreeBranches) -> FileAnalysis:
        """
        Analyse one file inside a recoverable boundary

        An unreadable file counts as empty. Any exception raised while
        analysing is recorded on the result and the run continues.
        """
        display = self.display_path(file_path)
        content = self.scanner.read_source(file_path)
        if content is None:
            return FileAnalysis(file_path=display)

        findings: List[ThoughtNode] = []
        parent, attached = None, 0
        try:
            context = self.extractor.extract(content)
            for analyzer in self.registry.get_enabled(self.config.analyzers_disabled):
                parent, attached = None, 0
                parent = branches.get(analyzer.BRANCH)
                attached = len(parent.children)
                findings.extend(analyzer.analyze(display, content, context, branches))
        except Exception as e:
            # Nodes attached before the failure remain in the tree
            if parent is not None:
                findings.extend(parent.children[attached:])
            self.console.print(f"[yellow]⚠️  Skipped {escape(display)}: {type(e).__name__}: {escape(str(e))}[/yellow]")
            return FileAnalysis(file_path=display, findings=findings, success=False, error_message=str(e))

        return FileAnalysis(file_path=display, findings=findings)

    def run(self) -> AnalysisResult:
        """Scan, analyse every file, then detect critical paths"""
        start_time = time.time()
        tree, branches = self.build_tree()

        self.scanner = DirectoryScanner.from_config(self.config, self.project_root)
        files = self.scanner.scan()

        total_issues = 0
        failed_files = []
        for file_path in files:
            analysis = self.analyze_file(file_path, branches)
            total_issues += len(analysis.findings)
            if not analysis.success:
                failed_files.append(analysis)

        critical_paths = self.detector.detect(tree.root)
        analysis_time_ms = int((time.time() - start_time) * 1000)

        return AnalysisResult(
            tree=tree,
            branches=branches,
            critical_paths=critical_paths,
            total_issues=total_issues,
            files_analyzed=len(files),
            analysis_time_ms=analysis_time_ms,
            failed_files=failed_files,
            suppressed_errors=list(self.scanner.suppressed_errors),
            missing_roots=list(self.scanner.missing_roots),
        )
