"""
Thoughtscan Pattern Analyzers
Four category analyzers that attach findings to the reasoning tree
"""

from thoughtscan.analyzers.base import (
    AnalyzerRegistry,
    BaseAnalyzer,
    Branch,
    Signature,
)
from thoughtscan.analyzers.code_execution_analyzer import CodeExecutionAnalyzer
from thoughtscan.analyzers.state_management_analyzer import StateManagementAnalyzer
from thoughtscan.analyzers.async_concurrency_analyzer import AsyncConcurrencyAnalyzer
from thoughtscan.analyzers.data_flow_analyzer import DataFlowAnalyzer


def create_default_registry(config=None) -> AnalyzerRegistry:
    """
    Registry with the built-in analyzers in reporting order:
    code execution, state management, async/concurrency, data flow.
    """
    registry = AnalyzerRegistry()
    registry.register(CodeExecutionAnalyzer(config))
    registry.register(StateManagementAnalyzer(config))
    registry.register(AsyncConcurrencyAnalyzer(config))
    registry.register(DataFlowAnalyzer(config))
    return registry


__all__ = [
    'AnalyzerRegistry',
    'BaseAnalyzer',
    'Branch',
    'Signature',
    'CodeExecutionAnalyzer',
    'StateManagementAnalyzer',
    'AsyncConcurrencyAnalyzer',
    'DataFlowAnalyzer',
    'create_default_registry',
]
