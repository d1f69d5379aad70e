#!/usr/bin/env python3
"""
Thoughtscan Configuration Management
Handles .thoughtscan.yml configuration files

Every setting has a default matching the built-in behaviour, so the
analysis runs the same with or without a configuration file.
"""

import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field
from rich import print as rprint
from rich.markup import escape

from thoughtscan.core.tree import Severity


DEFAULT_BRANCH_SEVERITY = {
    'CODE_EXECUTION_RISKS': 'HIGH',
    'STATE_MANAGEMENT_RISKS': 'MEDIUM',
    'ASYNC_CONCURRENCY_RISKS': 'HIGH',
    'DATA_FLOW_RISKS': 'HIGH',
}


def _value(section: Dict[str, Any], key: str, default: Any) -> Any:
    """Look up key, treating a missing or null value as the default"""
    value = section.get(key)
    return default if value is None else value


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = _value(data, key, {})
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' must be a mapping, got {type(section).__name__}")
    return section


def _string_list(section: Dict[str, Any], key: str, default: List[str]) -> List[str]:
    value = _value(section, key, default)
    if isinstance(value, str) or not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list, got {type(value).__name__}")
    return [str(item) for item in value]


@dataclass
class ThoughtscanConfig:
    """Thoughtscan configuration structure"""

    # Version
    version: str = "1.0.0"

    # Directories scanned, relative to the project root
    scan_roots: List[str] = field(default_factory=lambda: ['src', 'assets/js', 'scripts'])
    extensions: List[str] = field(default_factory=lambda: ['.js', '.jsx', '.ts', '.tsx'])
    skip_dirs: List[str] = field(default_factory=lambda: ['node_modules'])

    # Hard scan bounds
    max_depth: int = 10
    max_files: int = 100

    # Critical path detection
    confidence_floor: float = 0.8

    # Lines within which two .publish( calls count as a cascade
    cascade_window: int = 10

    # Severity assigned to each top-level branch node
    branch_severity: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_BRANCH_SEVERITY))

    # Analyzer class names to skip, e.g. ['DataFlowAnalyzer']
    analyzers_disabled: List[str] = field(default_factory=list)

    def get_branch_severity(self, branch_name: str) -> Severity:
        return Severity.parse(self.branch_severity.get(branch_name, DEFAULT_BRANCH_SEVERITY[branch_name]))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ThoughtscanConfig':
        """
        Create config from dictionary

        Raises:
            ValueError: on values that cannot be coerced (bad numbers,
                unknown severity labels, sections that are not mappings,
                lists given as a single string)
        """
        config = cls()

        if data.get('version') is not None:
            config.version = str(data['version'])

        scan = _section(data, 'scan')
        config.scan_roots = _string_list(scan, 'roots', config.scan_roots)
        config.extensions = _string_list(scan, 'extensions', config.extensions)
        config.skip_dirs = _string_list(scan, 'skip_dirs', config.skip_dirs)

        try:
            config.max_depth = max(0, int(_value(scan, 'max_depth', config.max_depth)))
            config.max_files = max(1, int(_value(scan, 'max_files', config.max_files)))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid scan bound: {e}") from e

        analysis = _section(data, 'analysis')
        try:
            floor = float(_value(analysis, 'confidence_floor', config.confidence_floor))
            config.cascade_window = max(0, int(_value(analysis, 'cascade_window', config.cascade_window)))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid analysis setting: {e}") from e
        config.confidence_floor = min(max(floor, 0.0), 1.0)

        # Merge branch overrides over the defaults, validating labels
        branch_severity = dict(DEFAULT_BRANCH_SEVERITY)
        for branch_name, label in _section(analysis, 'branch_severity').items():
            if branch_name not in DEFAULT_BRANCH_SEVERITY:
                raise ValueError(f"Unknown branch: {branch_name}")
            branch_severity[branch_name] = Severity.parse(label).value
        config.branch_severity = branch_severity

        analyzers = _section(data, 'analyzers')
        config.analyzers_disabled = _string_list(analyzers, 'disabled', [])

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for YAML export"""
        return {
            'version': self.version,
            'scan': {
                'roots': self.scan_roots,
                'extensions': self.extensions,
                'skip_dirs': self.skip_dirs,
                'max_depth': self.max_depth,
                'max_files': self.max_files,
            },
            'analysis': {
                'confidence_floor': self.confidence_floor,
                'cascade_window': self.cascade_window,
                'branch_severity': dict(self.branch_severity),
            },
            'analyzers': {
                'disabled': self.analyzers_disabled,
            },
        }


class ConfigManager:
    """Manage Thoughtscan configuration files"""

    DEFAULT_CONFIG_NAME = ".thoughtscan.yml"

    @staticmethod
    def find_config(start_path: Path = None) -> Optional[Path]:
        """
        Find .thoughtscan.yml by walking up directory tree

        Args:
            start_path: Starting directory (default: current directory)

        Returns:
            Path to .thoughtscan.yml or None if not found
        """
        current = (start_path or Path.cwd()).absolute()

        while True:
            config_file = current / ConfigManager.DEFAULT_CONFIG_NAME
            if config_file.exists():
                return config_file
            if current == current.parent:
                return None
            current = current.parent

    @staticmethod
    def load_config(config_path: Path = None, start_path: Path = None) -> ThoughtscanConfig:
        """
        Load configuration from .thoughtscan.yml

        Args:
            config_path: Path to config file (default: search from start_path)
            start_path: Directory to start the search from (default: cwd)

        Returns:
            ThoughtscanConfig object (defaults when missing or malformed)
        """
        if config_path is None:
            config_path = ConfigManager.find_config(start_path)

        if config_path is None or not config_path.exists():
            return ThoughtscanConfig()

        try:
            with open(config_path, 'r') as f:
                data = yaml.safe_load(f)

            if data is None:
                return ThoughtscanConfig()
            if not isinstance(data, dict):
                raise ValueError("top-level YAML value must be a mapping")

            return ThoughtscanConfig.from_dict(data)

        except Exception as e:
            rprint(f"[yellow]Warning: Failed to load config from {escape(str(config_path))}: {escape(str(e))}[/yellow]")
            return ThoughtscanConfig()

    @staticmethod
    def save_config(config: ThoughtscanConfig, config_path: Path) -> bool:
        """
        Save configuration to .thoughtscan.yml

        Returns:
            True if successful
        """
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)

            with open(config_path, 'w') as f:
                yaml.dump(
                    config.to_dict(),
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    indent=2
                )

            return True

        except OSError as e:
            rprint(f"[red]Error: Failed to save config to {config_path}: {e}[/red]")
            return False

    @staticmethod
    def create_default_config(project_root: Path) -> Path:
        """Create default .thoughtscan.yml in project root"""
        config = ThoughtscanConfig()
        config_path = project_root / ConfigManager.DEFAULT_CONFIG_NAME

        ConfigManager.save_config(config, config_path)

        return config_path
