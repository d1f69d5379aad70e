#!/usr/bin/env python3
"""
Thoughtscan Directory Scanner
Bounded recursive walk that collects candidate JS/TS source files

Bounds:
- recursion depth (a root is depth 0)
- total files collected across all roots

Filesystem errors never abort the walk. They are recorded as
SuppressedError entries so the report can show how much was skipped.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence


@dataclass
class SuppressedError:
    """A filesystem error that was recovered from"""
    path: str
    operation: str  # 'scan' or 'read'
    message: str

    def to_dict(self):
        return {
            'path': self.path,
            'operation': self.operation,
            'message': self.message,
        }


class DirectoryScanner:
    """Collect source files under a fixed list of root directories"""

    def __init__(self,
                 project_root: Path = None,
                 roots: Sequence[str] = ('src', 'assets/js', 'scripts'),
                 extensions: Sequence[str] = ('.js', '.jsx', '.ts', '.tsx'),
                 skip_dirs: Sequence[str] = ('node_modules',),
                 max_depth: int = 10,
                 max_files: int = 100):
        self.project_root = Path(project_root or Path.cwd())
        self.roots = list(roots)
        self.extensions = tuple(extensions)
        self.skip_dirs = set(skip_dirs)
        self.max_depth = max_depth
        self.max_files = max_files

        self.suppressed_errors: List[SuppressedError] = []
        self.missing_roots: List[str] = []

    @classmethod
    def from_config(cls, config, project_root: Path = None) -> 'DirectoryScanner':
        return cls(
            project_root=project_root,
            roots=config.scan_roots,
            extensions=config.extensions,
            skip_dirs=config.skip_dirs,
            max_depth=config.max_depth,
            max_files=config.max_files,
        )

    def scan(self) -> List[Path]:
        """
        Walk every root in order and return matching files

        Returns:
            At most max_files paths, in root order then sorted
            directory order
        """
        files: List[Path] = []

        for root in self.roots:
            if len(files) >= self.max_files:
                break

            root_path = self.project_root / root
            if not root_path.is_dir():
                self.missing_roots.append(root)
                continue

            self._scan_directory(root_path, files, 0)

        return files

    def _scan_directory(self, directory: Path, files: List[Path], depth: int):
        if depth > self.max_depth or len(files) >= self.max_files:
            return

        try:
            entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
        except OSError as e:
            self._suppress(directory, 'scan', e)
            return

        for entry in entries:
            if len(files) >= self.max_files:
                break

            if entry.name in self.skip_dirs or entry.name.startswith('.'):
                continue

            try:
                is_dir = entry.is_dir()
            except OSError as e:
                self._suppress(Path(entry.path), 'scan', e)
                continue

            if is_dir:
                self._scan_directory(Path(entry.path), files, depth + 1)
            elif entry.name.endswith(self.extensions):
                files.append(Path(entry.path))

    def read_source(self, file_path: Path) -> Optional[str]:
        """
        Read a file as UTF-8, ignoring undecodable bytes

        Returns:
            File content, or None if the file could not be read
        """
        try:
            return Path(file_path).read_text(encoding='utf-8', errors='ignore')
        except OSError as e:
            self._suppress(Path(file_path), 'read', e)
            return None

    def _suppress(self, path: Path, operation: str, error: OSError):
        self.suppressed_errors.append(SuppressedError(
            path=str(path),
            operation=operation,
            message=error.strerror or str(error),
        ))
