#!/usr/bin/env python3
"""
Thoughtscan Code Context Extractor
Lexical pre-pass that tags a JS/TS source file with coarse structural hints

This is regex extraction only - no parsing and no scope awareness. A
token inside a string literal or comment is still counted.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class CodeContext:
    """Structural hints extracted from a single file"""
    imports: List[str] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)
    functions: List[str] = field(default_factory=list)
    classes: List[str] = field(default_factory=list)
    hooks: List[str] = field(default_factory=list)
    event_listeners: List[str] = field(default_factory=list)
    async_operations: List[str] = field(default_factory=list)
    state_management: List[str] = field(default_factory=list)
    error_handling: List[str] = field(default_factory=list)

    @property
    def has_async_operations(self) -> bool:
        return bool(self.async_operations)

    @property
    def has_state_management(self) -> bool:
        return bool(self.state_management)

    @property
    def has_error_handling(self) -> bool:
        return bool(self.error_handling)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            'imports': list(self.imports),
            'exports': list(self.exports),
            'functions': list(self.functions),
            'classes': list(self.classes),
            'hooks': list(self.hooks),
            'event_listeners': list(self.event_listeners),
            'async_operations': list(self.async_operations),
            'state_management': list(self.state_management),
            'error_handling': list(self.error_handling),
        }


class CodeContextExtractor:
    """Extract imports, declarations and behavioural tokens from source text"""

    IMPORT_PATTERNS = [
        re.compile(r"""import\s+[^;]*?from\s+['"][^'"]*['"]"""),
        re.compile(r"""import\s+['"][^'"]+['"]"""),
        re.compile(r"""require\(\s*['"][^'"]+['"]\s*\)"""),
    ]

    EXPORT_PATTERN = re.compile(
        r'export\s+(?:default\s+)?(?:async\s+)?(?:function\*?|class|const|let|var|interface|type)\s+\w+'
    )

    FUNCTION_PATTERN = re.compile(
        r'(?:function\s+\w+|const\s+\w+\s*=\s*(?:async\s+)?(?:\([^)]*\)\s*=>|\w+\s*=>|function))'
    )

    CLASS_PATTERN = re.compile(r'\bclass\s+\w+')

    HOOK_PATTERN = re.compile(r'\buse[A-Z]\w*')

    EVENT_LISTENER_PATTERN = re.compile(
        r'(?:addEventListener|removeEventListener|\.on|\.subscribe|\.unsubscribe)\s*\('
    )

    ASYNC_PATTERN = re.compile(
        r'(?:async\s+function|await\s+|\.then\(|\.catch\(|Promise\.|setTimeout|setInterval)'
    )

    STATE_PATTERN = re.compile(
        r'(?:useState|useReducer|setState|this\.state|dispatch|store\.|global\.)'
    )

    ERROR_PATTERN = re.compile(
        r'(?:try\s*\{|catch\s*\(|throw\s+|Error\(|console\.error)'
    )

    def extract(self, content: str) -> CodeContext:
        """
        Build a CodeContext from raw file text.

        Args:
            content: File content (already read)

        Returns:
            CodeContext with matched tokens in source order
        """
        imports = []
        for pattern in self.IMPORT_PATTERNS:
            imports.extend(match.group(0).strip() for match in pattern.finditer(content))

        return CodeContext(
            imports=imports,
            exports=self.EXPORT_PATTERN.findall(content),
            functions=self.FUNCTION_PATTERN.findall(content),
            classes=self.CLASS_PATTERN.findall(content),
            hooks=self._unique(self.HOOK_PATTERN.findall(content)),
            event_listeners=self.EVENT_LISTENER_PATTERN.findall(content),
            async_operations=self.ASYNC_PATTERN.findall(content),
            state_management=self.STATE_PATTERN.findall(content),
            error_handling=self.ERROR_PATTERN.findall(content),
        )

    @staticmethod
    def _unique(values: List[str]) -> List[str]:
        return list(dict.fromkeys(values))


def extract_context(content: str) -> CodeContext:
    """Convenience wrapper around CodeContextExtractor"""
    return CodeContextExtractor().extract(content)
