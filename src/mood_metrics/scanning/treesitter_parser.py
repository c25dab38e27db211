"""Tree-sitter parser wrapper.

Provides one interface for parsing TypeScript and TSX sources.

Usage:
    parser = TreeSitterParser()
    tree = parser.parse(code_bytes, "typescript")
    captures = parser.query(tree, query_str, "typescript")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import tree_sitter as _tree_sitter_module
import tree_sitter_typescript

if TYPE_CHECKING:
    from tree_sitter import Node, Tree

    Capture = tuple[Node, str]

# Both grammars ship in tree-sitter-typescript
_language_factories: dict[str, Any] = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}


def get_supported_languages() -> list[str]:
    """Get list of languages with installed grammars."""
    return list(_language_factories.keys())


class TreeSitterParser:
    """Wrapper around tree-sitter for TypeScript parsing."""

    def __init__(self) -> None:
        self._parsers: dict[str, Any] = {}
        self._languages: dict[str, Any] = {}

        for lang_name, lang_fn in _language_factories.items():
            # tree-sitter >= 0.23 returns PyCapsule; wrap in Language()
            lang_obj = _tree_sitter_module.Language(lang_fn())
            self._parsers[lang_name] = _tree_sitter_module.Parser(lang_obj)
            self._languages[lang_name] = lang_obj

    def parse(self, code: bytes, language: str) -> Tree | None:
        """Parse code and return syntax tree.

        Args:
            code: Source code as bytes
            language: Language name ("typescript" or "tsx")

        Returns:
            Tree object, or None if the language is not supported
        """
        parser = self._parsers.get(language)
        if parser is None:
            return None
        result: Tree = parser.parse(code)
        return result

    def query(self, tree: Tree | None, query_str: str, language: str) -> list[Capture]:
        """Run a query on a syntax tree.

        Args:
            tree: Syntax tree from parse()
            query_str: S-expression query string
            language: Language name

        Returns:
            List of (node, capture_name) tuples in document order
        """
        if tree is None:
            return []

        lang = self._languages.get(language)
        if lang is None:
            return []

        query = _tree_sitter_module.Query(lang, query_str)
        # tree-sitter 0.25+: use QueryCursor for execution
        cursor = _tree_sitter_module.QueryCursor(query)
        matches = cursor.matches(tree.root_node)
        # Convert from [(pattern_id, {name: [nodes]})] to [(node, name)]
        result: list[Capture] = []
        for _pattern_id, captures_dict in matches:
            for capture_name, nodes in captures_dict.items():
                for node in nodes:
                    result.append((node, capture_name))
        result.sort(key=lambda capture: capture[0].start_byte)
        return result

    def is_language_supported(self, language: str) -> bool:
        """Check if a language is supported."""
        return language in self._parsers
