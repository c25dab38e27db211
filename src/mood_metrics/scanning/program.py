"""Program loading: the set of TypeScript files reachable from an entry point.

Files are read and parsed up front; nothing is read from disk once a
``SourceProgram`` exists. Relative imports and re-exports are followed and
files are listed dependencies-first, the order a TypeScript program lists
them in. Vendored files (under ``node_modules`` by default) may be loaded to
resolve base classes but are never part of ``source_files()``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Optional

from ..config import AnalysisConfig
from ..exceptions import InvalidPathError, ParsingError
from .declarations import ModuleReference, module_reference
from .languages import detect_language, import_candidates, is_declaration_file
from .queries import MODULE_REFERENCE_QUERY
from .treesitter_parser import TreeSitterParser

if TYPE_CHECKING:
    from tree_sitter import Tree

logger = logging.getLogger(__name__)


@dataclass
class SourceFile:
    """One parsed source file."""

    path: str  # absolute, POSIX separators
    language: str
    code: bytes
    tree: Tree
    references: list[ModuleReference] = field(default_factory=list)
    vendored: bool = False

    # specifier -> resolved path (None when unresolvable)
    resolved: dict[str, Optional[str]] = field(default_factory=dict)

    @property
    def root_node(self):
        return self.tree.root_node


class SourceProgram:
    """All loaded files of one analysis run, in program order."""

    def __init__(self, files: list[SourceFile], roots: Optional[list[str]] = None) -> None:
        self._files = list(files)
        self._by_path = {f.path: f for f in self._files}
        self.roots = roots or []

    @classmethod
    def load(
        cls,
        entry: Path,
        config: Optional[AnalysisConfig] = None,
        parser: Optional[TreeSitterParser] = None,
    ) -> SourceProgram:
        """Load the program rooted at ``entry``.

        Args:
            entry: A TypeScript file, or a directory whose TypeScript files are
                all treated as roots
            config: Analysis configuration
            parser: Parser to reuse (one is created otherwise)

        Raises:
            InvalidPathError: If ``entry`` does not exist or is not TypeScript
            ParsingError: If a file cannot be read
        """
        loader = _ProgramLoader(config or AnalysisConfig(), parser or TreeSitterParser())
        roots = loader.discover_roots(Path(entry))
        files = loader.load(roots)
        return cls(files, roots=[_as_key(r) for r in roots])

    @property
    def all_files(self) -> list[SourceFile]:
        return list(self._files)

    def source_files(self) -> list[SourceFile]:
        """Files to analyze: every loaded file outside vendored directories."""
        return [f for f in self._files if not f.vendored]

    def get(self, path: str) -> Optional[SourceFile]:
        return self._by_path.get(path)

    def resolve_module(self, source: SourceFile, specifier: str) -> Optional[SourceFile]:
        """The loaded file a module specifier in ``source`` refers to."""
        target = source.resolved.get(specifier)
        return self._by_path.get(target) if target is not None else None

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[SourceFile]:
        return iter(self._files)


class _ProgramLoader:
    def __init__(self, config: AnalysisConfig, parser: TreeSitterParser) -> None:
        self.config = config
        self.parser = parser
        self._loaded: dict[Path, Optional[SourceFile]] = {}
        self._count = 0

    def discover_roots(self, entry: Path) -> list[Path]:
        if not entry.exists():
            raise InvalidPathError(entry, "path does not exist")

        if entry.is_file():
            if not self._is_source(entry):
                raise InvalidPathError(entry, "not a TypeScript source file")
            return [entry.resolve()]

        roots = sorted(
            p.resolve()
            for p in entry.rglob("*")
            if p.is_file() and self._is_source(p) and not self._is_vendored(p.relative_to(entry))
        )
        if not roots:
            logger.warning(f"No TypeScript files found under {entry}")
        return roots

    def load(self, roots: list[Path]) -> list[SourceFile]:
        """Depth-first load; a file is listed after everything it imports."""
        ordered: list[SourceFile] = []

        for root in roots:
            if root in self._loaded:
                continue
            stack = self._enter(root)
            while stack:
                current, pending = stack[-1]
                next_path = next(pending, None)
                if next_path is None:
                    stack.pop()
                    ordered.append(current)
                    continue
                if next_path not in self._loaded:
                    stack.extend(self._enter(next_path))

        logger.debug(f"Loaded {len(ordered)} files from {len(roots)} root(s)")
        return ordered

    def _enter(self, path: Path) -> list[tuple[SourceFile, Iterator[Path]]]:
        source = self._read(path)
        self._loaded[path] = source
        if source is None:
            return []
        return [(source, iter(self._dependencies(source, path)))]

    def _read(self, path: Path) -> Optional[SourceFile]:
        if self._count >= self.config.max_files:
            logger.warning(f"File limit ({self.config.max_files}) reached, skipping {path}")
            return None

        try:
            size = path.stat().st_size
            if size > self.config.max_file_size_bytes:
                logger.warning(f"Skipping {path}: {size} bytes exceeds size limit")
                return None
            code = path.read_bytes()
        except OSError as e:
            raise ParsingError(path, detect_language(path), f"Cannot read file: {e}")

        language = detect_language(path)
        tree = self.parser.parse(code, language)
        if tree is None:
            raise ParsingError(path, language, "no grammar available")
        if tree.root_node.has_error:
            logger.debug(f"Syntax errors in {path}; analyzing the recoverable tree")

        source = SourceFile(
            path=_as_key(path),
            language=language,
            code=code,
            tree=tree,
            vendored=self._is_vendored(path),
        )
        self._count += 1
        for statement, capture in self.parser.query(tree, MODULE_REFERENCE_QUERY, language):
            if capture not in ("import", "export"):
                continue
            reference = module_reference(statement)
            if reference is not None:
                source.references.append(reference)
        return source

    def _dependencies(self, source: SourceFile, path: Path) -> Iterator[Path]:
        for reference in source.references:
            target = self._resolve_specifier(path, reference.specifier)
            source.resolved[reference.specifier] = _as_key(target) if target is not None else None
            if target is None:
                continue
            if self.config.follow_imports:
                yield target

    def _resolve_specifier(self, importer: Path, specifier: str) -> Optional[Path]:
        # Package imports are never followed
        if not specifier.startswith((".", "/")):
            return None

        base = (importer.parent / specifier) if specifier.startswith(".") else Path(specifier)
        for candidate in import_candidates(base):
            if candidate.is_file() and self._is_source(candidate):
                return candidate.resolve()
        logger.debug(f"Unresolved import '{specifier}' in {importer}")
        return None

    def _is_source(self, path: Path) -> bool:
        if path.suffix.lower() not in self.config.extensions:
            return False
        if is_declaration_file(path) and not self.config.include_declaration_files:
            return False
        return detect_language(path) != "unknown"

    def _is_vendored(self, path: Path) -> bool:
        return any(part in self.config.vendor_dirs for part in path.parts)


def _as_key(path: Path) -> str:
    return path.resolve().as_posix()
