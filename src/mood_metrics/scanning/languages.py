"""TypeScript file-type detection."""

from pathlib import Path
from typing import Union

_EXTENSION_TO_LANGUAGE = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

# Order matters: tried in turn when resolving an extension-less import
RESOLUTION_SUFFIXES = (".ts", ".tsx", ".d.ts", ".mts", ".cts")

# `import "./x.js"` refers to the TypeScript source x.ts
_JS_TO_TS = {
    ".js": (".ts", ".tsx", ".d.ts"),
    ".jsx": (".tsx",),
    ".mjs": (".mts",),
    ".cjs": (".cts",),
}


def detect_language(filepath: Union[str, Path]) -> str:
    """Detect language from file extension.

    Returns:
        "typescript", "tsx" or "unknown"
    """
    path = Path(filepath)
    return _EXTENSION_TO_LANGUAGE.get(path.suffix.lower(), "unknown")


def is_declaration_file(filepath: Union[str, Path]) -> bool:
    """True for ambient declaration files such as ``lib.d.ts`` or ``x.d.mts``."""
    name = Path(filepath).name.lower()
    return name.endswith((".d.ts", ".d.mts", ".d.cts"))


def import_candidates(target: Path) -> list[Path]:
    """Candidate files for a relative import specifier, most specific first."""
    suffix = target.suffix.lower()
    candidates: list[Path] = []

    if suffix in _EXTENSION_TO_LANGUAGE:
        candidates.append(target)
    elif suffix in _JS_TO_TS:
        stem = target.with_suffix("")
        candidates.extend(stem.with_name(stem.name + ts_suffix) for ts_suffix in _JS_TO_TS[suffix])

    candidates.extend(target.with_name(target.name + ts_suffix) for ts_suffix in RESOLUTION_SUFFIXES)
    candidates.extend(target / f"index{ts_suffix}" for ts_suffix in RESOLUTION_SUFFIXES)
    return candidates
