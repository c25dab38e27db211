"""Tests for scanning/languages.py - file types and import candidates."""

from pathlib import Path

import pytest

from mood_metrics.scanning.languages import detect_language, import_candidates, is_declaration_file


class TestDetectLanguage:
    """Test detect_language()."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("a.ts", "typescript"),
            ("a.mts", "typescript"),
            ("a.cts", "typescript"),
            ("a.d.ts", "typescript"),
            ("View.tsx", "tsx"),
            ("A.TS", "typescript"),
            ("a.js", "unknown"),
            ("README.md", "unknown"),
            ("Makefile", "unknown"),
        ],
    )
    def test_extensions(self, name, expected):
        """Extensions map to a grammar, or unknown."""
        assert detect_language(name) == expected


class TestDeclarationFiles:
    """Test is_declaration_file()."""

    def test_declaration_files(self):
        """.d.ts and friends are declaration files."""
        assert is_declaration_file("lib.d.ts")
        assert is_declaration_file(Path("types/x.d.mts"))
        assert is_declaration_file("x.d.cts")

    def test_regular_sources(self):
        """Plain sources are not declaration files."""
        assert not is_declaration_file("model.ts")
        assert not is_declaration_file("d.ts")


class TestImportCandidates:
    """Test import_candidates()."""

    def test_extensionless_specifier(self):
        """Bare specifiers try suffixes, then index files."""
        candidates = import_candidates(Path("/p/src/models"))

        assert candidates[0] == Path("/p/src/models.ts")
        assert Path("/p/src/models.tsx") in candidates
        assert Path("/p/src/models/index.ts") in candidates
        assert candidates.index(Path("/p/src/models.ts")) < candidates.index(
            Path("/p/src/models/index.ts")
        )

    def test_js_specifier_maps_to_ts(self):
        """An import of x.js looks for x.ts first."""
        candidates = import_candidates(Path("/p/src/shape.js"))
        assert candidates[0] == Path("/p/src/shape.ts")

    def test_explicit_ts_specifier(self):
        """An explicit .ts path is tried as-is first."""
        candidates = import_candidates(Path("/p/src/shape.ts"))
        assert candidates[0] == Path("/p/src/shape.ts")

    def test_mjs_maps_to_mts(self):
        """.mjs maps to .mts."""
        assert import_candidates(Path("/p/a.mjs"))[0] == Path("/p/a.mts")
