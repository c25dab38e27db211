"""Tree-sitter queries for TypeScript module references.

Extracts:
    - Import declarations (ES6 imports, including type-only and side-effect imports)
    - Re-exports (``export { X } from``, ``export * from``)
"""

# Query for statements that name another module
MODULE_REFERENCE_QUERY = """
(import_statement
    source: (string) @import.source
) @import

(export_statement
    source: (string) @export.source
) @export
"""
