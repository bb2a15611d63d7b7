"""
Core Package.

Contains the text-rewriting engine:
- Placeholder id generation
- Delimiter-aware call scanning
- Extraction registry and per-unit transform
- Bundle finalization and the build session tying them together
"""
