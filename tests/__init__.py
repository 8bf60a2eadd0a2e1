"""
Test Suite for the Tessellation Renderer

This package contains unit tests and integration tests for:
- Distance metrics and extremum selectors
- Per-cell classification and tie-breaking
- Tessellation buffer builds (scan and vectorized)
- The dirty-flag engine, CLI and image rendering

Run tests with: pytest -v
"""
