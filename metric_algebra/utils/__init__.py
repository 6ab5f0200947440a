"""
Shared utility functions.

This subpackage includes:
- YAML configuration loading
- directory helpers
- lightweight logging helpers used by the runner scripts.
"""
