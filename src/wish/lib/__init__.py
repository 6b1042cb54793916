"""wish library modules.

Shared plumbing for the shell: configuration and diagnostics.
"""

__all__ = [
    "config_parser",
    "diagnostics",
]
