"""Token Registry Tools: validation for a file-based token and contract registry.

The package reads a registry tree (`contracts/`, `projects/`, `tokens/`),
checks every entry against its JSON schema and naming conventions, and
reports pass/fail. It never modifies the registry.
"""

__all__ = [
    "__version__",
]

__version__ = "0.2.0"
