from __future__ import annotations

"""
Expansion Error Hierarchy.

Every failure raised while flattening a crate derives from UnifyError.
Errors carry the file they concern and accumulate the chain of files that
were being expanded when they surfaced, so the interface layer can report
the deepest cause together with the path from the crate root.
"""

from typing import List, Optional


class UnifyError(Exception):
    """
    Base class for all expansion failures.

    Attributes:
        message: Human readable description of the cause.
        path: File the failure concerns, if known.
        chain: Files being expanded when the error surfaced, innermost first.
    """

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.chain: List[str] = []

    def add_context(self, path: str) -> "UnifyError":
        """Record that `path` was being expanded when the error propagated."""
        if not self.chain or self.chain[-1] != path:
            self.chain.append(path)
        return self

    def describe(self) -> str:
        """
        Render the cause followed by the expansion chain.

        Returns:
            str: Multi-line report, root file listed first.
        """
        lines = [self.message]
        if self.chain:
            lines.append("Expansion chain (root first):")
            for depth, path in enumerate(reversed(self.chain)):
                lines.append(f"{'  ' * (depth + 1)}-> {path}")
        return "\n".join(lines)


class ParseError(UnifyError):
    """Source text is not syntactically valid Rust."""

    def __init__(
            self,
            message: str,
            *,
            path: Optional[str] = None,
            line: Optional[int] = None,
            column: Optional[int] = None,
    ) -> None:
        super().__init__(message, path=path)
        self.line = line
        self.column = column


class PathError(UnifyError):
    """A file path lacks a parent directory or a usable stem."""


class MissingModuleError(UnifyError):
    """Neither naming convention resolves a declared module."""

    def __init__(self, module: str, directory: str, *, path: Optional[str] = None) -> None:
        super().__init__(
            f"Couldn't find module file for module `{module}` in directory `{directory}`",
            path=path,
        )
        self.module = module
        self.directory = directory


class SourceIOError(UnifyError):
    """A file exists but cannot be read or decoded."""


class CycleError(UnifyError):
    """A module resolves back to one of its ancestors or nesting is too deep."""

    def __init__(self, message: str, *, module: str, path: Optional[str] = None) -> None:
        super().__init__(message, path=path)
        self.module = module
