"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Fatal errors of the pruning pipeline. Every one of them aborts the run before
(or instead of) touching the classdump.
"""


class PruningError(RuntimeError):
    """Base class for all fatal pipeline errors."""


class ConfigurationError(PruningError):
    """A configured path is unusable, or the exclusion root cannot be created."""


class ConsistencyError(PruningError):
    """A class found in the local build cannot be read back through the classpath."""

    def __init__(self, binary_name: str, detail: str = ""):
        self.binary_name = binary_name
        message = f"Cannot read class bytes for {binary_name} through the configured classpath"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class EmptyReferenceSetError(PruningError):
    """The local build produced no classes to keep."""

    def __init__(self, message: str = "Could not find any classes to keep. Have you run a build?"):
        super().__init__(message)


class BuildStepError(RuntimeError):
    """Single wrapped failure reported to the invoking build tool."""
