"""Base infrastructure for the request sanitization pipeline.

This module defines the core components of the pipeline:
- SanitizeStats: Aggregate change counters reported to the caller
- SanitizeContext: Immutable context passed through transformers
- RequestTransformer: Abstract base for all sanitization steps
- RequestPipeline: Orchestrator that executes transformers in sequence
"""

import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Any


@dataclasses.dataclass(frozen=True)
class SanitizeStats:
    """Aggregate change statistics for one sanitized request.

    Attributes:
        total_removed: Number of fields removed, rewritten or converted.
        flattened_messages: Number of messages whose array content was flattened.
        merged_system: Whether the top-level system field was relocated or dropped.
    """

    total_removed: int = 0
    flattened_messages: int = 0
    merged_system: bool = False

    def add(
        self, removed: int = 0, flattened: int = 0, merged_system: bool = False
    ) -> "SanitizeStats":
        return SanitizeStats(
            total_removed=self.total_removed + removed,
            flattened_messages=self.flattened_messages + flattened,
            merged_system=self.merged_system or merged_system,
        )

    @property
    def changed(self) -> bool:
        return bool(self.total_removed or self.flattened_messages or self.merged_system)


@dataclasses.dataclass(frozen=True)
class SanitizeContext:
    """Immutable context passed through the sanitization pipeline.

    The frozen=True ensures immutability - transformers must return new
    instances rather than mutating the context. Transformers also never mutate
    the nested containers of ``request`` in place; they build new dicts and
    lists for anything they change, so the previous context stays intact if a
    transformer fails midway.

    Attributes:
        request: The request document being sanitized.
        stats: Aggregate change statistics so far.
        metadata: Optional metadata for debugging and extensibility.
    """

    request: dict[str, Any]
    stats: SanitizeStats = dataclasses.field(default_factory=SanitizeStats)
    metadata: dict[str, Any] = dataclasses.field(default_factory=dict)

    def with_request(
        self,
        request: dict[str, Any],
        removed: int = 0,
        flattened: int = 0,
        merged_system: bool = False,
    ) -> "SanitizeContext":
        """Return a new context with ``request`` replaced and stats accumulated."""
        return dataclasses.replace(
            self,
            request=request,
            stats=self.stats.add(removed=removed, flattened=flattened, merged_system=merged_system),
        )


class RequestTransformer(ABC):
    """Base class for all request sanitization steps.

    Each transformer handles a single, focused transformation of the request.
    Transformers must be pure functions - they should not mutate the input
    context but rather return a new SanitizeContext with changes applied.
    """

    @abstractmethod
    def transform(self, context: SanitizeContext) -> SanitizeContext:
        """Transform the context and return a new instance.

        Args:
            context: The input context.

        Returns:
            A new SanitizeContext with transformations applied, or the input
            context itself when nothing needed to change.
        """
        pass

    @property
    def name(self) -> str:
        """Human-readable name for logging and debugging.

        Defaults to the class name. Override for custom names.
        """
        return self.__class__.__name__


class RequestPipeline:
    """Orchestrates the execution of transformers in sequence.

    Each transformer receives the output of the previous transformer as its
    input. A transformer that raises is logged and skipped: the pipeline
    carries on from the last good context, so a single faulty stage never
    turns a forwardable request into an error.
    """

    def __init__(self, transformers: list[RequestTransformer]) -> None:
        """Initialize the pipeline with a list of transformers.

        Args:
            transformers: Ordered list of transformers to execute.
        """
        self.transformers = transformers
        self.logger = logging.getLogger(f"{__name__}.RequestPipeline")

    def execute(self, initial_context: SanitizeContext) -> SanitizeContext:
        """Execute all transformers and return the final context.

        Args:
            initial_context: The starting context with the parsed request.

        Returns:
            The final context holding the sanitized request and its stats.
        """
        context = initial_context

        for i, transformer in enumerate(self.transformers):
            self.logger.debug(
                f"Running transformer [{i + 1}/{len(self.transformers)}]: {transformer.name}"
            )
            try:
                context = transformer.transform(context)
            except Exception as e:
                self.logger.error(
                    f"Transformer {transformer.name} failed, skipping: {e}",
                    exc_info=True,
                )

        self.logger.debug(f"Pipeline completed: {len(self.transformers)} transformers executed")
        return context
