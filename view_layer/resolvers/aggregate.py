"""Priority-ordered chain of template resolvers."""

from collections.abc import Iterator
from typing import Any

from view_layer.exceptions import InvalidArgumentException, ViewException
from view_layer.logging_config import get_logger, log_with_context
from view_layer.protocols import ResolverProtocol
from view_layer.resolvers.base import LookupFailure

logger = get_logger(__name__)


class AggregateResolver:
    """Try attached resolvers in priority order until one resolves the name.

    Higher priorities are tried first; resolvers sharing a priority are tried
    in the order they were attached. After every lookup
    ``last_successful_resolver`` names the resolver that answered (or None)
    and ``last_lookup_failure`` says why nothing did.
    """

    def __init__(self) -> None:
        self._entries: list[tuple[ResolverProtocol, int]] = []
        self._ordered: list[ResolverProtocol] | None = None
        self.last_successful_resolver: ResolverProtocol | None = None
        self.last_lookup_failure = LookupFailure.NONE

    def attach(self, resolver: ResolverProtocol, priority: int = 1) -> "AggregateResolver":
        """Attach a resolver.

        Args:
            resolver: Object with a ``resolve(name)`` method
            priority: Higher runs earlier

        Returns:
            This aggregate, for chaining

        Raises:
            InvalidArgumentException: If ``resolver`` has no callable ``resolve``
        """
        if not isinstance(resolver, ResolverProtocol):
            raise InvalidArgumentException(
                f"Resolver must implement resolve(name); received {type(resolver).__name__}"
            )
        self._entries.append((resolver, int(priority)))
        self._ordered = None
        return self

    def _lookup_order(self) -> list[ResolverProtocol]:
        if self._ordered is None:
            # sorted() is stable, so equal priorities keep attach order
            self._ordered = [resolver for resolver, _ in sorted(self._entries, key=lambda entry: -entry[1])]
        return self._ordered

    def resolve(self, name: str) -> Any:
        """Resolve ``name`` with the first resolver that returns a truthy source.

        Returns:
            The template source, or None when no resolver matched
        """
        self.last_successful_resolver = None
        self.last_lookup_failure = LookupFailure.NONE

        if not self._entries:
            self.last_lookup_failure = LookupFailure.NO_RESOLVERS
            return None

        rejected = False
        for resolver in self._lookup_order():
            try:
                resource = resolver.resolve(name)
            except ViewException as e:
                rejected = True
                log_with_context(
                    logger,
                    "warning",
                    "Resolver rejected template name",
                    template=name,
                    resolver=type(resolver).__name__,
                    error=e.message,
                    event_type="resolver_rejected",
                )
                continue
            if not resource:
                continue
            self.last_successful_resolver = resolver
            return resource

        self.last_lookup_failure = LookupFailure.INVALID_RESOLVER if rejected else LookupFailure.NOT_FOUND
        log_with_context(
            logger,
            "debug",
            "No resolver matched template",
            template=name,
            resolvers=len(self._entries),
            failure=self.last_lookup_failure.value,
            event_type="resolver_miss",
        )
        return None

    def count(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ResolverProtocol]:
        return iter(self._lookup_order())
