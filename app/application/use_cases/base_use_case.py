"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

import logging
from abc import ABC
from typing import Callable, List
from datetime import datetime

from app.domain.models.base import AggregateRoot, DomainEvent, utc_now
from app.domain.repositories.unit_of_work import UnitOfWork


logger = logging.getLogger(__name__)


Clock = Callable[[], datetime]


class BaseUseCase(ABC):
    """
    Base class for all use cases.
    Use cases run against a unit of work and an injectable clock.
    """

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now):
        self.uow = uow
        self.clock = clock


class QueryUseCase(BaseUseCase):
    """
    Base class for query use cases (read operations).
    """
    pass


class CommandUseCase(BaseUseCase):
    """
    Base class for command use cases (write operations).
    Domain events are collected inside the transaction and published after
    it has committed.
    """

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now):
        super().__init__(uow, clock)
        self.events: List[DomainEvent] = []

    def _collect_events(self, *aggregates: AggregateRoot) -> None:
        for aggregate in aggregates:
            self.events.extend(aggregate.pull_events())

    def _publish_events(self) -> None:
        """Publish collected domain events."""
        for event in self.events:
            logger.info("Domain event %s: %s", event.event_name, event.to_dict()["data"])
        self.events.clear()
