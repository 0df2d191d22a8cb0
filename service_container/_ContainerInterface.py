from abc import ABC, abstractmethod


class ContainerInterface(ABC):
    @abstractmethod
    def add(self, id, service, singleton=False):
        """Register a factory for the given id."""

    @abstractmethod
    def get(self, id):
        """Find and return the entry for the given id."""

    @abstractmethod
    def has(self, id) -> bool:
        """Return True if the container contains an entry for the given id."""
