"""Domain layer: entities and value objects. No dependencies on outer layers."""

from contactdash.domain.entities import Contact, ServerTime

__all__ = ["Contact", "ServerTime"]
