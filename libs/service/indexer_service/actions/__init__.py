"""Actions module encapsulating the service lifecycle verbs."""

from indexer_service.actions.service_actions import ServiceActions

__all__ = [
    "ServiceActions",
]
