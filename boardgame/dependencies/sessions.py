import logging

from boardgame.config import get_settings
from boardgame.services.game import SessionRegistry, TemplateRules

logger = logging.getLogger(__name__)

_session_registry: SessionRegistry | None = None


def get_session_registry() -> SessionRegistry:
    """Get the singleton session registry.

    Returns the existing registry if initialized, otherwise creates a new one.
    """
    global _session_registry
    if _session_registry is None:
        settings = get_settings()
        logger.info("Initializing session registry")
        _session_registry = SessionRegistry(
            rules=TemplateRules(turn_time_limit=settings.TURN_TIME_LIMIT),
            max_automatic_moves=settings.AUTOMATIC_MOVE_LIMIT,
        )
        logger.debug("Session registry initialized with ruleset: %s", _session_registry.rules.name)
    return _session_registry


def reset_session_registry() -> None:
    """Drop every running game."""
    global _session_registry
    if _session_registry is not None:
        logger.info("Dropping session registry with %d games", len(_session_registry))
        _session_registry = None
