# ============================================================================
# FILE: listenqueue/core/events.py
# Commands published to the socket servers over the Redis message bus
# ============================================================================
import json
from typing import Any, Dict
from listenqueue.config import settings
from listenqueue.core.cache import cache
import logging

logger = logging.getLogger(__name__)


def create_command(command: str, data: Dict[str, Any]) -> str:
    """Serialize a command the way subscribers on the bus expect it"""
    return json.dumps({"command": command, "data": data}, default=str)


def publish(command: str, data: Dict[str, Any]) -> bool:
    """Publish a command on the configured channel"""
    logger.debug(f"Publishing {command} on {settings.MESSAGE_CHANNEL}")
    return cache.publish(settings.MESSAGE_CHANNEL, create_command(command, data))
