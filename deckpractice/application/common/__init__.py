"""Application building blocks shared by every module."""

from .clock import Clock, utc_now
from .event_bus import EventBusProtocol, EventListener

__all__ = ["Clock", "EventBusProtocol", "EventListener", "utc_now"]
