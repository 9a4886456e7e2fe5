"""
EventManager - named-topic dispatch

Listeners attach handlers to topics; triggering a topic runs its handlers
synchronously, in attachment order, with one shared `Event`.

Usage:
    manager = EventManager()
    manager.attach("images.get", resource.get)
    manager.trigger("images.get", Event(manager=manager, request=request))
"""

from collections.abc import Callable

from aws_lambda_powertools import Logger

from core.events.event import Event

Handler = Callable[[Event], None]

logger = Logger(UTC=True)


class EventManager:
    """Registry of topic handlers for one request."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}
        self._triggering: dict[str, int] = {}

    def attach(self, topic: str, handler: Handler) -> "EventManager":
        """
        Append a handler to a topic.

        Returns:
            The manager itself, so calls can be chained

        Raises:
            RuntimeError: If the topic is being triggered right now
        """
        if topic in self._triggering:
            raise RuntimeError(f"Cannot attach to '{topic}' while it is being triggered")

        self._handlers.setdefault(topic, []).append(handler)
        logger.debug(
            "Handler attached",
            extra={"topic": topic, "handler": getattr(handler, "__qualname__", repr(handler))},
        )

        return self

    def has_listeners(self, topic: str) -> bool:
        return bool(self._handlers.get(topic))

    def trigger(self, topic: str, event: Event) -> Event:
        """
        Run every handler of a topic with the given event.

        Handler errors are not caught: the first failing handler stops the
        dispatch and its exception propagates to the caller. Triggering a
        topic without handlers does nothing.

        Returns:
            The event, after all handlers ran
        """
        handlers = self._handlers.get(topic)
        if not handlers:
            logger.debug("No handlers for topic", extra={"topic": topic})
            return event

        logger.debug("Triggering event", extra={"topic": topic, "handlers": len(handlers)})

        previous_name = event.name
        event.name = topic
        self._triggering[topic] = self._triggering.get(topic, 0) + 1

        try:
            for handler in handlers:
                handler(event)
        finally:
            self._triggering[topic] -= 1
            if not self._triggering[topic]:
                del self._triggering[topic]
            event.name = previous_name

        return event
