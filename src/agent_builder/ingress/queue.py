"""Queue ingress: creation events from NATS JetStream.

Workers join a durable queue group on the creation subject, so each message
is handled by one worker in the group. Delivery is at-least-once and every
message is attempted exactly once here:

- body is not a valid event -> logged, acknowledged (dropped)
- pipeline raises            -> logged, acknowledged (dropped)
- pipeline succeeds          -> acknowledged
- run interrupted            -> left unacknowledged, redelivered after restart

While a build runs the message is marked in progress every half ack-wait,
so a slow build is never redelivered to the group mid-run. Messages are
processed strictly one after another.
"""

import asyncio
from typing import Any, Awaitable, Callable

import nats
from loguru import logger
from nats.js import JetStreamContext
from nats.js.api import ConsumerConfig
from nats.js.errors import NotFoundError
from pydantic import ValidationError

from agent_builder.ingress.base import Dispatch, Ingress
from agent_builder.models.events import AgentCreationEvent
from agent_builder.settings import Settings, settings as default_settings


async def ensure_stream(js: JetStreamContext, stream: str, subject: str) -> None:
    """Create the JetStream stream backing the subject if it does not exist."""
    try:
        await js.stream_info(stream)
    except NotFoundError:
        logger.info(f"Creating JetStream stream {stream} for {subject}")
        await js.add_stream(name=stream, subjects=[subject])


class QueueIngress(Ingress):
    """Long-running consumer of creation events."""

    def __init__(
        self,
        settings: Settings | None = None,
        connect: Callable[..., Awaitable[Any]] = nats.connect,
    ):
        """Initialize queue ingress.

        Args:
            settings: Settings instance (broker URL, subject, queue group)
            connect: NATS connect coroutine (swapped out in tests)
        """
        self.settings = settings or default_settings
        self._connect = connect

    @property
    def name(self) -> str:
        return "queue"

    async def _keep_in_progress(self, msg: Any) -> None:
        interval = self.settings.nats_ack_wait / 2
        while True:
            await asyncio.sleep(interval)
            await msg.in_progress()

    async def handle_message(self, msg: Any, dispatch: Dispatch) -> bool:
        """Decode and dispatch one message, then acknowledge it.

        The message is acknowledged once the event is processed or dropped.
        A run cut short by cancellation or process exit is not acknowledged.

        Args:
            msg: JetStream message (``data`` bytes, ``ack()`` and ``in_progress()`` coroutines)
            dispatch: Pipeline entry point

        Returns:
            True if the event was processed, False if it was dropped
        """
        try:
            event = AgentCreationEvent.from_message(msg.data)
        except ValidationError as e:
            logger.error(f"Dropping malformed agent creation message: {e}")
            await msg.ack()
            return False

        heartbeat = asyncio.create_task(self._keep_in_progress(msg))
        try:
            await dispatch(event)
        except Exception as e:
            logger.error(f"Error processing agent creation event {event.agent_id}: {e}")
            await msg.ack()
            return False
        finally:
            heartbeat.cancel()

        await msg.ack()
        return True

    def consumer_config(self) -> ConsumerConfig:
        """Consumer settings for the durable queue group."""
        return ConsumerConfig(ack_wait=self.settings.nats_ack_wait)

    async def run(self, dispatch: Dispatch) -> int:
        """Consume messages until the process is stopped."""
        nc = await self._connect(self.settings.nats_url, name=self.settings.client_name)
        try:
            js = nc.jetstream()
            await ensure_stream(js, self.settings.nats_stream, self.settings.nats_subject)

            subscription = await js.subscribe(
                self.settings.nats_subject,
                queue=self.settings.nats_queue_group,
                durable=self.settings.nats_queue_group,
                config=self.consumer_config(),
                manual_ack=True,
            )
            logger.info(
                f"Agent Builder Service started on {self.settings.nats_url}, "
                f"waiting for events on {self.settings.nats_subject}..."
            )

            async for msg in subscription.messages:
                await self.handle_message(msg, dispatch)
        finally:
            await nc.close()
        return 0


async def publish_event(event: AgentCreationEvent, settings: Settings | None = None) -> int:
    """Publish a creation event to the creation subject.

    Returns:
        Stream sequence number of the published message
    """
    settings = settings or default_settings
    nc = await nats.connect(settings.nats_url, name=settings.client_name)
    try:
        js = nc.jetstream()
        await ensure_stream(js, settings.nats_stream, settings.nats_subject)
        ack = await js.publish(
            settings.nats_subject, event.model_dump_json(by_alias=True).encode("utf-8")
        )
        logger.info(f"Published agent creation for {event.agent_id} to {settings.nats_subject}")
        return ack.seq
    finally:
        await nc.close()
