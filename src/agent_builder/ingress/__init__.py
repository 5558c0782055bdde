"""Request ingress strategies."""

from .base import Dispatch, Ingress
from .interactive import InteractiveIngress
from .queue import QueueIngress, publish_event

__all__ = ["Dispatch", "Ingress", "InteractiveIngress", "QueueIngress", "publish_event"]
