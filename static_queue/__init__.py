"""Fixed-capacity ring buffer queue that evicts its oldest element when full."""

__version__ = "1.0.0"

from static_queue.core.ring_queue import ContainsRingQueue, PushResult, RingQueue, drain_copy

__all__ = ["RingQueue", "ContainsRingQueue", "PushResult", "drain_copy"]
