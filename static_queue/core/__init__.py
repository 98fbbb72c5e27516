"""Ring queue engine and its configuration."""

from .ring_queue import ContainsRingQueue, PushResult, RingQueue, SupportsEquality, drain_copy
from .config import ConfigError, QueueSettings, LoggingSettings, Settings, load_settings, make_queue
