# static_queue/apps/demo_cli.py
"""Walk-through of the ring queue API on a small queue of records.

Fills the queue, overflows it by one element and prints its content after
each step. With contains enabled it also checks membership of the last
record pushed.
"""
import argparse
import math
import sys
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv
from loguru import logger

from static_queue.core.config import ConfigError, LoggingSettings, QueueSettings, Settings, load_settings, make_queue
from static_queue.core.logging_setup import setup_logging
from static_queue.core.ring_queue import ContainsRingQueue, PushResult, RingQueue, drain_copy

DEFAULT_CAPACITY = 5


@dataclass(eq=False)
class Record:
    id: int
    value: float
    completed: bool

    def __eq__(self, other):
        if not isinstance(other, Record):
            return NotImplemented
        return (
            self.id == other.id
            and math.fabs(self.value - other.value) < 1e-5
            and self.completed == other.completed
        )


def show_queue_content(queue: RingQueue) -> None:
    """Print the stored records oldest-first. Prints nothing for an empty queue."""
    if queue.empty():
        return
    print("Queue Content:")
    for i, rec in enumerate(drain_copy(queue)):
        completed = "true" if rec.completed else "false"
        print(f"  Element {i}: {{ {rec.id}, {rec.value:f}, {completed}}}")


def _resolve_settings(args: argparse.Namespace) -> Settings:
    if args.config:
        settings = load_settings(args.config)
    else:
        settings = Settings(queue=QueueSettings(capacity=DEFAULT_CAPACITY))

    updates = {}
    if args.capacity is not None:
        updates["capacity"] = args.capacity
    if args.contains:
        updates["enable_contains"] = True
    if settings.queue.dtype is not None:
        logger.warning(f"Ignoring dtype '{settings.queue.dtype}': the demo stores Record objects")
        updates["dtype"] = None
    if args.log_level is not None:
        try:
            log_settings = LoggingSettings.model_validate({**settings.logging.model_dump(), "level": args.log_level})
        except ValueError as e:
            raise ConfigError(f"Invalid command line override: {e}") from e
        settings = settings.model_copy(update={"logging": log_settings})
    if updates:
        # re-validate so a bad --capacity is reported like a bad file value
        try:
            queue = QueueSettings.model_validate({**settings.queue.model_dump(), **updates})
        except ValueError as e:
            raise ConfigError(f"Invalid command line override: {e}") from e
        settings = settings.model_copy(update={"queue": queue})
    return settings


def run_demo(settings: Settings) -> None:
    queue = make_queue(settings)
    logger.info(f"Running demo on {queue!r}")

    print("\nExample start\n")

    if queue.empty():
        print("At the beginning, the queue is empty")
    print()

    print("Adding one element to the queue...")
    if queue.push(Record(0, 0.0, False)) is PushResult.EVICTED:
        print("It's always good to check if the queue overflows")
    print("Element 0 added to the queue")
    print()

    if not queue.empty():
        print("Of course, now the queue is not empty")
    print()

    to_add = queue.capacity - 1
    print(f"Adding {to_add} elements to the queue...")
    for i in range(1, to_add + 1):
        if queue.push(Record(i, float(i), True)) is PushResult.EVICTED:
            print("Queue overflows")
        print(f"Element {i} added to the Queue")
    print()

    show_queue_content(queue)
    print()

    last_id = queue.capacity
    last = Record(last_id, float(last_id), True)
    print("Checking adding another element makes the queue to overflow...")
    if queue.push(last) is PushResult.EVICTED:
        print("Queue push overflows (expected, due it is full)")
        print(f"  Element {last_id} added to the Queue, element 0 must be lost")
    print()

    show_queue_content(queue)
    print()

    if isinstance(queue, ContainsRingQueue):
        print(f"Checking if the queue contains the element {last_id}...")
        if queue.contains(last):
            print(f"Element {last_id} is in in the queue")
        else:
            print(f"Element {last_id} is not in the queue")
        print()

    print("Example end\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="static-queue usage example")
    parser.add_argument("--config", default=None, help="Path to a settings YAML file.")
    parser.add_argument("--capacity", type=int, default=None, help="Queue capacity (overrides the config file).")
    parser.add_argument("--contains", action="store_true", help="Enable the contains() check.")
    parser.add_argument("--log-level", default=None, help="Log level (overrides the config file).")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    load_dotenv()
    try:
        settings = _resolve_settings(args)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    setup_logging(settings.logging)
    run_demo(settings)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
