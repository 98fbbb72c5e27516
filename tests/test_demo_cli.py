from static_queue.apps.demo_cli import main, run_demo
from static_queue.core.config import QueueSettings, Settings


def test_demo_default_run(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "At the beginning, the queue is empty" in out
    assert "Queue overflows" not in out
    assert "Queue push overflows (expected, due it is full)" in out
    assert "Element 5 added to the Queue, element 0 must be lost" in out
    # content after the overflow starts at record 1
    last_dump = out.rsplit("Queue Content:", 1)[1]
    assert "Element 0: { 1, 1.000000, true}" in last_dump
    assert "Element 4: { 5, 5.000000, true}" in last_dump
    assert "contains" not in out


def test_demo_with_contains(capsys):
    assert main(["--contains", "--capacity", "3"]) == 0
    out = capsys.readouterr().out
    assert "Adding 2 elements to the queue..." in out
    assert "Element 3 is in in the queue" in out


def test_demo_reads_config_file(tmp_path, capsys):
    cfg = tmp_path / "settings.yaml"
    cfg.write_text("queue:\n  capacity: 2\n  enable_contains: true\n  dtype: float64\n", encoding="utf-8")
    assert main(["--config", str(cfg)]) == 0
    out = capsys.readouterr().out
    assert "Element 2 is in in the queue" in out


def test_demo_bad_config_exits_with_one(tmp_path):
    assert main(["--config", str(tmp_path / "missing.yaml")]) == 1
    assert main(["--capacity", "0"]) == 1
    assert main(["--log-level", "LOUD"]) == 1


def test_run_demo_checks_membership_only_with_contains_queue(capsys):
    run_demo(Settings(queue=QueueSettings(capacity=2)))
    assert "Checking if the queue contains" not in capsys.readouterr().out
    run_demo(Settings(queue=QueueSettings(capacity=2, enable_contains=True)))
    assert "Element 2 is in in the queue" in capsys.readouterr().out
