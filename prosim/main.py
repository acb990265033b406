"""Command-line entry: read a workload from standard input and simulate it."""

from __future__ import annotations

import argparse
import sys
import threading
from typing import TextIO

from .context import Context, LoadError, tokenize
from .process import Simulation

HEADER_ERROR = "Bad input, expecting # of processes, quantum, and # of threads"
LOAD_ERROR = "Bad input, could not load program description"


def _node_runner(sim: Simulation, node: int, procs: list[Context], errors: list) -> None:
    cpu = sim.new_processor()
    try:
        for proc in procs:
            if proc.thread == node:
                cpu.admit(proc)
    except Exception as exc:
        sim.barrier.done()
        errors.append(exc)
        return
    try:
        cpu.simulate()
    except Exception as exc:
        errors.append(exc)


def run(stream: TextIO, out: TextIO | None = None) -> list[Context]:
    """Simulate the workload read from ``stream``, writing trace and summary to ``out``."""
    out = out if out is not None else sys.stdout
    tokens = tokenize(stream)
    header = [next(tokens, None) for _ in range(3)]
    try:
        num_procs, quantum, num_threads = (int(tok) for tok in header)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise LoadError(HEADER_ERROR) from None

    sim = Simulation(quantum, num_threads, out)
    procs = [Context.load(tokens) for _ in range(num_procs)]

    errors: list[Exception] = []
    threads = [
        threading.Thread(target=_node_runner, args=(sim, node, procs, errors))
        for node in range(1, num_threads + 1)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    if errors:
        raise errors[0]

    sim.summary(out)
    return procs


def main(argv: list[str] | None = None) -> int:
    """Run the simulator on standard input."""
    parser = argparse.ArgumentParser(
        prog="prosim",
        description="Simulate process scheduling and message passing on several nodes; "
        "the workload is read from standard input.",
    )
    parser.parse_args(argv)
    try:
        run(sys.stdin, sys.stdout)
    except LoadError as exc:
        print(exc, file=sys.stderr)
        if str(exc) != HEADER_ERROR:
            print(LOAD_ERROR, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())