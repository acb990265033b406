"""Per-node scheduling of simulated processes, synchronised by a shared clock."""

from __future__ import annotations

import sys
import threading
from enum import IntEnum
from typing import TextIO

from .barrier import Barrier
from .context import Context, Op
from .messaging import MessageFacility
from .prio_queue import PriorityQueue

MAX_PROCS = 100
MAX_THREADS = 100


class State(IntEnum):
    """Life-cycle states of a simulated process."""

    NEW = 0
    READY = 1
    RUNNING = 2
    BLOCKED = 3
    FINISHED = 4
    BLOCKED_SEND = 5
    BLOCKED_RECV = 6

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    State.NEW: "new",
    State.READY: "ready",
    State.RUNNING: "running",
    State.BLOCKED: "blocked",
    State.FINISHED: "finished",
    State.BLOCKED_SEND: "blocked (send)",
    State.BLOCKED_RECV: "blocked (recv)",
}

_READY_OPS = (Op.DOOP, Op.SEND, Op.RECV)


def _actual_priority(proc: Context) -> int:
    """Scheduling priority: the current duration under SJF (negative priority)."""
    if proc.priority < 0:
        return proc.duration
    return proc.priority


class Simulation:
    """State shared by all nodes: quantum, clock barrier, messaging and results."""

    def __init__(self, quantum: int, num_threads: int, out: TextIO | None = None) -> None:
        self.quantum = quantum
        self.out = out if out is not None else sys.stdout
        self.finished = PriorityQueue()
        self.barrier = Barrier(num_threads)
        self.messages = MessageFacility()
        self._print_lock = threading.Lock()
        self._finish_lock = threading.Lock()

    def new_processor(self) -> "Processor":
        """Create a node attached to this simulation."""
        return Processor(self)

    def _report(self, cpu: "Processor", proc: Context) -> None:
        with self._print_lock:
            self.out.write(
                "[%2.2d] %5.5d: process %d %s\n"
                % (proc.thread, cpu.clock_time, proc.pid, State(proc.state).label)
            )

    def _finish(self, cpu: "Processor", proc: Context) -> None:
        proc.finished = cpu.clock_time
        order = cpu.clock_time * MAX_PROCS * MAX_THREADS + proc.thread * MAX_PROCS + proc.pid
        with self._finish_lock:
            self.finished.add(proc, order)

    def summary(self, fout: TextIO | None = None) -> None:
        """Write statistics of finished processes in order of completion."""
        fout = fout if fout is not None else self.out
        while self.finished:
            fout.write(self.finished.remove().stats() + "\n")


class Processor:
    """One simulated node with its own ready and blocked queues and clock."""

    def __init__(self, simulation: Simulation) -> None:
        self.simulation = simulation
        self.blocked = PriorityQueue()
        self.ready = PriorityQueue()
        self.clock_time = 0
        self.next_proc_id = 1

    def _insert(self, proc: Context, next_op: bool) -> None:
        if next_op:
            proc.next_op()
            proc.duration = proc.cur_duration()
        op = proc.cur_op()
        if op in _READY_OPS:
            proc.state = State.READY
            self.ready.add(proc, _actual_priority(proc))
            proc.wait_count += 1
            proc.enqueue_time = self.clock_time
        elif op == Op.BLOCK:
            proc.state = State.BLOCKED
            proc.duration += self.clock_time
            self.blocked.add(proc, proc.duration)
        else:
            proc.state = State.FINISHED
            self.simulation._finish(self, proc)
        self.simulation._report(self, proc)

    def admit(self, proc: Context) -> None:
        """Assign a process id and queue the process on this node."""
        proc.pid = self.next_proc_id
        self.next_proc_id += 1
        proc.state = State.NEW
        self.simulation._report(self, proc)
        self._insert(proc, True)

    @staticmethod
    def _preempts(cur: Context | None, proc: Context) -> bool:
        return (
            cur is not None
            and proc.state == State.READY
            and _actual_priority(cur) > _actual_priority(proc)
        )

    def simulate(self) -> None:
        """Run this node until it and the message facility have nothing left."""
        sim = self.simulation
        messages = sim.messages
        cur: Context | None = None
        quantum = 0
        try:
            while self.ready or self.blocked or cur is not None or messages.pending():
                preempt = False

                for proc in messages.take_completed():
                    proc.enqueue_time = self.clock_time
                    self._insert(proc, True)
                    preempt |= self._preempts(cur, proc)

                while self.blocked:
                    proc = self.blocked.peek()
                    if proc.duration > self.clock_time:
                        break
                    self.blocked.remove()
                    self._insert(proc, True)
                    preempt |= self._preempts(cur, proc)

                if cur is not None:
                    cur.duration -= 1
                    quantum -= 1
                    instr = cur.current()
                    if instr.op == Op.SEND:
                        cur.state = State.BLOCKED_SEND
                        sim._report(self, cur)
                        messages.send(cur, instr.node, instr.process)
                        cur = None
                    elif instr.op == Op.RECV:
                        cur.state = State.BLOCKED_RECV
                        sim._report(self, cur)
                        messages.recv(cur, instr.node, instr.process)
                        cur = None
                    elif cur.duration == 0 or quantum == 0 or preempt:
                        self._insert(cur, cur.duration == 0)
                        cur = None

                if cur is None and self.ready:
                    cur = self.ready.remove()
                    cur.wait_time += self.clock_time - cur.enqueue_time
                    quantum = sim.quantum
                    cur.state = State.RUNNING
                    sim._report(self, cur)

                sim.barrier.wait()
                self.clock_time += 1
        finally:
            sim.barrier.done()