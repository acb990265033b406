"""Rendezvous message passing between simulated processes on different nodes."""

from __future__ import annotations

import threading

from .context import Context
from .prio_queue import PriorityQueue


class MessageFacility:
    """Matches blocked senders with blocked receivers.

    Processes that cannot be matched wait in the send or receive queue.
    Matched pairs move to the completed queue until a node takes them back.
    """

    def __init__(self) -> None:
        self.send_queue = PriorityQueue()
        self.recv_queue = PriorityQueue()
        self.completed = PriorityQueue()
        self._lock = threading.Lock()

    @staticmethod
    def _addressed(candidate: Context, node: int, pid: int, peer: Context) -> bool:
        """True if ``candidate`` is process node.pid and addresses ``peer``."""
        target = candidate.current()
        return (
            candidate.thread == node
            and candidate.pid == pid
            and target.node == peer.thread
            and target.process == peer.pid
        )

    def _rendezvous(
        self,
        proc: Context,
        node: int,
        pid: int,
        partners: PriorityQueue,
        waiting: PriorityQueue,
    ) -> Context | None:
        with self._lock:
            skipped: list[Context] = []
            match: Context | None = None
            while partners:
                candidate = partners.remove()
                if self._addressed(candidate, node, pid, proc):
                    match = candidate
                    break
                skipped.append(candidate)
            if match is None:
                waiting.add(proc, proc.pid)
            else:
                self.completed.add(proc, proc.pid)
                self.completed.add(match, match.pid)
            for candidate in skipped:
                partners.add(candidate, candidate.pid)
            return match

    def send(self, sender: Context, node_recv: int, proc_recv: int) -> Context | None:
        """Offer a message from ``sender`` to process node_recv.proc_recv.

        Returns the matched receiver, or None if the sender now waits.
        """
        return self._rendezvous(sender, node_recv, proc_recv, self.recv_queue, self.send_queue)

    def recv(self, receiver: Context, node_send: int, proc_send: int) -> Context | None:
        """Wait for a message from process node_send.proc_send.

        Returns the matched sender, or None if the receiver now waits.
        """
        return self._rendezvous(receiver, node_send, proc_send, self.send_queue, self.recv_queue)

    def pending(self) -> bool:
        """True while any process is waiting or awaiting pickup."""
        with self._lock:
            return bool(self.send_queue or self.recv_queue or self.completed)

    def take_completed(self) -> list[Context]:
        """Remove and return all processes whose exchange has completed."""
        with self._lock:
            done = []
            while self.completed:
                done.append(self.completed.remove())
            return done