"""Program descriptions of simulated processes and their execution state."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Iterator, TextIO

_NAME_WIDTH = 10
_OP_WIDTH = 9
_INT = re.compile(r"[+-]?\d+")


class Op(IntEnum):
    """Primitive operations of a program."""

    HALT = 0
    DOOP = 1
    LOOP = 2
    END = 3
    BLOCK = 4
    SEND = 5
    RECV = 6


_TIMED_OPS = (Op.LOOP, Op.DOOP, Op.BLOCK)
_MESSAGE_OPS = (Op.SEND, Op.RECV)


class LoadError(ValueError):
    """Raised when a program description cannot be read."""


@dataclass
class Instruction:
    """One primitive with its argument and, for SEND/RECV, its peer address."""

    op: Op
    arg: int = 0
    node: int = 0
    process: int = 0


def tokenize(stream: TextIO) -> Iterator[str]:
    """Yield whitespace-separated tokens from a text stream."""
    for line in stream:
        yield from line.split()


class _Tokens:
    """Token reader with scanf-like width limits and integer prefixes."""

    def __init__(self, tokens: Iterable[str]) -> None:
        self._it = iter(tokens)
        self._pending: str | None = None

    def _next(self) -> str | None:
        if self._pending is not None:
            tok, self._pending = self._pending, None
            return tok
        return next(self._it, None)

    def word(self, width: int) -> str | None:
        tok = self._next()
        if tok is not None and len(tok) > width:
            self._pending = tok[width:]
            tok = tok[:width]
        return tok

    def integer(self) -> int | None:
        tok = self._next()
        if tok is None:
            return None
        match = _INT.match(tok)
        if not match:
            return None
        if match.end() < len(tok):
            self._pending = tok[match.end():]
        return int(match.group())


def _split_address(address: int) -> tuple[int, int]:
    """Split an address into (node, process) with truncating division."""
    node = abs(address) // 100
    if address < 0:
        node = -node
    return node, address - node * 100


@dataclass
class Context:
    """A simulated process: its program and accumulated statistics."""

    name: str
    priority: int
    thread: int
    code: list[Instruction] = field(default_factory=list)
    ip: int = -1
    pid: int = 0
    duration: int = 0
    state: int = 0
    enqueue_time: int = 0
    doop_count: int = 0
    doop_time: int = 0
    block_count: int = 0
    block_time: int = 0
    wait_count: int = 0
    wait_time: int = 0
    finished: int = 0
    send_count: int = 0
    recv_count: int = 0
    stack: list[tuple[int, int]] = field(default_factory=list)

    @classmethod
    def load(cls, tokens: Iterable[str]) -> "Context":
        """Read one program description from an iterator of tokens."""
        reader = _Tokens(tokens)
        name = reader.word(_NAME_WIDTH)
        size = reader.integer() if name is not None else None
        priority = reader.integer() if size is not None else None
        thread = reader.integer() if priority is not None else None
        if name is None or size is None or priority is None or thread is None:
            raise LoadError("Bad input: Expecting program name, size, priority, and thread")

        code: list[Instruction] = []
        for line in range(1, size + 1):
            word = reader.word(_OP_WIDTH)
            if word is None:
                raise LoadError(f"Bad input: Expecting operation on line {line} in {name}")
            op = Op.__members__.get(word)
            if op is None:
                raise LoadError(f"Bad input: operation {line} unknown: {word}")
            instr = Instruction(op)
            if op in _MESSAGE_OPS or op in _TIMED_OPS:
                value = reader.integer()
                if value is None:
                    raise LoadError(
                        f"Bad input: Expecting argument to op on line {line} in {name}"
                    )
                if op in _MESSAGE_OPS:
                    instr.arg = 1
                    instr.node, instr.process = _split_address(value)
                else:
                    instr.arg = value
            code.append(instr)
        return cls(name=name, priority=priority, thread=thread, code=code)

    def next_op(self) -> bool:
        """Advance to the next DOOP, BLOCK, SEND, RECV or HALT.

        Returns True for a timed primitive and False on HALT.
        """
        while True:
            self.ip += 1
            if self.ip >= len(self.code):
                raise RuntimeError(f"error, no opcode at ip {self.ip}")
            instr = self.code[self.ip]
            op = instr.op
            if op is Op.LOOP:
                self.stack.append((self.ip, instr.arg))
            elif op is Op.DOOP:
                self.doop_count += 1
                self.doop_time += instr.arg
                return True
            elif op is Op.BLOCK:
                self.block_count += 1
                self.block_time += instr.arg
                return True
            elif op is Op.SEND:
                self.send_count += 1
                self.doop_time += instr.arg
                return True
            elif op is Op.RECV:
                self.recv_count += 1
                self.doop_time += instr.arg
                return True
            elif op is Op.END:
                if not self.stack:
                    raise RuntimeError(f"error, END without LOOP at ip {self.ip}")
                start, count = self.stack.pop()
                count -= 1
                if count != 0:
                    self.ip = start
                    self.stack.append((start, count))
            else:
                return False

    def current(self) -> Instruction:
        """The instruction currently being executed."""
        if self.ip < 0:
            raise RuntimeError("no current instruction before the first next_op")
        return self.code[self.ip]

    def cur_duration(self) -> int:
        """Clock ticks of the current primitive."""
        return self.current().arg

    def cur_op(self) -> Op:
        """The current primitive."""
        return self.current().op

    def stats(self) -> str:
        """One summary line of the process's statistics."""
        return "| %5.5d | Proc %2.2d.%2.2d | Run %d, Block %d, Wait %d, Sends %d, Recvs %d" % (
            self.finished,
            self.thread,
            self.pid,
            self.doop_time,
            self.block_time,
            self.wait_time,
            self.send_count,
            self.recv_count,
        )