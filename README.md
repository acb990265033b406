# prosim

A discrete-time simulator of processes scheduled on several nodes. Each node
runs its own scheduler in a separate thread; the nodes keep their clocks in
step through a barrier and exchange synchronous messages through a shared
message-passing facility.

## Installing

```
pip install .
```

## Running

`prosim` reads a simulation description from standard input and writes a
trace of state changes followed by a per-process summary to standard output:

```
prosim < workload.txt
```

The command takes no options besides `-h`/`--help`. If the input cannot be
read, an error message is written to standard error and the exit status is 1.

## Input format

The input is a sequence of whitespace-separated tokens. It starts with three
integers: the number of processes, the CPU quantum, and the number of nodes
(threads). Each process description follows:

```
<name> <size> <priority> <node>
<op> [arg]
...
```

`size` is the number of operations. A negative `priority` selects
shortest-job-first scheduling for that process (the remaining ticks of its
current operation are its priority); otherwise lower values run first. `node`
is a node id from 1 to the number of nodes. Processes on each node are given
ids 1, 2, … in the order they appear.

Operations:

| Op      | Argument | Meaning                                          |
|---------|----------|--------------------------------------------------|
| `DOOP`  | ticks    | compute for the given number of ticks            |
| `BLOCK` | ticks    | block for the given number of ticks              |
| `LOOP`  | count    | repeat the body up to the matching `END`         |
| `END`   |          | end of a loop body                               |
| `SEND`  | address  | send to process `address % 100` on node `address // 100` |
| `RECV`  | address  | receive from process `address % 100` on node `address // 100` |
| `HALT`  |          | end of the program                               |

A `SEND` or `RECV` runs for one tick, after which the process is blocked until
the matching partner arrives; it then goes on to its next operation.

Example:

```
2 3 2
ping 3 1 1
SEND 201
DOOP 2
HALT
pong 3 1 2
RECV 101
DOOP 1
HALT
```

## Output

Each state change is printed as

```
[NN] TTTTT: process P <state>
```

where the state is one of `new`, `ready`, `running`, `blocked`, `finished`,
`blocked (send)` or `blocked (recv)`. Once every node has finished, one
summary line per process follows, in order of completion (ties broken by node
and then process id):

```
| TTTTT | Proc NN.PP | Run R, Block B, Wait W, Sends S, Recvs V
```

## Using it as a library

```python
import io
from prosim.main import run

out = io.StringIO()
procs = run(io.StringIO(description), out)
print(out.getvalue())
```

`run` returns the loaded processes with their final statistics and raises
`prosim.context.LoadError` on malformed input.

The building blocks are available as well:

- `prosim.context.Context` loads a program (`Context.load` over tokens from
  `prosim.context.tokenize`) and steps through it with `next_op`.
- `prosim.process.Simulation` holds the shared quantum, barrier, message
  facility and finished processes; `Simulation.new_processor` creates a
  `prosim.process.Processor`, whose `admit` and `simulate` run one node, and
  `Simulation.summary` writes the summary lines.
- `prosim.messaging.MessageFacility` pairs senders with receivers.
- `prosim.barrier.Barrier` keeps node clocks in step; `done` lets a finished
  node leave it.
- `prosim.prio_queue.PriorityQueue` is a stable priority queue (lower values
  first, ties in insertion order).