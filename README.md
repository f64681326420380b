# labkit

labkit collects building blocks for two classic systems-programming exercises:

- **Allocator work.** A simulated heap that only grows, a reader for allocation trace files, and a checker that catches bad payload extents.
- **Network work.** Timing helpers, robust buffered I/O on file descriptors, socket helpers, an example CGI adder, and the starting point for a proxy.

It needs Python 3.10 or later and has no third-party dependencies. Some parts assume a POSIX system: the interval timers, and writes to descriptor 1.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Commands

### `labkit-adder`: example CGI program

`labkit-adder` reads `QUERY_STRING` in the form `a&b`. It writes CGI headers and an HTML body containing the sum of the two numbers.

- Each argument is read like C's `atoi`: its leading integer, or 0 if there is none.
- If `QUERY_STRING` is unset, both numbers are 0.
- If the value has no `&`, it raises `ValueError`.

```
QUERY_STRING='15000&213' labkit-adder
```

### `labkit-proxy`: proxy starting point

`labkit-proxy` prints the `User-Agent` header that a proxy is meant to send upstream. `labkit.proxy` also defines `MAX_CACHE_SIZE` and `MAX_OBJECT_SIZE`, the recommended cache limits.

## Library use

### Simulated heap (`labkit.memlib`)

```python
from labkit.memlib import SimulatedMemory

memory = SimulatedMemory(1 << 20)
p = memory.sbrk(64)
memory.fill(p, 0x41, 64)
assert memory.read(p, 4) == b"AAAA"
assert memory.heapsize() == 64
```

- Addresses are integer offsets, so `heap_lo()` is always 0.
- `sbrk` raises `HeapExhausted` for a negative increment, and for an increment that would pass the maximum size.
- `reset_brk` empties the heap.
- `read`, `write` and `fill` raise `IndexError` outside the current heap.
- The module also holds the lab settings:
  - `ALIGNMENT`,
  - `MAX_HEAP`,
  - `UTIL_WEIGHT`,
  - `AVG_LIBC_THRUPUT`,
  - `TRACEDIR`,
  - `DEFAULT_TRACEFILES`.

### Trace files and range checking (`labkit.tracefile`)

A trace file starts with four numbers:

1. the suggested heap size,
2. the number of block ids,
3. the number of operations,
4. a weight.

One request follows per line:

- `a <id> <size>` allocates,
- `r <id> <size>` reallocates,
- `f <id>` frees.

```python
from labkit.tracefile import OpType, parse_trace

trace = parse_trace("20000 2 3 1\na 0 16\na 1 8\nf 0\n", "example")
assert [op.type for op in trace.ops] == [OpType.ALLOC, OpType.ALLOC, OpType.FREE]
```

`parse_trace` and `read_trace(tracedir, filename)` raise `TraceError` in these cases:

- the input is malformed,
- an id or operation count disagrees with the header,
- the file cannot be read.

`RangeList.add(lo, size, heap_lo, heap_hi)` raises `RangeError` for a payload that:

- is misaligned,
- lies outside the heap,
- overlaps one already recorded.

`remove` and `clear` forget payloads.

### Timing

- `labkit.fsecs.Timer` returns the running time of a callable in seconds. Its method is a `TimingMethod` or the matching string:
  - `"gettod"` (the default) averages wall-clock time over 10 runs.
  - `"itimer"` averages over 10 runs using the interval timers.
  - `"fcyc"` estimates the cycle rate first, sleeping for 2 seconds. It then uses the K-best scheme.
- `labkit.fcyc.fcyc` runs a callable until the K smallest samples agree within a tolerance, or until a sample limit is reached. It returns the smallest sample. `FcycConfig` holds its parameters. `KBestSampler` keeps the samples.
- `labkit.ftimer` provides `ftimer_gettod` and `ftimer_itimer` directly.
- `labkit.clock.CycleCounter` is a nanosecond counter. Its methods:
  - `start` and `elapsed` take a raw measurement.
  - `overhead` measures the cost of a start/elapsed pair.
  - `mhz` estimates the counter rate.
  - `start_compensated` and `elapsed_compensated` correct for timer-interrupt overhead.

```python
from labkit.fsecs import Timer

seconds = Timer("gettod").measure(lambda: sum(range(1000)))
```

### Robust I/O (`labkit.rio`)

`readn(fd, n)` and `writen(fd, data)` move a whole byte count. They retry after short transfers and interrupted calls.

`RioReader(fd)` buffers one descriptor:

- `read(n)` reads a byte count.
- `readline(maxlen)` reads one line, newline included, of at most `maxlen - 1` bytes. It returns `b""` at end of file.
- Iterating over the reader yields lines.

### Sockets and signal-safe output (`labkit.net`)

- `open_clientfd(hostname, port)` returns a connected socket.
- `open_listenfd(port)` returns a socket listening on every local address. The socket has `SO_REUSEADDR` set.
- Both try each address the resolver offers. They raise `socket.gaierror` or `OSError` when none works.
- `sio_puts` and `sio_putl` write straight to descriptor 1.
- `ltoa` renders an integer in bases 2 to 36.

## What labkit does not do

- It has no memory allocator to run on the simulated heap.
- It has no command that replays traces against an allocator and scores it.
- It has no HTTP server. The socket, I/O and CGI pieces are here, but nothing serves requests.
- The proxy command only prints its header; it forwards no traffic.