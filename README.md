# wgtoolkit

Pieces of a userspace WireGuard daemon, written in plain Python with no
third-party dependencies. Each module stands by itself:

| Module | What it gives you |
| --- | --- |
| `wgtoolkit.replay` | `Filter`, a sliding-window anti-replay filter for message counters |
| `wgtoolkit.ratelimiter` | `Ratelimiter`, a per-address token bucket for handshake messages |
| `wgtoolkit.tai64n` | `Timestamp`, `stamp()` and `now()` for whitened, monotonic TAI64N stamps |
| `wgtoolkit.timer` | `Timer`, a re-armable one-shot timer with pending state |
| `wgtoolkit.rwcancel` | `RWCancel` and `retry_after_error()` for cancellable reads and writes on a file descriptor |
| `wgtoolkit.packet` | `padding_size()`, `transport_header()` and the queue and header size constants |
| `wgtoolkit.peername` | `peer_name()` and `PeerEndpoint` for peer display names and roaming endpoints |
| `wgtoolkit.ipc` | `socket_path()`, `uapi_open()`, `uapi_listen()` and `UAPIListener` for the configuration socket |

## Installing

```
pip install .
```

Python 3.10 or newer is needed.

## Examples

Reject replayed counters:

```python
from wgtoolkit.replay import Filter

window = Filter()
limit = 2**64 - 2**13 - 1
window.validate_counter(5, limit)   # True
window.validate_counter(5, limit)   # False: already seen
```

Limit handshake floods per source address. The limiter allows a burst of
five packets per address and then twenty per second; idle entries are
dropped by a background thread while the limiter is open:

```python
from wgtoolkit.ratelimiter import Ratelimiter

with Ratelimiter() as limiter:
    allowed = limiter.allow("192.0.2.1")
```

`Ratelimiter(time_now=...)` takes a clock returning nanoseconds, which makes
the limiter easy to drive in tests.

Compare TAI64N timestamps. `stamp()` takes nanoseconds since the Unix epoch
and whitens the sub-second part, so stamps closer than about 16 ms compare
equal:

```python
from wgtoolkit.tai64n import stamp

earlier = stamp(0)
later = stamp(20_000_000)
later.after(earlier)   # True
```

Arm, re-arm and cancel a timer:

```python
from wgtoolkit.timer import Timer

timer = Timer(lambda: print("expired"))
timer.mod(5.0)        # fire in five seconds
timer.is_pending()    # True
timer.delete_sync()   # cancel and wait for a running callback
```

Wait on a descriptor in a way another thread can interrupt:

```python
import os
from wgtoolkit.rwcancel import RWCancel

read_fd, write_fd = os.pipe()
rw = RWCancel(read_fd)
# elsewhere: rw.cancel() makes a blocked rw.read(...) raise OSError
rw.close()
```

Shorten a public key for logs:

```python
from wgtoolkit.peername import peer_name

peer_name(bytes(32))   # 'peer(AAAA…AAAA)'
```

Compute transport padding and build a transport header:

```python
from wgtoolkit.packet import padding_size, transport_header

padding_size(17, 1420)         # 15
len(transport_header(1, 0))    # 16
```

Open the configuration socket and accept clients. `uapi_open()` removes a
stale socket file and raises `OSError` if another process still listens on
it; `accept()` raises `FileNotFoundError` once the socket file is deleted,
and closing the listener removes the file:

```python
from wgtoolkit.ipc import uapi_listen, uapi_open

sock = uapi_open("wg0", directory="/tmp/wg")
with uapi_listen("wg0", sock, directory="/tmp/wg") as listener:
    conn = listener.accept()
```

## What this package does not do

It is a set of building blocks, not a daemon. It has no command to run, no
tunnel device handling, no handshake cryptography and no object pooling.
`wgtoolkit.ipc` provides the configuration socket only; reading and
answering configuration requests on its connections is left to the caller.

## Running the tests

```
pip install .[test]
pytest
```