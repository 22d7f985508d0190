# rhineutils

Small building blocks for a location service. Each module can be used on
its own; none needs anything outside the standard library.

- `rhineutils.log_util`: `LocLogger`, a logger gated by a numeric debug
  level (0xFF, the default, passes every message at its natural level;
  1 to 5 passes messages up to that severity and reports them as errors;
  anything else silences it), plus the shared `loc_logger`, `logger_init`
  and `get_timestamp`.
- `rhineutils.linked_list`: `LinkedList`, a FIFO list that adds at the head,
  removes from the tail and can call a release callback per item on
  `flush()`. Failures raise `LinkedListError` carrying a `ListStatus`.
- `rhineutils.msg_q`: `MessageQueue`, a blocking, thread-safe queue.
  `receive()` waits for a message; `unblock()` wakes all waiters and stops
  further use; `close()` releases what is left. Failures raise `MsgQError`
  carrying a `MsgQStatus`.
- `rhineutils.loc_timer`: `start_timer(msec, callback, user_data)` returns a
  `LocTimer` that calls `callback(user_data, errno.ETIMEDOUT)` from a
  background thread unless `stop()` is called first.
- `rhineutils.loc_target`: target codes (`target_set`, `target_gnss_type`,
  `GnssTarget`, `SscType`) and `TargetDetector`, which works out the target
  from a property lookup you supply and from sysfs files under a root
  directory.
- `rhineutils.loc_log`: name lookups (`name_from_val`, `name_from_mask`,
  `msg_q_status_name`, `target_name`, `succ_fail_string`) and `get_time`.
- `rhineutils.loc_cfg`: `read_conf(path, table)` fills a list of
  `ConfigParam` entries from a `NAME = value` file; `DEBUG_LEVEL` and
  `TIMESTAMP` in the file also configure the shared logger.
- `rhineutils.capability`: capability numbers and `cap_valid`,
  `cap_to_index`, `cap_to_mask`.
- `rhineutils.fs_config`: Android user and group ids, `android_id`,
  `android_name`, and `fs_config(path, is_dir, mode)`, which returns the
  default owner, group, permission bits and capabilities for a path.

## Install

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

A message queue shared between threads:

```python
from rhineutils.msg_q import MessageQueue

with MessageQueue() as queue:
    queue.send("fix-request", None)
    print(queue.receive())   # fix-request
```

Reading a configuration file into typed parameters:

```python
from rhineutils.loc_cfg import ConfigParam, ParamType, read_conf

table = [
    ConfigParam("SUPL_HOST", ParamType.STRING),
    ConfigParam("INTERMEDIATE_POS", ParamType.NUMBER),
]
if read_conf("gps.conf", table):
    print({param.name: param.value for param in table if param.is_set})
```

Looking up filesystem ownership for a path:

```python
from rhineutils.fs_config import fs_config, android_name

entry = fs_config("system/bin/run-as", False, 0)
print(android_name(entry.uid), oct(entry.mode))   # root 0o750
```

A one-shot timer:

```python
from rhineutils.loc_timer import start_timer

timer = start_timer(500, lambda data, result: print("expired", data), "session-1")
timer.stop()   # cancel before it fires
```

Detecting the target from a directory tree and your own property lookup:

```python
from rhineutils.loc_log import target_name
from rhineutils.loc_target import TargetDetector

detector = TargetDetector(root="/", get_property=lambda name, default: default)
print(target_name(detector.detect()))
```

## What it does not do

This package holds the supporting pieces only. It has no location engine:
it does not talk to a GNSS receiver, produce position fixes, handle NMEA,
assisted-GPS or network-initiated requests, and offers no command-line
program. `TargetDetector` does not read system properties by itself; unless
you pass `get_property`, every property reads as its default. `fs_config`
only computes ownership and permissions; it never changes files.