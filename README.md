# zlogger

Building blocks for category-based logging. The package turns a log call
(category, source location, level and message) into a formatted line,
following a pattern of `%` conversions. It has no dependencies outside the
standard library.

## Installation

    pip install zlogger

## Modules

* `zlogger.buffer`: `LogBuffer`, a text buffer with a minimum size, an
  optional maximum (`0` means unlimited) and an optional truncation marker.
  `append`, `printf`, `adjust_append`, `append_dec` and `append_hex` each
  return `True` when the text had to be cut to fit, and `False` otherwise.
  Inconsistent limits raise `BufferConfigError`.
* `zlogger.levels`: `LevelList`, a 256-slot table preset with `DEBUG` (20),
  `INFO` (40), `NOTICE` (60), `WARN` (80), `ERROR` (100), `FATAL` (120) and
  `UNKNOWN` (254). `set("TRACE = 10, LOG_DEBUG")` adds a level, `get(n)`
  returns the level in slot `n` (or `UNKNOWN` for an empty slot) and
  `lookup(name)` gives the number for a name in any case. Bad lines and
  unknown names raise `LevelError`. `parse_level` and `syslog_level_from_name`
  are available on their own.
* `zlogger.mdc`: `Mdc`, a table of key/value pairs (`put`, `get`,
  `get_entry`, `remove`, `clean`) that patterns read with `%M(key)`.
* `zlogger.event`: `Event`, the state of one log call, filled in with
  `set_fmt` (a `%`-style format and its arguments) or `set_hex` (bytes to
  dump). `TimeCacheCounter` hands out the time cache slots that time
  conversions need; create the `Event` with `counter.count` slots.
* `zlogger.record`: `RecordTable`, which stores user output callbacks by
  name (`register`, `get`). A callback receives a `LogMessage` with `buf`
  and `path` and returns `None` or `0` on success.
* `zlogger.spec`: `parse_spec(pattern, pos, counter)` reads one piece of a
  pattern and returns a `Spec` and the position after it; `LogThread` holds
  the event, levels, context and buffers a spec writes to. `Spec.gen_msg`,
  `gen_path` and `gen_archive_path` write into the thread's message, path
  and archive path buffers. Bad patterns raise `SpecError`.

## Example

```python
from zlogger.event import Event, TimeCacheCounter
from zlogger.spec import LogThread, parse_spec

pattern = "%-6V [%c] %m%n"
counter = TimeCacheCounter()
specs = []
pos = 0
while pos < len(pattern):
    spec, pos = parse_spec(pattern, pos, counter)
    specs.append(spec)

event = Event(counter.count)
event.set_fmt("my_cat", "main.py", "run", 42, 40, "hello %s", ("world",))
thread = LogThread(event)
thread.msg_buf.restart()
for spec in specs:
    spec.gen_msg(thread)

print(str(thread.msg_buf), end="")   # INFO   [my_cat] hello world
```

## Pattern conversions

`%c` category, `%d(fmt)` local time, `%g(fmt)` UTC time (`strftime`
format), `%D` / `%G` local / UTC time as `%Y-%m-%d %H:%M:%S`, `%ms` / `%us`
milliseconds / microseconds, `%F` source file, `%f` its base name, `%L`
line, `%U` function, `%H` host name, `%p` process id, `%t` / `%T` / `%k`
thread ids (hex, decimal, native), `%V` / `%v` level name in upper / lower
case, `%m` the message or hex dump, `%M(key)` a value from the `Mdc`, `%n`
newline, `%r` carriage return, `%%` a percent sign. Width and precision go
between `%` and the letter: `%-10.5V` pads to 10 on the right and cuts to 5,
`%08L` pads with zeros on the left.

## What this package does not do

It formats lines into buffers and stops there. It does not read
configuration files, has no categories or rules that decide which events
are written, and writes nothing itself: there is no output to files,
standard output, syslog or pipes, and no log file rotation. Callbacks in a
`RecordTable` are stored but nothing in the package calls them. Putting the
formatted text somewhere is left to the caller.