# supertd

Building blocks for working out which Buck2 targets a change affects, plus a
small command line that runs `buck2 targets` with the flags target
determination needs.

## Installing

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Command line

`supertd` is the umbrella command. Its only subcommand, `targets`, runs
`buck2 targets` with the streaming, hashing, imports and attribute-filter
flags used for target determination. The same runner is also available on
its own as `supertd-targets`.

```
supertd --version
supertd targets --dry-run fbcode//...
supertd-targets --output targets.jsonl fbcode//foo/...
supertd-targets --buck buck2 --isolation-dir ci fbcode//...
```

* `--buck` is the Buck executable to run (default `buck2`).
* `--output FILE` has Buck write the results to a file instead of stdout.
* `--isolation-dir DIR` passes an isolation directory to Buck.
* `--dry-run` prints the command that would run, without running it.

Remaining arguments, usually target patterns, are passed on to Buck.
Arguments of the form `@file` are replaced by the arguments listed in the
named file, one per line; blank lines are skipped and arg files may refer to
further arg files.

If Buck exits with a failure, the command exits with Buck's exit code. If
Buck cannot be started, the error is printed and the exit code is 1. A
command line that cannot be parsed also gives exit code 1; with
`SUPERTD_IGNORE_EXTRA_ARGUMENTS=1` in the environment, `supertd` ignores
arguments it does not recognise.

## Library

### Changes from version control

`supertd.status` reads `hg status`-style output (`M`, `A`, `R`, and `D` as a
removal) into `Status` values holding a `StatusKind` and a path:

```python
from supertd.status import parse_status, read_status

changes = parse_status("M proj/foo.rs\nA baz/file.txt\n")
changes = read_status("changes.txt")
```

A line with an unknown prefix or the wrong shape raises `StatusParseError`
(a `ValueError`).

### Dependency graphs

`supertd.graph` works on `TargetNode` objects (a label, its dependency
labels and its target labels):

* `TargetsSize.get(label)` counts a target and everything it reaches
  transitively (cycles are handled).
* `GraphSize.sizes(label)` gives the `(before, after)` sizes for two graphs.
* `requires_sudo_recursively(targets)` returns the labels of every target
  that is labelled `uses_sudo` or depends, directly or transitively, on one
  that is.

### Schedules, projects and directives

```python
from supertd.schedules import ScheduleType, ContinuousRunMode
from supertd.directives import get_app_specific_build_directives, should_build_all

ScheduleType.from_name("land")            # ScheduleType.LANDCASTLE
ScheduleType.TESTWARDEN.accepts(ScheduleType.DIFF)              # True
ContinuousRunMode.TRANSLATOR_HOURLY.to_translator_run_type()   # "hourly"
ContinuousRunMode.from_translator_run_type("nightly")          # TRANSLATOR_NIGHTLY

get_app_specific_build_directives(["@build[a,b]", "@build[c]"])  # ["a", "b", "c"]
should_build_all(["#buildall"])                                   # True
```

`supertd.project.TdProject` names the source projects and
`get_repo_root()` asks `hg root` for the repository root.
`supertd.xplat.unpack_project_metadata` expands the per-project test
selection configuration held in job metadata for the mobile projects.

### JSON and JSON lines

`supertd.jsonio` reads files of one JSON value per line (plain, or
zstd-compressed when the name ends in `.zst`) with `read_file_lines` and
`read_file_lines_unordered`, and writes them with `write_json_lines` or as a
one-entry-per-line array with `write_json_per_line`. `parse_key_val` splits
`KEY=value` strings.

### Errors and exit codes

`supertd.workflow_error.WorkflowError` carries an exit code for the calling
workflow: `warning` (2), `skipped` (3), `user_failure` (4) and
`infra_failure` (5). `report()` prints the message to stderr and returns the
code; an error without a code reports exit code 1.

### Event logging, knobs and log set-up

`supertd.events.init()` sets up logging and the event client and returns a
guard to use as a context manager; `scuba(event, duration=..., data=...,
sample_rate=...)` records an `Event` with an optional duration and JSON data.
Samples are only written when `SUPERTD_SCUBA_LOGFILE` names a file, to which
they are appended as JSON lines; otherwise they are discarded.

`supertd.knobs` reads feature knobs from a JSON object in the `SUPERTD_KNOBS`
environment variable; unset knobs fall back to their defaults.
`supertd.logsetup.init_tracing()` sends logs to stderr at info level (debug
for the tool loggers), or as directed by `SUPERTD_LOG`, e.g.
`SUPERTD_LOG=warn,supertd=debug`.

### Smaller helpers

* `supertd.command`: `display_command` and `with_command`, which logs a
  command and its run time.
* `supertd.cli`: `get_args` and `expand_arg_files` for `@file` arguments.
* `supertd.executor.run_as_sync` runs a coroutine from synchronous code,
  with or without a running event loop.
* `supertd.file_writer.file_writer` opens a file for writing with a clear
  error message.
* `supertd.interning`: `intern` and `intern3` for shared string copies.

## What it does not do

* The command line has only the `targets` subcommand. Nothing here reads
  Buck's targets output and computes the set of affected targets from a
  change; the graph helpers work on `TargetNode` objects you build.
* `supertd.qe.evaluate_qe` has no experiment service to ask, so it always
  returns `False`.
* Events are never sent to a remote service; they go to the log file or
  nowhere.