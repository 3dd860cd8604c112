# launcherutil

Building blocks for a game launcher.

## Modules

- `launcherutil.fsio`: file operations (`canonicalize`, `read_dir`,
  `create_dir_all`, `remove_dir_all`, `read`, `read_to_string`, `write`,
  `rename`, `copy`, `remove_file`) that raise `PathIOError`, an `OSError`
  whose message names the path that failed.
- `launcherutil.fetch`: async HTTP downloads built on httpx.
  `fetch_advanced` retries failed requests and SHA-1 mismatches (three
  retries after the first attempt), raising `FetchError` or `HashError` once
  they run out, and can report progress through a `(callback, total)` pair.
  `fetch`, `fetch_json`, `fetch_mirrors` and `post_json` build on it or work
  alongside it; `check_internet` probes a detection endpoint. Concurrency is
  limited by `FetchSemaphore` and `IoSemaphore`, whose limit can be replaced
  with `reset`. `read_json`, `write`, `copy` and `write_cached_icon` do file
  work under an `IoSemaphore`; `write_cached_icon` stores data under
  `<cache_dir>/icons/<sha1>.<ext>` and returns the absolute path.
  `CredentialsStore.session`, when set, is sent as the `Authorization`
  header to CDN URLs and with every `post_json` request.
- `launcherutil.jre`: Java runtime discovery. `get_all_jre` gathers
  candidates from `PATH`, the usual install locations of the running system
  (and, on Windows, `JAVA_HOME` and the registry) and an optional directory
  of auto-installed runtimes, then asks each Java found for its
  `java.version` and `os.arch`. Results are `JavaVersion` records.
  `extract_java_majorminor_version` parses version strings and raises
  `InvalidJREVersion` on bad input.
- `launcherutil.platform`: the `Os` enum (`Os.native()`,
  `Os.native_arch(java_arch)`), `OsRule` and `os_rule` for matching library
  rules, `classpath_separator` and `os_release`.
- `launcherutil.prompts`: terminal `prompt`, `select` and `confirm`, each
  with an `_async` twin that runs in a worker thread; `table` renders
  dataclasses or mappings as a psql-style table, and `table_path_display`
  abbreviates the home directory to `~`.
- `launcherutil.errors`: `SerializableError`, which tags an error as
  `Theseus`, `IO` or `Callback` and turns it into
  `{"field_name": ..., "message": ...}`; `from_exception` maps `OSError` to
  `IO` and anything else to `Theseus`. `display_tracing_error` logs an error
  with the traceback of its cause.
- `launcherutil.osutils`: `get_os`, `should_disable_mouseover` and
  `show_in_folder`, which starts the system file browser.
- `launcherutil.cli_profile`: `ModLoader`, loader version selection
  (`loader_version_matches`, `find_loader_version`), `check_init_directory`
  for preparing a new profile folder, and `ProfileRow` / `profile_table` for
  listings. Errors are raised as `ProfileInitError`.
- `launcherutil.cli_user`: `Credentials`, `UserRow`, `user_table` and
  `set_default_user`.
- `launcherutil.cli`: `build_parser` and `parse_args` for the `profile`
  (`init`, `list`, `remove`, `run`) and `user` (`add`, `list`, `remove`,
  `set-default`) command families, and `configure_logging`, which logs to
  stderr at the level named by the `LAUNCHERUTIL_LOG` environment variable
  (default `info`).

## Installation

Install the package with pip; the tests need the `test` extra.

## Examples

Java version strings:

```python
from launcherutil.jre import extract_java_majorminor_version

extract_java_majorminor_version("1.8.0_361")  # (1, 8)
extract_java_majorminor_version("20")         # (1, 20)
extract_java_majorminor_version("17.0.1.2")   # (1, 17)
```

Classpath separator for the current system:

```python
from launcherutil.platform import classpath_separator

classpath_separator("x86_64")  # ";" on Windows, ":" elsewhere
```

Downloading a file:

```python
import asyncio
from launcherutil.fetch import CredentialsStore, FetchSemaphore, fetch

async def download(url, sha1):
    semaphore = FetchSemaphore(10)
    return await fetch(url, sha1, semaphore, CredentialsStore())

data = asyncio.run(download("https://example.com/file.jar", None))
```

`fetch_mirrors` tries each mirror in turn, returns the first success or
raises the last mirror's error, and raises `InputError` when given no
mirrors.

## What the package does not do

There is no installed command. `launcherutil.cli` parses arguments and sets
up logging, but nothing here carries out the parsed commands: the package
keeps no store of profiles, users or settings, does not sign users in, and
does not install or launch the game. Those pieces are left to the
application that uses these helpers.