# akaia

Two tools in one package:

- **`akaia`** is a small command-line tool.
- **`akaia-platform`** is an ASGI web server built on Starlette and run with
  uvicorn. It serves the platform pages, static files and an endpoint that
  looks up NEAR account balances.

## Installation

```
pip install .
```

To install the test dependencies and run the test suite:

```
pip install ".[test]"
pytest
```

## Command line

```
akaia [--debug] SUBCOMMAND
```

| Subcommand                | What it does                                                     |
|---------------------------|------------------------------------------------------------------|
| `usage`                   | Prints the usage text.                                           |
| `hello [--name NAME]`     | Prints `Hello, NAME!`, or `Hello, stranger!` when no name is given. |
| `near [...NEAR_CLI_ARGS]` | Collects every remaining argument and prints the program's path. |

`--debug` must come before the subcommand. With it, the parsed `Arguments`
are printed once the subcommand has finished.

```
$ akaia hello --name Ada
Hello, Ada!

$ akaia hello --name=Ada
Hello, Ada!

$ akaia hello
Hello, stranger!
```

On an unknown option, an unknown command, a missing command, or `--name`
without a value, the tool prints `Usage error: ...` followed by the usage text
and exits with status 1.

## Web platform

```
akaia-platform [--site-addr HOST:PORT] [--site-root DIR] [--rpc-url URL]
```

| Option        | Default                                                  |
|---------------|----------------------------------------------------------|
| `--site-addr` | `LEPTOS_SITE_ADDR` from the environment, else `127.0.0.1:3000` |
| `--site-root` | `LEPTOS_SITE_ROOT` from the environment, else `target/site`    |
| `--rpc-url`   | the NEAR mainnet JSON-RPC endpoint                       |

Routes:

| Path                             | Response                                                      |
|----------------------------------|---------------------------------------------------------------|
| `/`                              | Dashboard page ("Hello, World!")                              |
| `/error`                         | "Not Found" page with status 404                              |
| `/<app_route>`                   | Page holding the extension shell for `app_route`              |
| any other path                   | Dashboard page                                                |
| `/favicon.ico`                   | `favicon.ico` from the site root, or 404                      |
| `/static/...`                    | Files from the site root                                      |
| `/app/...`                       | Files from `app/` inside the site root                        |
| `POST /api/near_account/balance` | Balance of the account in `account_id`                        |

Responses are gzip-compressed when the client accepts it.

The balance endpoint takes `account_id` as a JSON body
(`{"account_id": "example.near"}`) or as a form field. It answers with a JSON
object holding `total`, `state_staked`, `staked` and `available` (in
yoctoNEAR, as decimal strings), with `null` if the id is not a valid NEAR
account id or the lookup fails, and with status 400 if `account_id` is
missing.

### Extension shell

The shell is an `<akaia-app>` element carrying `account_id`, `app_id`,
`route_path`, `route_query` (the query parameters as a JSON-style object) and
`props` attributes. The account and app id come from the request's host name:

| Host name | `account_id` | `app_id` |
|-----------|--------------|----------|
| `akaia`   | `akaia.near` | empty    |
| `a.b`     | `a.b.near`   | empty    |
| `x.a.b`   | `a.b.near`   | `x`      |

Any other host name (for example `127.0.0.1`) is logged as an error and the
shell falls back to `akaia.near` with an empty app id.

## Library use

- `akaia.cli`: `execute_command(argv)` parses and runs an argument list and
  returns `Arguments(debug, command)`, where `command` is a `UsageCommand`,
  `HelloCommand` or `NearCommand`; it raises `UsageError` subclasses
  (`UnknownOptionError`, `UnknownCommandError`, `MissingCommandError`)
  instead of exiting. `run_usage`, `run_hello(args)` and `run_near(args)` run
  a single subcommand; `main(argv)` returns the exit status.
- `akaia.near`: `NearAccountId`, `NearAccountBalance` (with `to_dict()`),
  `is_valid_account_id(value)` and `get_balance(account_id, rpc_url, client)`,
  which returns `None` for an invalid id or a failed lookup.
- `akaia.shell`: `identity_for_hostname(hostname)` returning a
  `ShellIdentity` or raising `InvalidHostError`, `route_query_json(query)` and
  `render_extension_shell(route, query, props, hostname)`.
- `akaia.web`: `create_app(site_root, rpc_url)` builds the ASGI application;
  `render_page(body)` wraps a body in the platform's HTML document.

## What the package does not do

- `akaia near` does not run a NEAR CLI; it only collects the arguments and
  prints the program's own path.
- The pages refer to front-end scripts and a stylesheet under `/static` and
  `/app`, but the package ships none of them, and the page's import map is
  empty. Without such files in the site root, the `<akaia-app>` element is
  not brought to life in the browser.