import logging
from pathlib import Path

import click
from eth_utils import decode_hex
from rich.console import Console
from rich.json import JSON
from rich.logging import RichHandler
from rich.table import Table

from abidecode.abi import (
    get_event_spec,
    get_events_from_abi,
    get_functions_from_abi,
    make_event_registry_from_abi,
)
from abidecode.constants import DEFAULT_MAX_BUFFER_SIZE, DEFAULT_MAX_DEPTH
from abidecode.core.config import DecoderConfig
from abidecode.core.errors import DecodeFailure
from abidecode.core.models import DecodedLog, EventLog, to_jsonable
from abidecode.decoding.decoder import decode, decode_function_result
from abidecode.decoding.events import decode_event, decode_log
from abidecode.decoding.parser import parse_types

console = Console()
err_console = Console(stderr=True)

_abi_path = click.Path(exists=True, dir_okay=False, path_type=Path)


def _fail(e: Exception) -> click.ClickException:
    return click.ClickException(f"{type(e).__name__}: {e}")


def _emit(payload: object) -> None:
    """Print JSON without wrapping long hex values."""
    console.print(JSON.from_data(payload, highlight=False), soft_wrap=True)


@click.group()
@click.option("--max-depth", type=int, default=DEFAULT_MAX_DEPTH, show_default=True, help="Max array/tuple nesting")
@click.option(
    "--max-buffer-size", type=int, default=DEFAULT_MAX_BUFFER_SIZE, show_default=True, help="Max input size in bytes"
)
@click.option(
    "--max-elements", type=int, default=None, help="Max elements and payload words per decode [default: max-buffer-size / 32]"
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log decoder diagnostics to stderr")
@click.pass_context
def cli(ctx: click.Context, max_depth: int, max_buffer_size: int, max_elements: int | None, verbose: bool) -> None:
    """abidecode: decode Ethereum ABI call results and event logs."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )
    try:
        ctx.obj = DecoderConfig(max_depth=max_depth, max_buffer_size=max_buffer_size, max_elements=max_elements)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


@cli.command("decode")
@click.argument("types")
@click.argument("data")
@click.pass_obj
def decode_cmd(config: DecoderConfig, types: str, data: str) -> None:
    """Decode hex DATA against comma-separated TYPES, e.g. 'uint256,string'."""
    try:
        values = decode(parse_types(types), decode_hex(data), config=config)
    except (DecodeFailure, ValueError) as e:
        raise _fail(e) from e
    _emit(to_jsonable(values))


@cli.command("decode-result")
@click.option("--abi", "abi_path", type=_abi_path, required=True, help="ABI JSON file")
@click.option("--function", "function_name", required=True, help="Function whose outputs describe DATA")
@click.argument("data")
@click.pass_obj
def decode_result_cmd(config: DecoderConfig, abi_path: Path, function_name: str, data: str) -> None:
    """Decode the return DATA of an eth_call."""
    functions = get_functions_from_abi(abi_path)
    if function_name not in functions:
        raise click.UsageError(f"No function {function_name!r} in {abi_path}")
    function = functions[function_name]
    try:
        values = decode_function_result(function, decode_hex(data), config=config)
    except (DecodeFailure, ValueError) as e:
        raise _fail(e) from e
    named = {p.name or str(i): v for i, (p, v) in enumerate(zip(function.outputs, values))}
    _emit(to_jsonable(named))


@cli.command("decode-log")
@click.option("--abi", "abi_path", type=_abi_path, required=True, help="ABI JSON file")
@click.option("--event", "event_name", default=None, help="Event name (required for anonymous events)")
@click.option("--topic", "topics", multiple=True, help="Topic word; repeat in log order")
@click.option("--data", default="0x", show_default=True, help="Log data (hex)")
@click.pass_obj
def decode_log_cmd(
    config: DecoderConfig,
    abi_path: Path,
    event_name: str | None,
    topics: tuple[str, ...],
    data: str,
) -> None:
    """Decode one event log given its topics and data."""
    try:
        log = EventLog.from_hex(topics, data)
        if event_name is not None:
            events = get_events_from_abi(abi_path)
            if event_name not in events:
                raise click.UsageError(f"No event {event_name!r} in {abi_path}")
            spec = get_event_spec(events[event_name])
            decoded: DecodedLog | None = DecodedLog(name=spec.name, values=decode_log(spec, log, config=config))
        else:
            decoded = decode_event(log, make_event_registry_from_abi(abi_path), config=config)
    except (DecodeFailure, ValueError) as e:
        raise _fail(e) from e

    if decoded is None:
        raise click.ClickException("No event in the ABI matches topic0")
    _emit({"event": decoded.name, "values": to_jsonable(decoded.values)})


@cli.command("topics")
@click.option("--abi", "abi_path", type=_abi_path, required=True, help="ABI JSON file")
def topics_cmd(abi_path: Path) -> None:
    """List the events of an ABI with their signatures and topic0."""
    table = Table(title=str(abi_path.name))
    table.add_column("event", style="bold", no_wrap=True)
    table.add_column("signature")
    table.add_column("topic0", style="cyan", no_wrap=True)
    table.add_column("anonymous")
    for event in get_events_from_abi(abi_path).values():
        spec = get_event_spec(event)
        table.add_row(spec.name, spec.signature, spec.topic0, "yes" if spec.anonymous else "")
    # 0x topics are 66 chars; keep rows on one line even when piped
    console.print(table, width=max(console.width, 160))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
