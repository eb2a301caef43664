import asyncio
import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from govind.core.config import DispatcherConfig, IndexerConfig, RpcConfig
from govind.core.errors import GovindError
from govind.core.logs import setup_logging
from govind.core.models import ProposalLog
from govind.decoding.encoding import (
    encode_func_sig_and_address_and_bytes32,
    encode_func_sig_and_bytes32,
    encode_func_sig_and_bytes32_and_address,
)
from govind.decoding.proposal import parse_proposal_created_data
from govind.scheduling.policy import iter_time_ranges, monday_overlap
from govind.scheduling.queue import EMPTY

console = Console()


def _utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _proposals_table(title: str, rows: list[ProposalLog]) -> Table:
    table = Table(title=title)
    table.add_column("block", justify="right")
    table.add_column("governor")
    table.add_column("proposal id", overflow="fold")
    table.add_column("proposer")
    table.add_column("actions", justify="right")
    table.add_column("description", overflow="ellipsis", max_width=48)
    for p in rows:
        ev = p.event
        table.add_row(
            f"{p.block_number:,}",
            p.address,
            str(ev.proposal_id),
            ev.proposer,
            str(len(ev.targets)),
            ev.description.splitlines()[0] if ev.description else "",
        )
    return table


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines")
def cli(verbose: bool, json_logs: bool) -> None:
    """govind: Arbitrum governance proposal indexer."""
    setup_logging(logging.DEBUG if verbose else logging.INFO, json_output=json_logs)


@cli.command("decode")
@click.argument("data_hex")
def decode_cmd(data_hex: str) -> None:
    """Decode the data section of a ProposalCreated log."""
    try:
        event = parse_proposal_created_data(data_hex)
    except GovindError as e:
        raise click.ClickException(str(e)) from e
    console.print_json(json.dumps(event.to_dict()))


@cli.command("encode")
@click.argument("func_sig")
@click.option("--bytes32", "word", help="0x-prefixed 32-byte argument")
@click.option("--address", help="0x-prefixed address argument")
@click.option("--address-first/--bytes32-first", default=False, show_default=True)
def encode_cmd(func_sig: str, word: str | None, address: str | None, address_first: bool) -> None:
    """Encode a call payload: selector + bytes32 [+ address]."""
    if word is None:
        raise click.UsageError("--bytes32 is required")
    try:
        if address is None:
            payload = encode_func_sig_and_bytes32(func_sig, word)
        elif address_first:
            payload = encode_func_sig_and_address_and_bytes32(func_sig, address, word)
        else:
            payload = encode_func_sig_and_bytes32_and_address(func_sig, word, address)
    except GovindError as e:
        raise click.ClickException(str(e)) from e
    click.echo(payload)


@cli.command("schedule")
@click.option("--start", type=click.DateTime(), required=True, help="Range start (UTC)")
@click.option("--end", type=click.DateTime(), required=True, help="Range end (UTC)")
@click.option("--step-hours", type=float, default=24, show_default=True)
def schedule_cmd(start: datetime, end: datetime, step_hours: float) -> None:
    """Show time ranges in the order the dispatcher would start them."""
    from govind.orchestration.indexer import build_queue

    queue = build_queue(iter_time_ranges(_utc(start), _utc(end), timedelta(hours=step_hours)))
    table = Table(title="dispatch order")
    table.add_column("#", justify="right")
    table.add_column("start")
    table.add_column("end")
    table.add_column("monday overlap", justify="right")
    i = 0
    while (r := queue.pop()) is not EMPTY:
        i += 1
        overlap_h = monday_overlap(r.start, r.end) / 3_600_000
        table.add_row(str(i), r.start.isoformat(), r.end.isoformat(), f"{overlap_h:.2f}h")
    console.print(table)


@cli.command("proposals")
@click.option("--rpc", required=True, help="RPC endpoint URL")
@click.option("--store", "store_path", type=click.Path(exists=True, path_type=Path), default=None,
              help="Proposal dataset JSON (defaults to the bundled copy)")
@click.option("--concurrency", type=click.IntRange(min=1), default=5, show_default=True, help="Max parallel requests")
@click.option("--max-retries", type=click.IntRange(min=1), default=3, show_default=True)
def proposals_cmd(rpc: str, store_path: Path | None, concurrency: int, max_retries: int) -> None:
    """Fetch and decode the proposals listed in the dataset."""
    from govind.clients.connection import ConnectionManager
    from govind.orchestration.indexer import fetch_proposal_events
    from govind.storage.proposals import load_proposal_seeds

    async def run() -> list[ProposalLog]:
        seeds = load_proposal_seeds(store_path)
        async with ConnectionManager() as conn:
            provider = await conn.connect(RpcConfig(rpc_url=rpc))
            if provider is None:
                raise click.ClickException("chain not supported")
            return await fetch_proposal_events(
                provider, seeds, DispatcherConfig(concurrency=concurrency, max_retries=max_retries)
            )

    try:
        rows = asyncio.run(run())
    except GovindError as e:
        raise click.ClickException(str(e)) from e
    console.print(_proposals_table("proposals", rows))


@cli.command("index")
@click.option("--rpc", required=True, help="RPC endpoint URL")
@click.option("--start", type=click.DateTime(), required=True, help="Range start (UTC)")
@click.option("--end", type=click.DateTime(), required=True, help="Range end (UTC)")
@click.option("--step-hours", type=float, default=24, show_default=True, help="Hours per fetch task")
@click.option("--concurrency", type=click.IntRange(min=1), default=5, show_default=True, help="Max parallel tasks")
@click.option("--max-retries", type=click.IntRange(min=1), default=3, show_default=True)
def index_cmd(
    rpc: str,
    start: datetime,
    end: datetime,
    step_hours: float,
    concurrency: int,
    max_retries: int,
) -> None:
    """Find proposals created between --start and --end, Monday windows first."""
    from govind.clients.connection import ConnectionManager
    from govind.orchestration.indexer import index_time_ranges

    config = IndexerConfig(
        rpc_url=rpc,
        step=timedelta(hours=step_hours),
        dispatcher=DispatcherConfig(concurrency=concurrency, max_retries=max_retries),
    )

    async def run() -> list[ProposalLog]:
        async with ConnectionManager() as conn:
            provider = await conn.connect(RpcConfig(rpc_url=config.rpc_url))
            if provider is None:
                raise click.ClickException("chain not supported")
            return await index_time_ranges(provider, _utc(start), _utc(end), config)

    try:
        rows = asyncio.run(run())
    except GovindError as e:
        raise click.ClickException(str(e)) from e
    console.print(_proposals_table(f"proposals {start:%Y-%m-%d}..{end:%Y-%m-%d}", rows))


if __name__ == "__main__":
    cli()
