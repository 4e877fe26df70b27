"""``ping`` — best-effort round-trip timing over HTTP.

There are no raw sockets here.  Each "packet" is one ``HEAD`` request
issued by the session's prober in a worker thread; the time until any
response arrives is reported as the round-trip time.  Lost or slow
requests print ``timeout``.

``ping`` is the one command that suspends, so it is also the one that
honours Ctrl+C: the cancellation token is checked before every probe,
raced against every probe, and interrupts the pause between probes.
"""

from __future__ import annotations

import asyncio
import time
from concurrent.futures import ThreadPoolExecutor

from stellar_term.commands._args import count_option
from stellar_term.context import CommandContext
from stellar_term.errors import CommandCancelled, UsageError
from stellar_term.net import to_url
from stellar_term.registry import CommandRegistry, CommandResult, CommandSpec

_USAGE = "ping [-c N] <host|url>"


def summarize(target: str, sent: int, rtts: list[int]) -> list[str]:
    """Return the closing statistics block for a ping run.

    The min/avg/max line only appears when at least one probe answered,
    and is computed over answered probes only.
    """
    lines = [
        f"--- {target} ping statistics ---",
        f"{sent} packets transmitted, {len(rtts)} received",
    ]
    if rtts:
        avg = round(sum(rtts) / len(rtts))
        lines.append(f"rtt min/avg/max = {min(rtts)}/{avg}/{max(rtts)} ms")
    return lines


async def _probe_loop(
    ctx: CommandContext, executor: ThreadPoolExecutor, url: str, count: int
) -> list[int]:
    """Send *count* probes, printing one line each; return the answered RTTs."""
    loop = asyncio.get_running_loop()
    timeout = ctx.config.ping_timeout
    token = ctx.token
    rtts: list[int] = []
    for seq in range(count):
        token.raise_if_cancelled()
        start = time.perf_counter()
        try:
            await token.race(loop.run_in_executor(executor, ctx.probe, url, timeout), timeout=timeout)
        except CommandCancelled:
            raise
        except Exception:  # noqa: BLE001
            ctx.println(f"seq={seq} timeout")
        else:
            ms = round((time.perf_counter() - start) * 1000)
            rtts.append(ms)
            ctx.println(f"seq={seq} time={ms} ms")
        await token.sleep(ctx.config.ping_interval)
        token.raise_if_cancelled()
    return rtts


async def _cmd_ping(args: list[str], ctx: CommandContext) -> CommandResult:
    """Probe a host ``-c N`` times (default from config), then summarise."""
    option = count_option(args, "-c", ctx.config.ping_count, _USAGE)
    if not option.rest:
        raise UsageError(_USAGE)
    target = option.rest[0]
    url = to_url(target)

    ctx.println(f"PING {target} with HTTP HEAD ({option.count} packets)")
    # Never wait on the probe thread: a cancelled request may still be blocked.
    executor = ThreadPoolExecutor(thread_name_prefix="PingProbe")
    try:
        rtts = await _probe_loop(ctx, executor, url, option.count)
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    for line in summarize(target, option.count, rtts):
        ctx.println(line)
    return CommandResult()


COMMANDS: list[CommandSpec] = [
    CommandSpec("ping", "Ping a host using HTTP request timings", _cmd_ping, usage=_USAGE),
]


def register(registry: CommandRegistry) -> None:
    """Add the network commands to *registry*."""
    for spec in COMMANDS:
        registry.add(spec)
