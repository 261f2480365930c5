#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from aipicks.client import (
    FeedSnapshot,
    Interval,
    LiveKeyMode,
    ReconnectPolicy,
    StockPicksClient,
    SyntheticHistoryFetcher,
)


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Quickstart for StreamingSeriesFeed")
    p.add_argument("symbol", nargs="?", default="AAPL")
    p.add_argument("interval", nargs="?", default="1d", choices=[i.value for i in Interval])
    p.add_argument("duration", nargs="?", type=int, default=30, help="Seconds to run")
    p.add_argument("--synthetic", action="store_true", help="Use offline random-walk history")
    p.add_argument("--reconnect", type=int, default=0, help="Reconnect attempts on channel drop")
    p.add_argument("--per-interval", action="store_true", help="Key the live channel by interval too")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    history = SyntheticHistoryFetcher(seed=7) if args.synthetic else None
    async with StockPicksClient(history=history) as client:
        feed = client.feed(
            key_mode=LiveKeyMode.SYMBOL_INTERVAL if args.per_interval else LiveKeyMode.SYMBOL,
            reconnect=ReconnectPolicy(max_attempts=args.reconnect),
        )

        def on_snapshot(snap: FeedSnapshot) -> None:
            last = snap.last_bar
            close = f"{last.close:.2f}" if last else "-"
            print(
                f"{snap.state.value:<18} bars={len(snap.bars):<4} close={close:<10} "
                f"findings={len(snap.findings)} current={snap.findings_current}"
            )
            for f in snap.findings:
                print(f"    {f.direction.value:<8} {f.pattern_type} conf={f.confidence:.2f} @ {f.index}")
            if snap.error:
                print(f"    error[{snap.error.kind.value}]: {snap.error.message}")

        feed.on_snapshot(on_snapshot)
        await feed.open(args.symbol, args.interval)
        await asyncio.sleep(args.duration)


if __name__ == "__main__":
    asyncio.run(main())
