#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from aipicks.client import StockPicksClient


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List the current top picks")
    p.add_argument("--limit", type=int, default=20)
    p.add_argument("--category", default=None, help="Filter locally by category")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO)

    async with StockPicksClient() as client:
        board = client.picks_board(limit=args.limit)
        await board.load()
        if board.error:
            print(f"Could not load picks: {board.error}")
            return
        print("Categories:", ", ".join(board.categories()) or "-")
        for pick in board.filter_by_category(args.category):
            print(
                f"#{pick.rank:<3} {pick.symbol:<6} score={pick.ai_score:6.2f} "
                f"conf={pick.confidence:.2f} risk={pick.risk_score:.2f} "
                f"ret={pick.predicted_return:+.2%} [{pick.category}]"
            )
        user = await client.account.subscription_status()
        print(f"Plan: {user.subscription_tier.display_name}, API calls today: {user.usage.api_calls_today}")


if __name__ == "__main__":
    asyncio.run(main())
