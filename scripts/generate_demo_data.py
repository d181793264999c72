#!/usr/bin/env python3
"""
Generate demo data for a fresh TurtleTrace data directory.
Simulates a user with two accounts, a few trades, tags and journal entries.

Usage:
  python scripts/generate_demo_data.py [DATA_DIR]
"""

import asyncio
import random
import sys
from datetime import timedelta
from decimal import Decimal
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from turtletrace.app_context import AppContext
from turtletrace.core.exceptions import DuplicatePositionError, ValidationError
from turtletrace.core.timezone import today_market, week_label_for
from turtletrace.domain.models import AccountType, DailyReview, TagKind, TransactionType
from turtletrace.services import AccountCreate, PositionOpen, TradeCreate


# Symbols the stub quote source recognizes, with a rough entry price
STOCKS = [
    ("600519.SH", Decimal("1650.00")),
    ("000858.SZ", Decimal("150.00")),
    ("601318.SH", Decimal("44.00")),
    ("300750.SZ", Decimal("180.00")),
    ("600036.SH", Decimal("32.50")),
]


def _jitter(price: Decimal, low: float, high: float) -> Decimal:
    return (price * Decimal(str(random.uniform(low, high)))).quantize(Decimal("0.01"))


async def open_positions(ctx: AppContext, account_id: str, stocks) -> list[str]:
    opened = []
    for symbol, base_price in stocks:
        try:
            position = await ctx.ledger.open_position(PositionOpen(
                symbol=symbol,
                price=_jitter(base_price, 0.95, 1.05),
                quantity=Decimal(random.choice([100, 200, 300, 500])),
                account_id=account_id,
                emotion=random.choice(["理性建仓", "波段操作", "价值投资"]),
                reasons=[random.choice(["财报利好", "技术突破", "板块轮动"])],
            ))
        except DuplicatePositionError:
            print(f"✓ {symbol} already held")
            continue
        opened.append(position.position_id)
        print(f"✓ Opened {symbol} {position.quantity} @ {position.cost_price}")
    return opened


def generate_demo_data(data_dir=None):
    """Populate the data directory with demo accounts, trades and reviews."""
    ctx = AppContext(data_dir=Path(data_dir) if data_dir else None)
    ctx.initialize()
    print(f"Data directory: {ctx.data_dir}")
    print("=" * 60)

    default = ctx.accounts.get_default_account()
    try:
        strategy = ctx.accounts.create_account(
            AccountCreate(name="短线策略", account_type=AccountType.STRATEGY)
        )
        print(f"✓ Account '{strategy.name}' created")
    except ValidationError:
        strategy = next(a for a in ctx.accounts.list_accounts() if a.name == "短线策略")
        print(f"✓ Account '{strategy.name}' already exists")

    main_ids = asyncio.run(open_positions(ctx, default.account_id, STOCKS[:3]))
    swing_ids = asyncio.run(open_positions(ctx, strategy.account_id, STOCKS[3:]))

    # Top up one position and clear another
    if main_ids:
        ctx.ledger.execute_trade(main_ids[0], TradeCreate(
            txn_type=TransactionType.BUY,
            price=_jitter(STOCKS[0][1], 0.97, 1.02),
            quantity=Decimal("100"),
            emotion="抄底博反弹",
        ))
        print("✓ Added to first position")
    if swing_ids:
        position = ctx.ledger.get_position(swing_ids[-1])
        ctx.ledger.execute_trade(position.position_id, TradeCreate(
            txn_type=TransactionType.SELL,
            price=_jitter(position.cost_price, 1.02, 1.12),
            quantity=position.quantity,
            emotion="止盈落袋",
            reasons=["止盈"],
        ))
        print(f"✓ Cleared {position.symbol}")

    summary = asyncio.run(ctx.ledger.refresh_prices())
    print(f"✓ Refreshed {summary.updated} prices ({summary.skipped} skipped)")

    try:
        ctx.tags.add_tag(TagKind.REASON, "打新")
    except ValidationError:
        pass

    today = today_market()
    for offset in range(3):
        day = today - timedelta(days=offset)
        ctx.reviews.save_review(DailyReview(
            review_id=day.isoformat(),
            review_date=day,
            sections={"tomorrow_plan": {"strategy": "控制仓位，等待主线确认"}},
            summary=f"{day.isoformat()} 复盘",
        ))
    weekly = ctx.reviews.initialize_weekly_review(week_label_for(today))
    weekly.key_insight = "只做主线，不追高"
    ctx.reviews.save_weekly_review(weekly)
    print("✓ Journal entries written")

    # Summary
    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    for stats in ctx.analysis.all_account_stats():
        print(
            f"{stats.account_name}: {stats.position_count} positions, "
            f"cost {stats.total_cost}, value {stats.total_value}, profit {stats.total_profit}"
        )
    total = ctx.analysis.total_stats()
    print(f"{total.account_name}: profit {total.total_profit} ({total.profit_rate}%)")
    cleared = ctx.analysis.cleared_profit()
    if cleared:
        print(f"Realized: {cleared.total_profit} over {cleared.count} cleared positions")

    csv_path = ctx.csv_exporter.export_csv(str(ctx.data_dir / "exports" / "demo_positions.csv"))
    print(f"\n✓ CSV written to {csv_path}")
    ctx.close()


if __name__ == "__main__":
    try:
        generate_demo_data(sys.argv[1] if len(sys.argv) > 1 else None)
    except Exception as e:
        print(f"\n✗ Error: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)
