#!/usr/bin/env python3
"""Recompute per-hero player stats (win rate, MAWP, trend) from match history.

Run after new matches are loaded into player_match_history. MAWP decays
with time, so a periodic rerun keeps stored values current.

Usage:
    python backend/scripts/recompute_mawp.py data/hots_fever.duckdb
    python backend/scripts/recompute_mawp.py data/hots_fever.duckdb --battletag Alice#1234
    python backend/scripts/recompute_mawp.py data/hots_fever.duckdb --init
"""
import argparse
import logging
from pathlib import Path

from hots_fever.repositories.draft_data_repository import DraftDataRepository

logger = logging.getLogger("recompute_mawp")


def recompute(database_path: Path, battletags: list[str] | None = None, init: bool = False) -> int:
    """Recompute stats for the given battletags (default: all). Returns players processed."""
    repo = DraftDataRepository(database_path, read_only=False)
    if init:
        repo.ensure_schema()
        logger.info(f"Schema ready in {database_path}")

    targets = battletags or repo.list_battletags()
    if not targets:
        logger.warning("No battletags with match history; nothing to do")
        return 0

    for battletag in targets:
        summaries = repo.recompute_player_hero_stats(battletag)
        best = summaries[0] if summaries else None
        if best:
            logger.info(
                f"{battletag}: {len(summaries)} heroes, most played {best.hero} "
                f"({best.games} games, MAWP {best.mawp * 100:.1f}%)"
            )
    return len(targets)


def main():
    parser = argparse.ArgumentParser(description="Recompute player hero stats and MAWP")
    parser.add_argument("database", type=Path, help="Path to the DuckDB stats database")
    parser.add_argument("--battletag", action="append", dest="battletags",
                        help="Battletag to recompute (repeatable, default: all)")
    parser.add_argument("--init", action="store_true", help="Create missing tables first")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(message)s")
    count = recompute(args.database, args.battletags, args.init)
    print(f"Recomputed stats for {count} player(s)")


if __name__ == "__main__":
    main()
