"""DuckDB-based data access for draft statistics.

Rates are stored as percentages (0-100) and converted to fractions when a
DraftData bundle is built. Hero names are normalized on the way out so the
engine only ever sees canonical roster names.
"""

import logging
from collections import defaultdict
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

import duckdb
import pandas as pd

from hots_fever.models.competency import HeroRecord, MapRecord, PlayerData
from hots_fever.models.draft import SkillTier
from hots_fever.models.draft_data import (
    DraftData,
    HeroStat,
    PairStat,
    PlayerHeroStat,
    PlayerMapStat,
)
from hots_fever.models.match import MatchRecord
from hots_fever.services.mawp import HeroMatchSummary, summarize_hero_matches
from hots_fever.utils.hero_names import normalize_hero_name

logger = logging.getLogger(__name__)

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS hero_stats (
        hero VARCHAR NOT NULL,
        skill_tier VARCHAR NOT NULL,
        games INTEGER NOT NULL DEFAULT 0,
        wins INTEGER NOT NULL DEFAULT 0,
        win_rate DOUBLE,
        pick_rate DOUBLE DEFAULT 0,
        ban_rate DOUBLE DEFAULT 0,
        PRIMARY KEY (hero, skill_tier)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS hero_map_stats (
        hero VARCHAR NOT NULL,
        map VARCHAR NOT NULL,
        skill_tier VARCHAR NOT NULL,
        games INTEGER NOT NULL DEFAULT 0,
        wins INTEGER NOT NULL DEFAULT 0,
        win_rate DOUBLE,
        PRIMARY KEY (hero, map, skill_tier)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS hero_pairwise_stats (
        hero_a VARCHAR NOT NULL,
        hero_b VARCHAR NOT NULL,
        relationship VARCHAR NOT NULL,
        skill_tier VARCHAR NOT NULL,
        games INTEGER NOT NULL DEFAULT 0,
        wins INTEGER NOT NULL DEFAULT 0,
        win_rate DOUBLE,
        PRIMARY KEY (hero_a, hero_b, relationship, skill_tier)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS player_match_history (
        battletag VARCHAR NOT NULL,
        replay_id VARCHAR NOT NULL,
        hero VARCHAR NOT NULL,
        map VARCHAR NOT NULL,
        win BOOLEAN NOT NULL,
        game_date TIMESTAMP NOT NULL,
        PRIMARY KEY (battletag, replay_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS player_hero_stats (
        battletag VARCHAR NOT NULL,
        hero VARCHAR NOT NULL,
        games INTEGER NOT NULL DEFAULT 0,
        wins INTEGER NOT NULL DEFAULT 0,
        win_rate DOUBLE,
        mawp DOUBLE,
        recent_win_rate DOUBLE,
        trend DOUBLE,
        PRIMARY KEY (battletag, hero)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS player_hero_map_stats (
        battletag VARCHAR NOT NULL,
        hero VARCHAR NOT NULL,
        map VARCHAR NOT NULL,
        games INTEGER NOT NULL DEFAULT 0,
        wins INTEGER NOT NULL DEFAULT 0,
        win_rate DOUBLE,
        PRIMARY KEY (battletag, hero, map)
    )
    """,
]


def _pct(value: Optional[float]) -> Optional[float]:
    return None if value is None else value / 100


def _round1(value: float) -> float:
    return round(value, 1)


class DraftDataRepository:
    """Data access layer - DuckDB queries against a stats database file."""

    def __init__(self, database_path: Union[str, Path], read_only: bool = True):
        """Initialize with path to the DuckDB database.

        Args:
            database_path: Path to the .duckdb file.
            read_only: Open connections read-only. Writers (schema creation,
                MAWP recompute) need read_only=False.

        Raises:
            FileNotFoundError: If the database doesn't exist in read-only mode.
        """
        self._db_path = Path(database_path)
        self._read_only = read_only

        if read_only and not self._db_path.exists():
            raise FileNotFoundError(
                f"DuckDB database not found: {self._db_path}\n"
                f"Run: python backend/scripts/recompute_mawp.py --init {self._db_path}"
            )
        logger.info(f"DraftDataRepository: using {self._db_path} (read_only={read_only})")

    @property
    def database_path(self) -> Path:
        return self._db_path

    def _connect(self) -> duckdb.DuckDBPyConnection:
        return duckdb.connect(str(self._db_path), read_only=self._read_only)

    def _query(self, sql: str, params: Optional[list] = None) -> list[dict]:
        """Execute a query and return rows as dicts, with NULL/NaN as None."""
        with self._connect() as conn:
            df = conn.execute(sql, params or []).df()
        df = df.astype(object).where(pd.notna(df), None)
        return df.to_dict(orient="records")

    def ensure_schema(self) -> None:
        """Create any missing tables."""
        with self._connect() as conn:
            for statement in SCHEMA:
                conn.execute(statement)

    # ------------------------------------------------------------------
    # Draft bundle
    # ------------------------------------------------------------------

    def get_draft_data(
        self,
        tier: Union[SkillTier, str],
        map_name: Optional[str],
        battletags: list[str],
    ) -> DraftData:
        """Build the DraftData bundle for one tier, map and roster."""
        tier_value = SkillTier(tier).value
        return DraftData(
            hero_stats=self._load_hero_stats(tier_value),
            hero_map_stats=self._load_hero_map_stats(tier_value, map_name) if map_name else {},
            synergies=self._load_pairwise(tier_value, "with"),
            counters=self._load_pairwise(tier_value, "against"),
            player_stats={bt: self._load_player_hero_stats(bt) for bt in battletags},
            player_map_stats={
                bt: self._load_player_map_stats(bt, map_name) if map_name else {}
                for bt in battletags
            },
        )

    def _load_hero_stats(self, tier: str) -> dict[str, HeroStat]:
        rows = self._query(
            "SELECT hero, games, win_rate, pick_rate, ban_rate FROM hero_stats WHERE skill_tier = ?",
            [tier],
        )
        stats = {}
        for row in rows:
            if row["win_rate"] is None:
                logger.warning(f"Skipping hero_stats row without win rate: {row['hero']} ({tier})")
                continue
            stats[normalize_hero_name(row["hero"])] = HeroStat(
                win_rate=_pct(row["win_rate"]),
                pick_rate=_pct(row["pick_rate"]) or 0.0,
                ban_rate=_pct(row["ban_rate"]) or 0.0,
                games=int(row["games"]),
            )
        return stats

    def _load_hero_map_stats(self, tier: str, map_name: str) -> dict[str, PairStat]:
        rows = self._query(
            "SELECT hero, games, win_rate FROM hero_map_stats WHERE skill_tier = ? AND map = ?",
            [tier, map_name],
        )
        return {
            normalize_hero_name(row["hero"]): PairStat(_pct(row["win_rate"]), int(row["games"]))
            for row in rows
            if row["win_rate"] is not None
        }

    def _load_pairwise(self, tier: str, relationship: str) -> dict[str, dict[str, PairStat]]:
        """Load synergy ("with") or counter ("against") rows as a nested mapping.

        Synergy rows are mirrored. A counter row for (a, b) also fills
        (b, a) with 100 - win_rate unless (b, a) has its own row.
        """
        rows = self._query(
            """
            SELECT hero_a, hero_b, games, win_rate
            FROM hero_pairwise_stats
            WHERE skill_tier = ? AND relationship = ?
            """,
            [tier, relationship],
        )

        explicit: dict[str, dict[str, PairStat]] = defaultdict(dict)
        for row in rows:
            if row["win_rate"] is None:
                logger.warning(
                    f"Skipping {relationship} row without win rate: "
                    f"{row['hero_a']} / {row['hero_b']} ({tier})"
                )
                continue
            hero_a = normalize_hero_name(row["hero_a"])
            hero_b = normalize_hero_name(row["hero_b"])
            explicit[hero_a][hero_b] = PairStat(_pct(row["win_rate"]), int(row["games"]))

        result: dict[str, dict[str, PairStat]] = defaultdict(dict)
        for hero_a, opponents in explicit.items():
            for hero_b, stat in opponents.items():
                result[hero_a][hero_b] = stat
                if hero_b in explicit and hero_a in explicit[hero_b]:
                    continue
                if relationship == "with":
                    result[hero_b][hero_a] = stat
                else:
                    mirrored = _round1(100 - stat.win_rate * 100)
                    result[hero_b][hero_a] = PairStat(_pct(mirrored), stat.games)
        return dict(result)

    def _load_player_hero_stats(self, battletag: str) -> dict[str, PlayerHeroStat]:
        rows = self._query(
            "SELECT hero, games, wins, win_rate, mawp FROM player_hero_stats WHERE battletag = ?",
            [battletag],
        )
        stats = {}
        for row in rows:
            if row["win_rate"] is None:
                logger.warning(f"Skipping player_hero_stats row without win rate: {battletag} {row['hero']}")
                continue
            stats[normalize_hero_name(row["hero"])] = PlayerHeroStat(
                games=int(row["games"]),
                wins=int(row["wins"]),
                win_rate=_pct(row["win_rate"]),
                mawp=_pct(row["mawp"]),
            )
        return stats

    def _load_player_map_stats(self, battletag: str, map_name: str) -> dict[str, PlayerMapStat]:
        rows = self._query(
            """
            SELECT hero, games, win_rate FROM player_hero_map_stats
            WHERE battletag = ? AND map = ?
            """,
            [battletag, map_name],
        )
        return {
            normalize_hero_name(row["hero"]): PlayerMapStat(_pct(row["win_rate"]), int(row["games"]))
            for row in rows
            if row["win_rate"] is not None
        }

    # ------------------------------------------------------------------
    # Player data
    # ------------------------------------------------------------------

    def get_player_data(self, battletag: str) -> Optional[PlayerData]:
        """Hero and map records for a player (percent win rates), or None if unknown."""
        hero_rows = self._query(
            """
            SELECT hero, games, wins, win_rate FROM player_hero_stats
            WHERE battletag = ?
            ORDER BY games DESC, hero
            """,
            [battletag],
        )
        if not hero_rows:
            return None

        map_rows = self._query(
            """
            SELECT map, hero, games, win_rate FROM player_hero_map_stats
            WHERE battletag = ?
            ORDER BY map, games DESC, hero
            """,
            [battletag],
        )
        by_map: dict[str, list[HeroRecord]] = defaultdict(list)
        for row in map_rows:
            if row["win_rate"] is None:
                continue
            by_map[row["map"]].append(
                HeroRecord(normalize_hero_name(row["hero"]), float(row["win_rate"]), int(row["games"]))
            )

        hero_stats = [
            HeroRecord(normalize_hero_name(row["hero"]), float(row["win_rate"]), int(row["games"]))
            for row in hero_rows
            if row["win_rate"] is not None
        ]
        total_games = sum(int(row["games"]) for row in hero_rows)
        total_wins = sum(int(row["wins"]) for row in hero_rows)

        return PlayerData(
            hero_stats=hero_stats,
            map_stats=[MapRecord(map=name, heroes=heroes) for name, heroes in by_map.items()],
            total_games=total_games,
            overall_win_rate=_round1(total_wins / total_games * 100) if total_games else 0.0,
        )

    def get_player_matches(self, battletag: str, hero: Optional[str] = None) -> list[MatchRecord]:
        """A player's match outcomes, newest first, optionally for one hero."""
        rows = self._query(
            """
            SELECT hero, win, game_date FROM player_match_history
            WHERE battletag = ?
            ORDER BY game_date DESC
            """,
            [battletag],
        )
        wanted = normalize_hero_name(hero) if hero else None
        return [
            MatchRecord(win=bool(row["win"]), game_date=pd.Timestamp(row["game_date"]).to_pydatetime())
            for row in rows
            if wanted is None or normalize_hero_name(row["hero"]) == wanted
        ]

    def recompute_player_hero_stats(
        self, battletag: str, now: Optional[datetime] = None
    ) -> list[HeroMatchSummary]:
        """Rebuild player_hero_stats and player_hero_map_stats from match history.

        Requires a writable repository. Returns the per-hero summaries that
        were written, sorted by games descending.
        """
        rows = self._query(
            "SELECT hero, map, win, game_date FROM player_match_history WHERE battletag = ?",
            [battletag],
        )

        by_hero: dict[str, list[MatchRecord]] = defaultdict(list)
        by_hero_map: dict[tuple[str, str], list[bool]] = defaultdict(list)
        for row in rows:
            hero = normalize_hero_name(row["hero"])
            win = bool(row["win"])
            by_hero[hero].append(
                MatchRecord(win=win, game_date=pd.Timestamp(row["game_date"]).to_pydatetime())
            )
            by_hero_map[(hero, row["map"])].append(win)

        summaries = [summarize_hero_matches(hero, matches, now) for hero, matches in by_hero.items()]
        summaries.sort(key=lambda s: (-s.games, s.hero))

        with self._connect() as conn:
            # Old rows stay in place unless every insert succeeds
            conn.begin()
            try:
                conn.execute("DELETE FROM player_hero_stats WHERE battletag = ?", [battletag])
                conn.execute("DELETE FROM player_hero_map_stats WHERE battletag = ?", [battletag])
                for s in summaries:
                    conn.execute(
                        "INSERT INTO player_hero_stats VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                        [
                            battletag,
                            s.hero,
                            s.games,
                            s.wins,
                            _round1(s.win_rate * 100),
                            _round1(s.mawp * 100),
                            _round1(s.recent_win_rate * 100) if s.recent_win_rate is not None else None,
                            _round1(s.trend * 100) if s.trend is not None else None,
                        ],
                    )
                for (hero, map_name), outcomes in by_hero_map.items():
                    wins = sum(outcomes)
                    conn.execute(
                        "INSERT INTO player_hero_map_stats VALUES (?, ?, ?, ?, ?, ?)",
                        [battletag, hero, map_name, len(outcomes), wins, _round1(wins / len(outcomes) * 100)],
                    )
            except Exception:
                conn.rollback()
                logger.error(f"Recompute failed for {battletag}; kept previous stats")
                raise
            conn.commit()

        logger.info(f"Recomputed {len(summaries)} hero stats for {battletag} from {len(rows)} matches")
        return summaries

    def list_maps(self) -> list[str]:
        """Maps with hero-map stats, alphabetically."""
        rows = self._query("SELECT DISTINCT map FROM hero_map_stats ORDER BY map")
        return [row["map"] for row in rows]

    def list_battletags(self) -> list[str]:
        """Battletags with stored match history."""
        rows = self._query("SELECT DISTINCT battletag FROM player_match_history ORDER BY battletag")
        return [row["battletag"] for row in rows]
