"""Consistency checks: recompute every aggregate from the ledgers and compare."""

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session, sessionmaker

from ..database import session_scope
from ..models import Ball, BallType, BattingStats, BowlingStats, Extra, Innings, Over, Wicket

logger = logging.getLogger(__name__)


class ConsistencyChecker:
    """Reconciles stored totals against the delivery, extras and wicket ledgers."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory

    def check(self, match_id: Optional[str] = None) -> Dict[str, Any]:
        """Run every check, optionally restricted to one match."""
        logger.info("Running consistency checks%s", f" for match {match_id}" if match_id else "")

        results: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": {},
        }

        with session_scope(self.session_factory) as session:
            stmt = select(Innings).order_by(Innings.match_id, Innings.innings_number)
            if match_id:
                stmt = stmt.where(Innings.match_id == match_id)
            innings_list = list(session.execute(stmt).scalars())

            results["checks"]["innings_totals"] = self._check_innings_totals(session, innings_list)
            results["checks"]["overs"] = self._check_overs(session, innings_list)
            results["checks"]["ball_numbering"] = self._check_ball_numbering(session, innings_list)
            results["checks"]["wicket_flags"] = self._check_wicket_flags(session, innings_list)
            results["checks"]["player_stats"] = self._check_player_stats(session, innings_list)

        results["innings_checked"] = len(innings_list)
        results["overall_score"] = self._calculate_score(results["checks"])
        results["consistent"] = all(not c["issues"] for c in results["checks"].values())

        logger.info("Consistency check completed. Overall score: %s", results["overall_score"])
        return results

    def _check_innings_totals(self, session: Session, innings_list: List[Innings]) -> Dict[str, Any]:
        """totalRuns, totalBalls and totalWickets against the ledgers."""
        issues = []

        for innings in innings_list:
            balls = list(session.execute(select(Ball).where(Ball.innings_id == innings.id)).scalars())
            extras = list(session.execute(select(Extra).where(Extra.innings_id == innings.id)).scalars())
            wickets = session.execute(
                select(func.count(Wicket.id)).where(Wicket.innings_id == innings.id)
            ).scalar()

            expected = {
                "total_runs": sum(b.runs for b in balls) + sum(e.runs for e in extras),
                "total_balls": sum(1 for b in balls if b.is_legal_delivery) + sum(1 for e in extras if e.extra_type.counts_as_ball),
                "total_wickets": wickets,
            }
            for field, value in expected.items():
                stored = getattr(innings, field)
                if stored != value:
                    issues.append({
                        "type": f"{field}_mismatch",
                        "innings_id": innings.id,
                        "stored": stored,
                        "expected": value,
                    })

        return {
            "total_innings": len(innings_list),
            "issues": issues,
            "quality_score": max(0, 100 - len(issues) * 10),
        }

    def _check_overs(self, session: Session, innings_list: List[Innings]) -> Dict[str, Any]:
        """Per-over counters against the deliveries and extras attached to them."""
        issues = []
        total = 0

        for innings in innings_list:
            overs = list(session.execute(select(Over).where(Over.innings_id == innings.id)).scalars())
            total += len(overs)
            for over in overs:
                balls = list(session.execute(select(Ball).where(Ball.over_id == over.id)).scalars())
                extras = list(session.execute(select(Extra).where(Extra.over_id == over.id)).scalars())

                expected = {
                    "legal_balls": sum(1 for b in balls if b.is_legal_delivery)
                    + sum(1 for e in extras if e.extra_type.counts_as_ball),
                    "illegal_balls": sum(1 for b in balls if not b.is_legal_delivery),
                    "runs": sum(b.runs for b in balls) + sum(e.runs for e in extras),
                }
                for field, value in expected.items():
                    stored = getattr(over, field)
                    if stored != value:
                        issues.append({
                            "type": f"over_{field}_mismatch",
                            "innings_id": innings.id,
                            "over_number": over.over_number,
                            "stored": stored,
                            "expected": value,
                        })

        return {
            "total_overs": total,
            "issues": issues,
            "quality_score": max(0, 100 - len(issues) * 10),
        }

    def _check_ball_numbering(self, session: Session, innings_list: List[Innings]) -> Dict[str, Any]:
        """Ball numbers within an over must be unique and positive."""
        issues = []

        for innings in innings_list:
            duplicates = session.execute(
                select(Ball.over_id, Ball.ball_number, func.count(Ball.id))
                .where(Ball.innings_id == innings.id)
                .group_by(Ball.over_id, Ball.ball_number)
                .having(func.count(Ball.id) > 1)
            ).fetchall()
            if duplicates:
                issues.append({
                    "type": "duplicate_ball_numbers",
                    "innings_id": innings.id,
                    "count": len(duplicates),
                    "details": [{"over_id": over_id, "ball_number": number, "count": count}
                                for over_id, number, count in duplicates],
                })

            invalid = session.execute(
                select(func.count(Ball.id)).where(Ball.innings_id == innings.id, Ball.ball_number < 1)
            ).scalar()
            if invalid > 0:
                issues.append({"type": "invalid_ball_numbers", "innings_id": innings.id, "count": invalid})

        return {
            "issues": issues,
            "quality_score": max(0, 100 - len(issues) * 10),
        }

    def _check_wicket_flags(self, session: Session, innings_list: List[Innings]) -> Dict[str, Any]:
        """``Ball.is_wicket`` must be set exactly on the balls a wicket references."""
        issues = []

        for innings in innings_list:
            wicket_ball_ids = set(
                session.execute(select(Wicket.ball_id).where(Wicket.innings_id == innings.id)).scalars()
            )
            flagged_ids = set(
                session.execute(
                    select(Ball.id).where(Ball.innings_id == innings.id, Ball.is_wicket.is_(True))
                ).scalars()
            )
            if flagged_ids - wicket_ball_ids:
                issues.append({
                    "type": "flagged_without_wicket",
                    "innings_id": innings.id,
                    "ball_ids": sorted(flagged_ids - wicket_ball_ids),
                })
            if wicket_ball_ids - flagged_ids:
                issues.append({
                    "type": "wicket_on_unflagged_ball",
                    "innings_id": innings.id,
                    "ball_ids": sorted(wicket_ball_ids - flagged_ids),
                })

        return {
            "issues": issues,
            "quality_score": max(0, 100 - len(issues) * 10),
        }

    def _check_player_stats(self, session: Session, innings_list: List[Innings]) -> Dict[str, Any]:
        """Batting and bowling tallies against the deliveries and wickets."""
        issues = []

        for innings in innings_list:
            batting = defaultdict(lambda: {"balls_faced": 0, "runs": 0, "fours": 0, "sixes": 0})
            bowling = defaultdict(lambda: {"balls": 0, "runs": 0, "wickets": 0})

            for ball in session.execute(select(Ball).where(Ball.innings_id == innings.id)).scalars():
                if ball.ball_type != BallType.WIDE:
                    tally = batting[ball.striker_player_id]
                    tally["balls_faced"] += 1
                    tally["runs"] += ball.runs
                    tally["fours"] += 1 if ball.runs == 4 else 0
                    tally["sixes"] += 1 if ball.runs == 6 else 0
                figures = bowling[ball.bowler_id]
                figures["balls"] += 1 if ball.is_legal_delivery else 0
                figures["runs"] += ball.runs

            for bowler_id in session.execute(
                select(Wicket.bowler_id).where(Wicket.innings_id == innings.id)
            ).scalars():
                bowling[bowler_id]["wickets"] += 1

            issues.extend(self._compare_rows(session, BattingStats, innings.id, batting, "batting"))
            issues.extend(self._compare_rows(session, BowlingStats, innings.id, bowling, "bowling"))

        return {
            "issues": issues,
            "quality_score": max(0, 100 - len(issues) * 10),
        }

    def _compare_rows(self, session: Session, model, innings_id: str, expected: Dict[str, Dict[str, int]], kind: str):
        issues = []
        rows = {
            row.player_id: row
            for row in session.execute(select(model).where(model.innings_id == innings_id)).scalars()
        }

        for player_id, tally in expected.items():
            row = rows.get(player_id)
            if row is None:
                if any(tally.values()):
                    issues.append({"type": f"missing_{kind}_row", "innings_id": innings_id, "player_id": player_id})
                continue
            for field, value in tally.items():
                if getattr(row, field) != value:
                    issues.append({
                        "type": f"{kind}_{field}_mismatch",
                        "innings_id": innings_id,
                        "player_id": player_id,
                        "stored": getattr(row, field),
                        "expected": value,
                    })

        # Rows with tallies but no supporting ledger entries at all
        for player_id, row in rows.items():
            if player_id not in expected and any(getattr(row, field) for field in _tally_fields(kind)):
                issues.append({"type": f"orphan_{kind}_tally", "innings_id": innings_id, "player_id": player_id})

        return issues

    def _calculate_score(self, checks: Dict[str, Any]) -> float:
        """Average of the per-check scores."""
        if not checks:
            return 100.0
        scores = [check.get("quality_score", 0) for check in checks.values()]
        return round(sum(scores) / len(scores), 2)


def _tally_fields(kind: str) -> List[str]:
    if kind == "batting":
        return ["balls_faced", "runs", "fours", "sixes"]
    return ["balls", "runs", "wickets"]
