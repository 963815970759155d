"""Read-side reports for the Courtside substitution tracker."""

from __future__ import annotations

import csv
import datetime as dt
import io
from typing import List, Optional, Protocol

from ..models import Game, GameReport, PeriodSummary, PlayerTimeSummary
from ..utils import Clock, GAME_STATE_LABELS, fmt_mmss
from .ledger import SubstitutionLedger
from .persistence_service import Repository


class ExportServiceInterface(Protocol):
    """Interface for data export - supports ISP."""

    def export_to_csv(self, report: GameReport) -> str:
        """Export report to CSV format."""
        ...


class GameReportExporter:
    """Render a :class:`GameReport` as a CSV document."""

    def export_to_csv(self, report: GameReport) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")

        generated_dt = dt.datetime.fromtimestamp(report.generated_ts)
        writer.writerow(["Courtside Game Report"])
        writer.writerow(["Game", report.game_id])
        writer.writerow(["Generated", generated_dt.isoformat(timespec="seconds")])
        writer.writerow(["State", GAME_STATE_LABELS.get(report.state, report.state)])
        writer.writerow(["Elapsed", fmt_mmss(report.elapsed_seconds)])
        writer.writerow(["Periods", len(report.periods)])
        writer.writerow([])

        writer.writerow(["Name", "Number", "On Court", "Appearances", "Playing Time", "Seconds", "MVP"])
        for summary in report.players:
            writer.writerow(
                [
                    summary.name,
                    summary.number,
                    "yes" if summary.on_court else "no",
                    summary.appearances,
                    fmt_mmss(summary.total_seconds),
                    round(summary.total_seconds, 1),
                    "yes" if summary.is_mvp else "",
                ]
            )

        csv_text = buffer.getvalue()
        buffer.close()
        return csv_text


class ReportService:
    """
    Build live snapshots of a game for display.

    Reports are computed from a copy of the stored game without taking the
    game lock, so they may lag a concurrent update but never show a
    half-applied one.
    """

    def __init__(
        self,
        repository: Repository,
        clock: Optional[Clock] = None,
        ledger: Optional[SubstitutionLedger] = None,
        export_service: Optional[ExportServiceInterface] = None,
    ) -> None:
        self.repository = repository
        self.clock = clock or Clock()
        self.ledger = ledger or SubstitutionLedger()
        self.export_service = export_service or GameReportExporter()

    def build_game_report(self, game_id: int) -> GameReport:
        game = self.repository.load_game(game_id)
        return self.report_for(game)

    def report_for(self, game: Game) -> GameReport:
        """Build a :class:`GameReport` snapshot for an already loaded game."""
        now = self.clock.now()
        totals = self.ledger.game_totals(game, as_of=now)

        on_court = set()
        running = game.running_period()
        if running is not None:
            on_court = self.ledger.on_court(running)

        players: List[PlayerTimeSummary] = []
        for player in self.repository.list_players():
            player_totals = totals.get(player.id)
            players.append(
                PlayerTimeSummary(
                    player_id=player.id,
                    name=player.name,
                    number=player.number,
                    on_court=player.id in on_court,
                    appearances=player_totals.appearances if player_totals else 0,
                    total_seconds=player_totals.seconds if player_totals else 0.0,
                    is_mvp=player.id == game.mvp_player_id,
                )
            )

        periods = [
            PeriodSummary(
                index=p.index,
                status=p.status.value,
                start_ts=p.start_ts,
                end_ts=p.end_ts,
                elapsed_seconds=p.elapsed(now),
            )
            for p in game.periods
        ]

        return GameReport(
            generated_ts=now,
            game_id=game.id,
            state=game.state,
            start_ts=game.start_ts,
            end_ts=game.end_ts,
            elapsed_seconds=game.elapsed(now),
            current_period=running.index if running is not None else None,
            current_period_seconds=running.elapsed(now) if running is not None else 0.0,
            mvp_player_id=game.mvp_player_id,
            finalized=game.finalized,
            periods=periods,
            players=players,
        )

    def export_game_report_csv(self, game_id: int) -> str:
        return self.export_service.export_to_csv(self.build_game_report(game_id))
