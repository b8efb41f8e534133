"""
Report generators for challenge results.

Formats a ChallengeReport for console, JSON, and CSV output.
"""

import json
from pathlib import Path

from runchallenge.shared.constants import ConsistencyLabel
from runchallenge.shared.formatters import (
    format_day,
    format_distance_km,
    format_inactive_days,
    format_percent,
)

from . import export
from .models import Journey
from .service import ChallengeReport


class ReportGenerator:
    """Generate reports in various formats."""

    def __init__(self, active_day_threshold: int):
        self.active_day_threshold = active_day_threshold

    def generate_console(self, report: ChallengeReport, top: int = 10) -> str:
        """Generate ASCII report for console output."""
        s = report.summary
        lines = [
            "",
            "=" * 70,
            "                    RUN CHALLENGE REPORT",
            "=" * 70,
            "",
            f"Date:           {report.today.isoformat()} ({report.phase.value}, "
            f"{report.days_remaining} days remaining)",
            f"Participants:   {s.participant_count}",
            f"Runners:        {s.unique_runners}",
            f"Approved runs:  {s.total_runs} (pending: {s.pending_runs}, rejected: {s.rejected_runs})",
            f"Total distance: {format_distance_km(s.total_distance_km)}",
            f"Finishers:      {len(report.finishers)}",
        ]
        if report.orphan_count:
            lines.append(f"Unregistered:   {report.orphan_count} runners not on the roster")
        if report.warnings:
            lines.append(f"Data warnings:  {len(report.warnings)}")

        lines.extend(self._section("LEADERBOARD"))
        lines.append("Rank | Name                      | Station              | Distance")
        lines.append("-----|---------------------------|----------------------|-----------")
        for item in report.leaderboard[:top]:
            e = item.entry
            lines.append(
                f"{item.rank:>4} | {e.name[:25]:<25} | {e.station[:20]:<20} | "
                f"{format_distance_km(e.total_distance_km):>10}"
            )

        lines.extend(self._section("STATION PERFORMANCE"))
        lines.append("Rank | Station              | Score  | Finishers | Distance")
        lines.append("-----|----------------------|--------|-----------|-----------")
        for item in report.station_board:
            st = item.entry
            lines.append(
                f"{item.rank:>4} | {st.station[:20]:<20} | {format_percent(st.performance_percent):>6} | "
                f"{st.finisher_count:>9} | {format_distance_km(st.total_distance_km):>10}"
            )

        lines.extend(self._section("100K FINISHERS"))
        if not report.finishers:
            lines.append("No finishers yet.")
        for item in report.finishers:
            f = item.entry
            lines.append(
                f"{item.rank:>4}. {f.participant.name} - {format_day(f.completion.completion_date)} "
                f"({f.completion.active_days_to_complete} active days)"
            )

        lines.extend(self._section("CONSISTENCY"))
        for item in report.consistency[:top]:
            r = item.result
            if r.label == ConsistencyLabel.INACTIVE:
                status = format_inactive_days(r.inactive_day_count)
            else:
                status = r.label.value.capitalize()
            lines.append(f"{item.participant.name[:25]:<25} | streak {r.streak:>3} | {status}")

        lines.append("")
        return "\n".join(lines)

    def generate_journey(self, trip: Journey) -> str:
        """Console view of one participant's journey."""
        lines = [
            "",
            f"Journey: {trip.name} (#{trip.service_number})",
            "-" * 40,
        ]
        for entry in trip.log:
            lines.append(
                f"{format_day(entry.date)}  +{entry.distance_km:>6.2f}  = {entry.cumulative_km:>7.2f} km"
            )
        status = "completed" if trip.completed else "in progress"
        lines.append("-" * 40)
        lines.append(
            f"Total {format_distance_km(trip.total_distance_km)} over {trip.active_days} active days ({status})"
        )
        return "\n".join(lines)

    def generate_json(self, report: ChallengeReport) -> dict:
        """Generate JSON-serialisable report."""
        return report.to_dict()

    def save_json(self, report: ChallengeReport, output_dir: str | Path) -> Path:
        path = Path(output_dir) / f"challenge_report_{report.today.isoformat()}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.generate_json(report), indent=2, ensure_ascii=False), encoding="utf-8")
        return path

    def save_csv(self, report: ChallengeReport, output_dir: str | Path) -> list[Path]:
        """Write one CSV per board."""
        output_dir = Path(output_dir)
        return [
            export.write_csv(export.leaderboard_rows(report.leaderboard), output_dir / "leaderboard.csv"),
            export.write_csv(
                export.active_days_rows(report.active_days_board, self.active_day_threshold),
                output_dir / "active_days_report.csv",
            ),
            export.write_csv(export.station_rows(report.station_board), output_dir / "stations.csv"),
            export.write_csv(export.finisher_rows(report.finishers), output_dir / "finishers.csv"),
            export.write_csv(export.consistency_rows(report.consistency), output_dir / "consistency.csv"),
        ]

    @staticmethod
    def _section(title: str) -> list[str]:
        return ["", "-" * 70, f"  {title}", "-" * 70]
