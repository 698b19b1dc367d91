"""Rendus du rapport d'execution.

Ce module fournit les implementations de ReportRenderer pour
afficher un RunReport en tableau console, JSON ou CSV.
"""

import csv
import io
import json
from abc import ABC, abstractmethod

from dhcp_scope_sync.scopes.report import RunReport


class ReportRenderer(ABC):
    """Interface pour les rendus de rapport."""

    @abstractmethod
    def render(self, report: RunReport) -> str:
        """Genere le rendu du rapport.

        Args:
            report: Rapport d'execution.

        Returns:
            Rapport formate.
        """
        pass


class ConsoleTableRenderer(ReportRenderer):
    """Rapport en tableau formate pour la console."""

    COLUMNS = [
        ("Name", 20),
        ("ScopeId", 16),
        ("Status", 12),
        ("Details", 0),
    ]

    def render(self, report: RunReport) -> str:
        """Genere un tableau des resultats suivi du decompte."""
        header = "".join(
            name.ljust(width) for name, width in self.COLUMNS
        ).rstrip()
        sep = "-" * 80
        lines = [header, sep]

        if not len(report):
            lines.append("Aucune declaration")
        for outcome in report:
            lines.append(
                (outcome.name or "(sans nom)")[:19].ljust(20)
                + (outcome.scope_id or "-").ljust(16)
                + str(outcome.status).ljust(12)
                + outcome.details
            )
            for warning in outcome.warnings:
                lines.append(" " * 48 + f"! {warning}")

        lines.append(sep)
        lines.append(
            " | ".join(
                f"{status} : {count}"
                for status, count in report.tally().items()
            )
        )
        return "\n".join(lines) + "\n"


class JsonRenderer(ReportRenderer):
    """Rapport au format JSON."""

    def render(self, report: RunReport) -> str:
        """Genere le rapport JSON (resultats et decompte)."""
        return json.dumps(
            {
                "outcomes": report.to_list(),
                "tally": {
                    str(status): count
                    for status, count in report.tally().items()
                },
            },
            indent=2,
            ensure_ascii=False,
        )


class CsvRenderer(ReportRenderer):
    """Rapport au format CSV, une ligne par declaration."""

    FIELDNAMES = ["name", "scope_id", "status", "details", "warnings"]

    def render(self, report: RunReport) -> str:
        """Genere le contenu CSV."""
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(self.FIELDNAMES)
        for outcome in report:
            writer.writerow([
                outcome.name,
                outcome.scope_id,
                str(outcome.status),
                outcome.details,
                " | ".join(outcome.warnings),
            ])
        return output.getvalue()


RENDERERS = {
    "table": ConsoleTableRenderer,
    "json": JsonRenderer,
    "csv": CsvRenderer,
}
