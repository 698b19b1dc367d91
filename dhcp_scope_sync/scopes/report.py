"""Rapport d'execution d'une reconciliation.

Ce module definit RunReport, sequence immuable des resultats par
declaration (dans l'ordre d'entree), et RunReportBuilder, seul
accumulateur alimente par la boucle de reconciliation.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple

from dhcp_scope_sync.scopes.models import ScopeOutcome, ScopeStatus

_FAILURE_STATUSES = (ScopeStatus.INVALID, ScopeStatus.ERROR)


@dataclass(frozen=True)
class RunReport:
    """Resultats ordonnes d'une execution.

    Attributes:
        outcomes: Un resultat par declaration, ordre d'entree.
    """

    outcomes: Tuple[ScopeOutcome, ...] = ()

    def __iter__(self) -> Iterator[ScopeOutcome]:
        return iter(self.outcomes)

    def __len__(self) -> int:
        return len(self.outcomes)

    def tally(self) -> Dict[ScopeStatus, int]:
        """Compte les resultats par statut (zeros inclus)."""
        counts = {status: 0 for status in ScopeStatus}
        for outcome in self.outcomes:
            counts[outcome.status] += 1
        return counts

    @property
    def has_failures(self) -> bool:
        """True si au moins un scope est invalide ou en erreur."""
        return any(o.status in _FAILURE_STATUSES for o in self.outcomes)

    def summary(self) -> str:
        """Resume d'une ligne, ex: ``Applied=2 Invalid=1 ...``."""
        return " ".join(
            f"{status}={count}" for status, count in self.tally().items()
        )

    def to_list(self) -> List[dict]:
        """Serialise les resultats en liste de dictionnaires."""
        return [o.to_dict() for o in self.outcomes]


class RunReportBuilder:
    """Accumulateur des resultats d'une execution."""

    def __init__(self) -> None:
        self._outcomes: List[ScopeOutcome] = []

    def add(self, outcome: ScopeOutcome) -> None:
        """Ajoute le resultat d'une declaration."""
        self._outcomes.append(outcome)

    def build(self) -> RunReport:
        """Fige les resultats en un RunReport immuable."""
        return RunReport(outcomes=tuple(self._outcomes))
