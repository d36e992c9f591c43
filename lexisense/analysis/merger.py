"""Combines per-chunk partial analyses into one AnalysisResult."""

from collections.abc import Callable, Hashable, Iterable, Sequence
from typing import TypeVar

from lexisense.analysis.models import AnalysisResult, KeyDate, PartialAnalysis, Party, Risk

T = TypeVar("T")


def merge(partials: Sequence[PartialAnalysis]) -> AnalysisResult:
    """Merge partials in chunk order.

    The first non-empty summary wins. Parties, dates and risks are unioned by
    composite key, keeping the first occurrence.
    """
    summary = next((p.summary for p in partials if p.summary.strip()), "")
    return AnalysisResult(
        summary=summary,
        parties=_dedupe((x for p in partials for x in p.parties), _party_key),
        dates=_dedupe((x for p in partials for x in p.dates), _date_key),
        risks=_dedupe((x for p in partials for x in p.risks), _risk_key),
    )


def _normalize(value: str) -> str:
    return value.strip().lower()


def _party_key(party: Party) -> tuple[str, str]:
    return _normalize(party.name), _normalize(party.role)


def _date_key(key_date: KeyDate) -> tuple[str, str]:
    return _normalize(key_date.label), key_date.date.strip()


def _risk_key(risk: Risk) -> tuple[str, str]:
    return _normalize(risk.severity), _normalize(risk.description)


def _dedupe(items: Iterable[T], key: Callable[[T], Hashable]) -> list[T]:
    seen: set[Hashable] = set()
    unique: list[T] = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        unique.append(item)
    return unique
