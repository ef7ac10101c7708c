import json
import re

from rapidfuzz import fuzz
from sqlalchemy.orm import Session

from health_index.config import settings
from health_index.models.biomarker import BiomarkerDefinition


def _normalize(text: str) -> str:
    return re.sub(r"[^a-z0-9]", "", text.lower())


def load_aliases(raw_aliases: str | None) -> list[str]:
    if not raw_aliases:
        return []
    try:
        parsed = json.loads(raw_aliases)
    except json.JSONDecodeError:
        return []
    if isinstance(parsed, list):
        return [str(item) for item in parsed]
    return []


def _candidate_labels(biomarker: BiomarkerDefinition) -> list[str]:
    labels = [biomarker.code, biomarker.display_name]
    labels.extend(load_aliases(biomarker.aliases))
    return labels


def _best_match(db: Session, label: str) -> tuple[BiomarkerDefinition | None, float]:
    label_norm = _normalize(label)
    best_score = -1.0
    best = None
    if not label_norm:
        return None, best_score

    for biomarker in db.query(BiomarkerDefinition).order_by(BiomarkerDefinition.id.asc()).all():
        for candidate in _candidate_labels(biomarker):
            score = fuzz.ratio(label_norm, _normalize(candidate))
            if score > best_score:
                best_score = score
                best = biomarker
    return best, best_score


def resolve_biomarker(db: Session, label: str, threshold: int | None = None) -> BiomarkerDefinition | None:
    """Map a free-form label (provider metric name, lab test name) to a biomarker definition."""
    score_threshold = threshold if threshold is not None else settings.resolver_fuzzy_threshold
    match, score = _best_match(db, label)
    if match is not None and score >= score_threshold:
        return match
    return None
