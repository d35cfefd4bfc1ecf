"""
PR Classifier
Decides which record categories a candidate entry breaks

Runs against one exercise's prior entries just before a new entry is
submitted. The result is only used to present the entry; classifying never
persists anything.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, List

from .models import PrEntry


class RecordKind(str, Enum):
    """Record categories an entry can break"""
    WEIGHT = "weight"
    REPS = "reps"
    VOLUME = "volume"


@dataclass
class PreviousBest:
    weight: float = 0.0
    reps: int = 0
    volume: float = 0.0


@dataclass
class PrClassification:
    is_weight_pr: bool
    is_rep_pr: bool
    is_volume_pr: bool
    previous_best: PreviousBest = field(default_factory=PreviousBest)

    @property
    def kinds(self) -> List[RecordKind]:
        flags = (
            (RecordKind.WEIGHT, self.is_weight_pr),
            (RecordKind.REPS, self.is_rep_pr),
            (RecordKind.VOLUME, self.is_volume_pr),
        )
        return [kind for kind, hit in flags if hit]

    @property
    def is_any_pr(self) -> bool:
        return bool(self.kinds)

    def to_dict(self) -> Dict:
        return {
            'is_weight_pr': self.is_weight_pr,
            'is_rep_pr': self.is_rep_pr,
            'is_volume_pr': self.is_volume_pr,
            'is_any_pr': self.is_any_pr,
            'kinds': [kind.value for kind in self.kinds],
            'previous_best': asdict(self.previous_best),
        }


def classify(new_weight: float, new_reps: int, prior_entries: List[PrEntry]) -> PrClassification:
    """
    Classify a candidate attempt against an exercise's history.

    Weight and volume records compare against the best over all prior
    entries. A rep record only counts against prior entries logged at exactly
    the same weight, so an unseen weight can never be a rep record.

    Args:
        new_weight: Candidate weight in kg
        new_reps: Candidate rep count
        prior_entries: Entries already logged for the same exercise

    Returns:
        PrClassification with the three flags and the previous bests
    """
    new_weight = new_weight or 0.0
    new_reps = new_reps or 0

    if not prior_entries:
        return PrClassification(True, True, True, PreviousBest())

    best_weight = max(e.weight_kg for e in prior_entries)
    best_volume = max(e.volume for e in prior_entries)

    same_weight = [e for e in prior_entries if e.weight_kg == new_weight]
    best_reps_at_weight = max((e.reps for e in same_weight), default=0)

    return PrClassification(
        is_weight_pr=new_weight > best_weight,
        is_rep_pr=bool(same_weight) and new_reps > best_reps_at_weight,
        is_volume_pr=new_weight * new_reps > best_volume,
        previous_best=PreviousBest(
            weight=best_weight,
            reps=best_reps_at_weight,
            volume=best_volume,
        ),
    )
