"""
Premium gate : appartenance premium/free injectée (plus d'ensembles globaux).

Un id présent dans aucun des deux ensembles est "unrestricted" : disponible
pour tous les tiers. Les deux ensembles sont disjoints, vérifié à la construction.
"""
from enum import Enum
from typing import FrozenSet

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Tier(str, Enum):
    FREE    = "free"
    PREMIUM = "premium"


class GateClass(str, Enum):
    PREMIUM      = "premium"
    FREE         = "free"
    UNRESTRICTED = "unrestricted"


class GatePolicy(str, Enum):
    """Sort d'une section premium refusée, identique en aperçu et en export."""
    PLACEHOLDER = "placeholder"
    OMIT        = "omit"


DEFAULT_PREMIUM_IDS = frozenset({
    "hero", "grid", "testimonials", "faq", "about", "image-with-text",
})
DEFAULT_FREE_IDS = frozenset({
    "announcement-bar", "ghostCards", "ghostGrid", "custom-css",
})


class GateDecision(BaseModel):
    """Classification d'une section pour un tier (allowed=False = refus premium)."""
    model_config = ConfigDict(frozen=True)

    section_id: str
    classification: GateClass
    allowed: bool


class FeatureGate(BaseModel):
    model_config = ConfigDict(frozen=True)

    premium: FrozenSet[str] = DEFAULT_PREMIUM_IDS
    free: FrozenSet[str] = DEFAULT_FREE_IDS
    policy: GatePolicy = GatePolicy.PLACEHOLDER

    @model_validator(mode="after")
    def _check_disjoint(self) -> "FeatureGate":
        overlap = self.premium & self.free
        if overlap:
            raise ValueError(f"Ids à la fois premium et free : {sorted(overlap)}")
        return self

    def is_premium(self, section_id: str) -> bool:
        return section_id in self.premium

    def is_free(self, section_id: str) -> bool:
        return section_id in self.free

    def classify(self, section_id: str) -> GateClass:
        if section_id in self.premium:
            return GateClass.PREMIUM
        if section_id in self.free:
            return GateClass.FREE
        return GateClass.UNRESTRICTED

    def check(self, section_id: str, tier: Tier) -> GateDecision:
        classification = self.classify(section_id)
        allowed = classification != GateClass.PREMIUM or Tier(tier) == Tier.PREMIUM
        return GateDecision(section_id=section_id, classification=classification, allowed=allowed)


def open_gate() -> FeatureGate:
    """Gate sans aucune restriction (tests, outils internes)."""
    return FeatureGate(premium=frozenset(), free=frozenset())
