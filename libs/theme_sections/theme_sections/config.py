"""
Configuration du moteur depuis l'environnement.

  THEME_SECTIONS_TEMPLATES_DIR  dossier des templates (défaut : templates packagés)
  THEME_SECTIONS_GATE_POLICY    placeholder | omit
  THEME_SECTIONS_DEFAULT_TIER   free | premium
  GHOST_URL / GHOST_CONTENT_KEY source de contenu (optionnelle)
  LOG_LEVEL                     niveau de log de l'app
"""
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from .gate import FeatureGate, GatePolicy, Tier
from .renderer.environment import TEMPLATES_DIR


class EngineSettings(BaseModel):
    templates_dir: Path = TEMPLATES_DIR
    gate_policy: GatePolicy = GatePolicy.PLACEHOLDER
    default_tier: Tier = Tier.FREE
    ghost_url: Optional[str] = None
    ghost_content_key: Optional[str] = None
    log_level: str = "INFO"

    def build_gate(self) -> FeatureGate:
        from .registry import default_gate
        from .sections import BUILTIN_SECTIONS
        return default_gate(BUILTIN_SECTIONS).model_copy(update={"policy": self.gate_policy})


def load_settings() -> EngineSettings:
    """Lit l'environnement à chaque appel (pas de cache : les tests modifient os.environ)."""
    return EngineSettings(
        templates_dir=os.getenv("THEME_SECTIONS_TEMPLATES_DIR") or TEMPLATES_DIR,
        gate_policy=os.getenv("THEME_SECTIONS_GATE_POLICY", "placeholder").lower(),
        default_tier=os.getenv("THEME_SECTIONS_DEFAULT_TIER", "free").lower(),
        ghost_url=os.getenv("GHOST_URL") or None,
        ghost_content_key=os.getenv("GHOST_CONTENT_KEY") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
