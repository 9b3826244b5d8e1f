"""
SectionRegistry : table id → SectionDefinition, alimentée par une liste statique.

Règles :
  - un id déjà pris par une définition structurellement différente → DuplicateIdError
  - réenregistrer une définition identique (même signature) est sans effet
  - create_config() incohérent avec les réglages → SchemaMismatchError
  - le registre est scellé dès la première lecture → RegistrySealedError
"""
import logging
import threading
from collections import Counter
from typing import Dict, Iterable, List, Mapping, Optional

from .definition import SectionCategory, SectionDefinition, SectionInstance
from .errors import DuplicateIdError, RegistrySealedError, SchemaMismatchError, UnknownSectionError
from .gate import DEFAULT_FREE_IDS, DEFAULT_PREMIUM_IDS, FeatureGate, GateClass
from .validation import build_instance, format_warnings, validate_section_config

log = logging.getLogger(__name__)


def check_schema(definition: SectionDefinition) -> None:
    """Vérifie que la config par défaut est exactement celle que décrivent les réglages."""
    ids = [s.id for s in definition.config_fields()] + [b.config_key for b in definition.blocks_schema]
    duplicates = sorted(i for i, n in Counter(ids).items() if n > 1)
    if duplicates:
        raise SchemaMismatchError(f"{definition.id} : champs dupliqués {duplicates}")

    prefixes = {i.split(".")[0] for i in ids if "." in i}
    clashes = sorted(prefixes & set(ids))
    if clashes:
        raise SchemaMismatchError(f"{definition.id} : champ et groupe imbriqué homonymes {clashes}")

    defaults = definition.create_config()
    result = validate_section_config(definition, defaults)
    if result.warnings or result.config != defaults:
        raise SchemaMismatchError(
            f"{definition.id} : create_config() non conforme au schéma ({format_warnings(result.warnings)})"
        )


class SectionRegistry:
    def __init__(self, definitions: Iterable[SectionDefinition] = (), gate: Optional[FeatureGate] = None):
        self.gate = gate or FeatureGate()
        self._definitions: Dict[str, SectionDefinition] = {}
        self._sealed = False
        for definition in definitions:
            self.register(definition)

    # ── Enregistrement ──────────────────────────────────────────────────────

    def register(self, definition: SectionDefinition) -> SectionDefinition:
        if self._sealed:
            raise RegistrySealedError(f"Registre scellé, impossible d'enregistrer {definition.id!r}")
        existing = self._definitions.get(definition.id)
        if existing is not None:
            if existing.signature() == definition.signature():
                log.debug("Section %s déjà enregistrée (identique)", definition.id)
                return existing
            raise DuplicateIdError(definition.id)
        check_schema(definition)
        self._definitions[definition.id] = definition
        log.debug("Section enregistrée : %s (%s)", definition.id, definition.category)
        return definition

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        self._sealed = True

    # ── Lecture (scelle le registre) ────────────────────────────────────────

    def get(self, section_id: str) -> SectionDefinition:
        self._sealed = True
        try:
            return self._definitions[section_id]
        except KeyError:
            raise UnknownSectionError(section_id) from None

    def find(self, section_id: str) -> Optional[SectionDefinition]:
        self._sealed = True
        return self._definitions.get(section_id)

    def __contains__(self, section_id: str) -> bool:
        return section_id in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def list_all(self) -> List[SectionDefinition]:
        self._sealed = True
        return list(self._definitions.values())

    def list_ids(self) -> List[str]:
        return [d.id for d in self.list_all()]

    def list_by_category(self, category: SectionCategory) -> List[SectionDefinition]:
        return [d for d in self.list_all() if d.category == category]

    # ── Gate ────────────────────────────────────────────────────────────────

    def is_premium(self, section_id: str) -> bool:
        return self.gate.is_premium(section_id)

    def is_free(self, section_id: str) -> bool:
        return self.gate.is_free(section_id)

    def classify(self, section_id: str) -> GateClass:
        return self.gate.classify(section_id)

    # ── Instances ───────────────────────────────────────────────────────────

    def create_instance(
        self,
        definition_id: str,
        instance_id: str,
        custom_config: Optional[Mapping] = None,
    ) -> SectionInstance:
        return build_instance(self.get(definition_id), instance_id, custom_config)


# ── Registre par défaut ─────────────────────────────────────────────────────

def default_gate(definitions: Iterable[SectionDefinition] = ()) -> FeatureGate:
    """Gate par défaut ; le flag premium des définitions y est reporté."""
    premium = set(DEFAULT_PREMIUM_IDS) | {d.id for d in definitions if d.premium}
    return FeatureGate(premium=frozenset(premium), free=frozenset(DEFAULT_FREE_IDS - premium))


def build_default_registry(gate: Optional[FeatureGate] = None) -> SectionRegistry:
    from .sections import BUILTIN_SECTIONS
    return SectionRegistry(BUILTIN_SECTIONS, gate=gate or default_gate(BUILTIN_SECTIONS))


_DEFAULT_REGISTRY: Optional[SectionRegistry] = None
_DEFAULT_LOCK = threading.Lock()


def default_registry() -> SectionRegistry:
    """Instance de process, construite au premier appel (gate lu depuis l'environnement)."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        with _DEFAULT_LOCK:
            if _DEFAULT_REGISTRY is None:
                from .config import load_settings
                _DEFAULT_REGISTRY = build_default_registry(load_settings().build_gate())
    return _DEFAULT_REGISTRY
