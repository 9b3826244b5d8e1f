"""
Erreurs typées du moteur de sections.

Seules les erreurs structurelles sont des exceptions. Les avertissements de
validation, les tags sans page et les refus premium sont des classifications
retournées à l'appelant (voir validation.ValidationWarning, gate.GateDecision).
"""
from typing import List, Optional


class ThemeSectionsError(Exception):
    """Racine de toutes les erreurs du moteur."""


class DuplicateIdError(ThemeSectionsError, ValueError):
    """Deux définitions différentes revendiquent le même id (fatal au démarrage)."""

    def __init__(self, section_id: str):
        self.section_id = section_id
        super().__init__(f"Section déjà enregistrée : {section_id!r}")


class SchemaMismatchError(ThemeSectionsError, ValueError):
    """create_config() et settings_schema ne décrivent pas les mêmes champs."""


class RegistrySealedError(ThemeSectionsError, RuntimeError):
    """Enregistrement tenté après la première lecture du registry."""


class UnknownSectionError(ThemeSectionsError, LookupError):
    """Une instance référence un definitionId absent du registry."""

    def __init__(self, section_id: str):
        self.section_id = section_id
        super().__init__(f"Section inconnue : {section_id!r}")

    def __str__(self) -> str:
        return self.args[0]


class ConfigValidationError(ThemeSectionsError, ValueError):
    """Entrée irréparable (pas un objet) ou validation stricte en échec."""

    def __init__(self, message: str, warnings: Optional[List] = None):
        self.warnings = list(warnings or [])
        super().__init__(message)


class MalformedDocumentError(ThemeSectionsError, ValueError):
    """Document ou backup rejeté par le schéma externe, jamais appliqué partiellement."""

    def __init__(self, message: str, errors: Optional[List[dict]] = None):
        self.errors = list(errors or [])
        super().__init__(message)


class ContentSourceError(ThemeSectionsError, RuntimeError):
    """Échec de l'API de contenu externe (pages taguées)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
