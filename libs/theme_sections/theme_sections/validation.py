"""
Config validator : entrée brute (éventuellement legacy/malformée) → config complète.

Validation *totale* : un champ manquant ou invalide prend la valeur par défaut
et produit un ValidationWarning, jamais d'exception. Seule une entrée qui
n'est pas un objet lève ConfigValidationError.

Politique :
  - select/radio hors options → défaut
  - range hors bornes → clampé dans [min, max]
  - clés inconnues → conservées telles quelles (compat entre versions de schéma)
  - blocs au-delà de `limit` → tronqués, avec avertissement
"""
import copy
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .definition import SectionDefinition, SectionInstance
from .errors import ConfigValidationError
from .nested import MISSING, deep_merge, get_nested_value, set_nested_value
from .schema import BlockSchema, ValueSetting

log = logging.getLogger(__name__)


class ValidationWarning(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    code: str
    message: str


class ValidationResult(BaseModel):
    config: Dict[str, Any]
    warnings: List[ValidationWarning] = []

    @property
    def ok(self) -> bool:
        return not self.warnings


# ── Champs ──────────────────────────────────────────────────────────────────

def _coerce_field(
    setting: ValueSetting,
    source: Mapping,
    target: dict,
    prefix: str,
    warnings: List[ValidationWarning],
    report_missing: bool = True,
) -> None:
    path = f"{prefix}{setting.id}"
    raw = get_nested_value(source, setting.id)
    if raw is MISSING:
        set_nested_value(target, setting.id, setting.default_value())
        if report_missing:
            warnings.append(ValidationWarning(path=path, code="missing", message="valeur absente, défaut appliqué"))
        return
    value, problem = setting.coerce(raw)
    set_nested_value(target, setting.id, value)
    if problem:
        code, message = problem
        warnings.append(ValidationWarning(path=path, code=code, message=message))


def _validate_fields(
    settings: Iterable[ValueSetting],
    raw: Mapping,
    prefix: str,
    warnings: List[ValidationWarning],
    report_missing: bool = True,
) -> dict:
    # base = copie de l'entrée : les clés inconnues survivent, y compris imbriquées
    result = copy.deepcopy(dict(raw))
    for setting in settings:
        _coerce_field(setting, raw, result, prefix, warnings, report_missing)
    return result


def _validate_blocks(block: BlockSchema, raw: Any, warnings: List[ValidationWarning]) -> list:
    key = block.config_key
    if raw is MISSING:
        warnings.append(ValidationWarning(path=key, code="missing", message="liste absente, défaut appliqué"))
        return block.default_items()
    if not isinstance(raw, list):
        warnings.append(ValidationWarning(path=key, code="invalid_type", message="liste attendue"))
        return block.default_items()

    items = []
    for index, item in enumerate(raw):
        if not isinstance(item, Mapping):
            warnings.append(ValidationWarning(
                path=f"{key}[{index}]", code="invalid_item", message=f"{block.name} ignoré : objet attendu",
            ))
            continue
        items.append(_validate_fields(block.value_settings(), item, f"{key}[{index}].", warnings))

    if block.limit is not None and len(items) > block.limit:
        warnings.append(ValidationWarning(
            path=key, code="limit_exceeded",
            message=f"{len(items)} {block.name} > limite {block.limit}, excédent tronqué",
        ))
        items = items[:block.limit]
    return items


def _as_mapping(definition: SectionDefinition, raw: Any) -> Mapping:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ConfigValidationError(
            f"Config {definition.id!r} : objet attendu, reçu {type(raw).__name__}"
        )
    return raw


# ── API publique ────────────────────────────────────────────────────────────

def validate_section_config(definition: SectionDefinition, raw: Any) -> ValidationResult:
    """
    Valide et complète une config de section.

    Args:
        definition: Définition de la section
        raw: Config brute (dict ou None)

    Returns:
        ValidationResult avec la config complète et les avertissements

    Raises:
        ConfigValidationError: si raw n'est ni un dict ni None
    """
    source = _as_mapping(definition, raw)
    warnings: List[ValidationWarning] = []
    config = _validate_fields(definition.config_fields(), source, "", warnings)
    for block in definition.blocks_schema:
        config[block.config_key] = _validate_blocks(
            block, source.get(block.config_key, MISSING), warnings,
        )
    return ValidationResult(config=config, warnings=warnings)


def parse_config_or_raise(definition: SectionDefinition, raw: Any) -> dict:
    """Version stricte : tout avertissement autre que `missing` est une erreur."""
    result = validate_section_config(definition, raw)
    errors = [w for w in result.warnings if w.code != "missing"]
    if errors:
        raise ConfigValidationError(
            f"Config {definition.id!r} invalide : {format_warnings(errors)}", errors,
        )
    return result.config


def validate_partial_config(definition: SectionDefinition, partial: Any) -> ValidationResult:
    """Valide uniquement les champs fournis (mise à jour incrémentale depuis l'éditeur)."""
    source = _as_mapping(definition, partial)
    warnings: List[ValidationWarning] = []
    provided = [s for s in definition.config_fields() if get_nested_value(source, s.id) is not MISSING]
    config = _validate_fields(provided, source, "", warnings, report_missing=False)
    for block in definition.blocks_schema:
        if block.config_key in source:
            config[block.config_key] = _validate_blocks(block, source[block.config_key], warnings)
    return ValidationResult(config=config, warnings=warnings)


def validate_field(definition: SectionDefinition, field_id: str, value: Any) -> ValidationResult:
    setting = next((s for s in definition.config_fields() if s.id == field_id), None)
    if setting is None:
        raise ConfigValidationError(f"Champ inconnu : {definition.id}.{field_id}")
    coerced, problem = setting.coerce(value)
    warnings = []
    if problem:
        warnings.append(ValidationWarning(path=field_id, code=problem[0], message=problem[1]))
    return ValidationResult(config={field_id: coerced}, warnings=warnings)


def get_default_config(definition: SectionDefinition) -> dict:
    return definition.create_config()


def merge_with_defaults(definition: SectionDefinition, partial: Optional[Mapping]) -> dict:
    """Défauts ← partial (fusion profonde), puis validation complète."""
    merged = deep_merge(definition.create_config(), _as_mapping(definition, partial))
    return validate_section_config(definition, merged).config


def validate_all_configs(registry, configs: Mapping[str, Any]) -> Dict[str, ValidationResult]:
    """{definition_id: config brute} → résultats ; ids inconnus ignorés (log)."""
    results = {}
    for definition_id, raw in configs.items():
        definition = registry.find(definition_id)
        if definition is None:
            log.warning("Validation ignorée, section inconnue : %s", definition_id)
            continue
        results[definition_id] = validate_section_config(definition, raw)
    return results


def format_warnings(warnings: Iterable[ValidationWarning]) -> str:
    """[w1, w2] → "path1: msg1; path2: msg2"."""
    return "; ".join(f"{w.path}: {w.message}" for w in warnings)


# ── Instances ───────────────────────────────────────────────────────────────

def resolve_instance_config(
    definition: SectionDefinition,
    instance_id: str,
    custom_config: Optional[Mapping] = None,
) -> ValidationResult:
    """Défauts ← custom_config, hook d'instance, puis validation."""
    merged = {**definition.create_config(), **_as_mapping(definition, custom_config)}
    if definition.instance_hook is not None:
        merged = definition.instance_hook(merged, instance_id)
    return validate_section_config(definition, merged)


def build_instance(
    definition: SectionDefinition,
    instance_id: str,
    custom_config: Optional[Mapping] = None,
) -> SectionInstance:
    """
    Crée une instance : défauts ← custom_config, hook d'instance (tag dérivé
    du suffixe numérique), puis validation. La config ne passe jamais ailleurs
    que par le validateur.
    """
    result = resolve_instance_config(definition, instance_id, custom_config)
    if result.warnings:
        log.debug("Instance %s (%s) : %s", instance_id, definition.id, format_warnings(result.warnings))
    return SectionInstance(
        id=instance_id,
        definition_id=definition.id,
        label=definition.label,
        category=definition.category,
        config=result.config,
    )


__all__ = [
    "ValidationWarning", "ValidationResult",
    "validate_section_config", "parse_config_or_raise", "validate_partial_config",
    "validate_field", "get_default_config", "merge_with_defaults",
    "validate_all_configs", "format_warnings", "resolve_instance_config", "build_instance",
    "get_nested_value", "set_nested_value",
]
