"""Static registry of export scopes and the collections they cover."""

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple, Union

from homestead_transfer.core.models import ExportScope
from homestead_transfer.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Order matters: exports iterate collections in this order and CSV exports
# take the first populated collection.
SCOPE_COLLECTIONS: Mapping[ExportScope, Tuple[str, ...]] = MappingProxyType({
    ExportScope.FULL: (
        'user_profile', 'tasks', 'notification_tasks', 'plants', 'garden_beds',
        'garden_logs', 'seeds', 'planting_logs', 'harvest_logs', 'journal_entries',
        'animals', 'herds', 'animal_entries', 'breeding_logs', 'offspring',
        'growth_logs', 'expenses', 'invoices', 'sponsors', 'campaigns', 'recipes',
        'pantry', 'health_records', 'marketplace', 'offers', 'medications',
        'vet_visits', 'med_admin_logs', 'orchard_trees', 'tree_logs', 'tree_yields',
        'hives', 'hive_inspections', 'hive_production',
    ),
    ExportScope.GARDEN: (
        'plants', 'garden_beds', 'garden_logs', 'seeds', 'planting_logs', 'harvest_logs',
    ),
    ExportScope.LIVESTOCK: (
        'animals', 'herds', 'animal_entries', 'breeding_logs', 'offspring',
        'growth_logs', 'med_admin_logs', 'vet_visits',
    ),
    ExportScope.TASKS: ('tasks', 'notification_tasks'),
    ExportScope.FINANCES: ('expenses', 'invoices', 'sponsors', 'campaigns'),
    ExportScope.ORCHARD: ('orchard_trees', 'tree_logs', 'tree_yields'),
    ExportScope.APIARY: ('hives', 'hive_inspections', 'hive_production'),
})


def validate_registry(registry: Mapping[ExportScope, Tuple[str, ...]] = SCOPE_COLLECTIONS) -> None:
    """
    Check that every scope is registered and that ``full`` covers every
    collection any narrower scope names.

    Raises:
        ConfigurationError: If the registry breaks either rule
    """
    missing_scopes = [scope.value for scope in ExportScope if scope not in registry]
    if missing_scopes:
        raise ConfigurationError(f"Scopes without collections: {', '.join(missing_scopes)}")

    full = set(registry[ExportScope.FULL])
    for scope, collections in registry.items():
        outside_full = [name for name in collections if name not in full]
        if outside_full:
            raise ConfigurationError(
                f"Scope '{scope.value}' names collections missing from 'full': "
                f"{', '.join(outside_full)}"
            )


def resolve_scope(scope: Union[ExportScope, str]) -> ExportScope:
    """
    Turn a scope value into an ExportScope.

    Unknown values resolve to FULL. Callers are expected to validate scope
    input upstream; the fallback is logged so it never goes unnoticed.
    """
    if isinstance(scope, ExportScope):
        return scope
    try:
        return ExportScope(scope)
    except ValueError:
        logger.warning(f"Unknown export scope {scope!r}, falling back to 'full'")
        return ExportScope.FULL


def collections_for(scope: Union[ExportScope, str]) -> List[str]:
    """Ordered collection names covered by a scope."""
    return list(SCOPE_COLLECTIONS[resolve_scope(scope)])


def describe_scopes() -> Dict[str, List[str]]:
    """Scope value to collection names, in enum order."""
    return {scope.value: list(SCOPE_COLLECTIONS[scope]) for scope in ExportScope}


validate_registry()
