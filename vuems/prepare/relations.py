from __future__ import annotations

from typing import Sequence

from vuems import metrics
from vuems.errors import RelationError
from vuems.registry import ModuleConfiguration

RELATIONS_OK = "All relations correct"


async def check_relations(configurations: Sequence[ModuleConfiguration]) -> str:
    """Fail on the first relation naming a module that does not exist."""
    names = {c.name for c in configurations}
    for configuration in configurations:
        for relation in configuration.relations or ():
            if relation and relation not in names:
                metrics.inc("relation_errors_total")
                raise RelationError(configuration.name, relation)
    return RELATIONS_OK
