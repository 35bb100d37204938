"""
Template resolver — flattens ``extends`` chains.

A template that extends another sees every ancestor dependency, with
the closer definition replacing (not merging) a same-named entry.
Consumers only ever see the flattened mapping.
"""

from __future__ import annotations

import logging

from recap_check.core.config.loader import ConfigError
from recap_check.core.models.dependency import DependencySpec
from recap_check.core.models.manifest import Manifest

logger = logging.getLogger(__name__)


def list_templates(manifest: Manifest) -> list[str]:
    """Template names in declaration order."""
    return manifest.template_names


def resolve_dependencies(manifest: Manifest, name: str) -> dict[str, DependencySpec]:
    """Resolve a template into its flattened dependency mapping.

    Merge rules:
        no extends   own mapping, verbatim
        extends      parent's resolved mapping, then own entries on top
                     (same key replaced in place, new keys appended)

    Raises:
        ConfigError: Unknown template, unresolvable ``extends``, or a
            cyclic chain.
    """
    if manifest.get_template(name) is None:
        raise ConfigError(
            f"Unknown template '{name}'. Available: {', '.join(manifest.template_names) or 'none'}"
        )
    resolved = _resolve(manifest, name, [])
    logger.debug("Resolved template '%s' to %d dependencies", name, len(resolved))
    return resolved


def template_chain(manifest: Manifest, name: str) -> list[str]:
    """Return ``[name, parent, grandparent, ...]`` for a template."""
    chain: list[str] = []
    current: str | None = name
    while current is not None:
        if current in chain:
            raise ConfigError(f"Cyclic extends chain: {' -> '.join(chain + [current])}")
        template = manifest.get_template(current)
        if template is None:
            raise ConfigError(_missing_message(chain, current))
        chain.append(current)
        current = template.extends
    return chain


def _resolve(
    manifest: Manifest, name: str, visiting: list[str]
) -> dict[str, DependencySpec]:
    if name in visiting:
        raise ConfigError(f"Cyclic extends chain: {' -> '.join(visiting + [name])}")

    template = manifest.get_template(name)
    if template is None:
        raise ConfigError(_missing_message(visiting, name))

    if not template.extends:
        return dict(template.dependencies)

    merged = _resolve(manifest, template.extends, visiting + [name])
    merged.update(template.dependencies)
    return merged


def _missing_message(chain: list[str], name: str) -> str:
    if chain:
        return f"Template '{chain[-1]}' extends unknown template '{name}'"
    return f"Unknown template '{name}'"
