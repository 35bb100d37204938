"""
Manifest model — the templates a user can check against.

Templates are stored exactly as declared: own dependencies only, with
``extends`` kept as a reference. Flattening happens in
``recap_check.core.config.template_resolver``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from recap_check.core.models.dependency import DependencySpec


class Template(BaseModel):
    """A named bundle of dependencies, optionally extending one parent."""

    name: str
    extends: str | None = None
    dependencies: dict[str, DependencySpec] = Field(default_factory=dict)


class Manifest(BaseModel):
    """All templates from one manifest document, in declaration order."""

    templates: dict[str, Template] = Field(default_factory=dict)
    source: str = ""

    def get_template(self, name: str) -> Template | None:
        """Look up a template by name."""
        return self.templates.get(name)

    @property
    def template_names(self) -> list[str]:
        return list(self.templates.keys())
