"""
Dependency model — one checkable tool or package.

A dependency entry in the manifest names how to detect the tool
(``check``), whether it is required, an optional minimum version, and
per-platform installation guidance.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import AliasChoices, BaseModel, Discriminator, Field, Tag, field_validator

DEFAULT_MESSAGE = "No message provided"

KNOWN_CHECK_TYPES = ("cli", "tex", "r_package")


class CliCheck(BaseModel):
    """A command-line tool looked up on PATH.

    ``registry_name`` is a fuzzy application display name used on
    Windows when the command is not on PATH (e.g. ``"R for Windows"``).
    """

    type: Literal["cli"] = "cli"
    command: str = ""
    registry_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("registry_name", "windows_registry"),
    )

    @field_validator("command", mode="before")
    @classmethod
    def _blank_command(cls, value: Any) -> Any:
        # null is an incomplete entry, evaluated as not installed
        return "" if value is None else value


class TexCheck(BaseModel):
    """A LaTeX toolchain (latexmk, or whatever ``quarto check`` reports)."""

    type: Literal["tex"] = "tex"


class RPackageCheck(BaseModel):
    """An R package queried through ``Rscript``."""

    type: Literal["r_package"] = "r_package"
    package: str = ""
    registry_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("registry_name", "windows_registry"),
    )

    @field_validator("package", mode="before")
    @classmethod
    def _blank_package(cls, value: Any) -> Any:
        return "" if value is None else value


class UnsupportedCheck(BaseModel):
    """A missing or unknown check type.

    Kept as a value instead of a validation error so one bad entry
    evaluates as "not installed" without aborting the run.
    """

    type: str = ""


def _check_kind(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    return kind if kind in KNOWN_CHECK_TYPES else "unsupported"


CheckSpec = Annotated[
    Union[
        Annotated[CliCheck, Tag("cli")],
        Annotated[TexCheck, Tag("tex")],
        Annotated[RPackageCheck, Tag("r_package")],
        Annotated[UnsupportedCheck, Tag("unsupported")],
    ],
    Discriminator(_check_kind),
]


class DependencySpec(BaseModel):
    """Declarative description of one dependency.

    ``install_hint`` maps a platform key (``macos``, ``windows``,
    ``linux``) to either plain text or a mapping of install method to
    text, e.g. ``{"brew": "brew install git", "direct": "..."}``.
    A bare string applies to every platform.
    """

    check: CheckSpec = Field(default_factory=UnsupportedCheck)
    required: bool = False
    min_version: str | None = None
    message: str = DEFAULT_MESSAGE
    install_hint: dict[str, str | dict[str, str]] | str | None = None

    @field_validator("check", mode="before")
    @classmethod
    def _normalize_check(cls, value: Any) -> Any:
        if isinstance(value, (dict, BaseModel)):
            return value
        return {"type": ""}

    @field_validator("min_version", mode="before")
    @classmethod
    def _stringify_min_version(cls, value: Any) -> Any:
        # YAML reads ``min_version: 4.3`` as a float
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value or None

    @property
    def check_type(self) -> str:
        return self.check.type

    def hint_for(
        self,
        platform_key: str,
        package_manager: str | None = None,
        package_manager_available: bool = False,
    ) -> str | None:
        """Pick the install hint for a platform.

        With the platform's package manager available its entry wins;
        otherwise the ``direct`` entry is used.
        """
        if not self.install_hint:
            return None
        if isinstance(self.install_hint, str):
            return self.install_hint

        entry = self.install_hint.get(platform_key)
        if entry is None:
            return None
        if isinstance(entry, str):
            return entry

        if package_manager_available and package_manager and entry.get(package_manager):
            return entry[package_manager]
        return entry.get("direct") or None
