"""
Tests for template inheritance — extends chains flattened into one mapping.
"""

import json

import pytest

from recap_check.core.config.loader import ConfigError, parse_manifest
from recap_check.core.config.template_resolver import (
    list_templates,
    resolve_dependencies,
    template_chain,
)
from recap_check.core.models.manifest import Manifest


def _cli(command: str, **extra) -> dict:
    return {"check": {"type": "cli", "command": command}, **extra}


def _manifest(data: dict) -> Manifest:
    return parse_manifest(json.dumps(data))


@pytest.fixture
def chain_manifest() -> Manifest:
    """A extends B extends C, with overrides at every level."""
    return _manifest({
        "C": {
            "git": _cli("git", min_version="1.0.0"),
            "make": _cli("make"),
            "shared": _cli("c-tool", min_version="3.0.0", required=True),
        },
        "B": {
            "extends": "C",
            "shared": _cli("b-tool"),
            "quarto": _cli("quarto"),
        },
        "A": {
            "extends": "B",
            "git": _cli("git", min_version="2.30.0", required=True),
            "R": _cli("R"),
        },
    })


class TestListTemplates:
    def test_declaration_order(self, manifest):
        assert list_templates(manifest) == ["base", "advanced"]

    def test_order_is_not_sorted(self):
        manifest = _manifest({"zeta": {}, "alpha": {}, "mid": {}})
        assert list_templates(manifest) == ["zeta", "alpha", "mid"]


class TestResolveDependencies:
    def test_no_extends_is_verbatim(self, manifest):
        base = manifest.get_template("base")
        assert resolve_dependencies(manifest, "base") == base.dependencies

    def test_fixture_inheritance(self, manifest):
        deps = resolve_dependencies(manifest, "advanced")
        assert list(deps) == ["git", "make", "R", "quarto", "latex", "rmarkdown"]

    def test_chain_keeps_every_ancestor_key(self, chain_manifest):
        deps = resolve_dependencies(chain_manifest, "A")
        assert set(deps) == {"git", "make", "shared", "quarto", "R"}

    def test_closest_definition_wins(self, chain_manifest):
        deps = resolve_dependencies(chain_manifest, "A")
        assert deps["git"].min_version == "2.30.0"
        assert deps["git"].required is True
        assert deps["shared"].check.command == "b-tool"
        assert deps["make"].check.command == "make"

    def test_override_replaces_rather_than_merges(self, chain_manifest):
        deps = resolve_dependencies(chain_manifest, "B")
        assert deps["shared"].check.command == "b-tool"
        assert deps["shared"].min_version is None
        assert deps["shared"].required is False
        assert deps["git"].min_version == "1.0.0"

    def test_override_keeps_ancestor_position(self, chain_manifest):
        assert list(resolve_dependencies(chain_manifest, "A")) == [
            "git", "make", "shared", "quarto", "R",
        ]

    def test_does_not_mutate_templates(self, chain_manifest):
        resolve_dependencies(chain_manifest, "A")
        assert set(chain_manifest.get_template("C").dependencies) == {"git", "make", "shared"}
        assert chain_manifest.get_template("C").dependencies["git"].min_version == "1.0.0"

    def test_unknown_template(self, manifest):
        with pytest.raises(ConfigError, match="Unknown template 'nope'"):
            resolve_dependencies(manifest, "nope")

    def test_unresolvable_extends(self):
        manifest = _manifest({"child": {"extends": "ghost", "git": _cli("git")}})
        with pytest.raises(ConfigError, match="extends unknown template 'ghost'"):
            resolve_dependencies(manifest, "child")

    def test_self_reference_is_a_cycle(self):
        manifest = _manifest({"loop": {"extends": "loop"}})
        with pytest.raises(ConfigError, match="Cyclic extends chain: loop -> loop"):
            resolve_dependencies(manifest, "loop")

    def test_mutual_reference_is_a_cycle(self):
        manifest = _manifest({"a": {"extends": "b"}, "b": {"extends": "a"}})
        with pytest.raises(ConfigError, match="Cyclic extends chain: a -> b -> a"):
            resolve_dependencies(manifest, "a")

    def test_cycle_further_up_the_chain(self):
        manifest = _manifest({
            "leaf": {"extends": "a"},
            "a": {"extends": "b"},
            "b": {"extends": "a"},
        })
        with pytest.raises(ConfigError, match="Cyclic"):
            resolve_dependencies(manifest, "leaf")


class TestTemplateChain:
    def test_chain(self, chain_manifest):
        assert template_chain(chain_manifest, "A") == ["A", "B", "C"]

    def test_root(self, chain_manifest):
        assert template_chain(chain_manifest, "C") == ["C"]

    def test_cycle(self):
        manifest = _manifest({"a": {"extends": "b"}, "b": {"extends": "a"}})
        with pytest.raises(ConfigError, match="Cyclic"):
            template_chain(manifest, "a")
