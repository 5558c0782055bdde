"""Structured rendering of the agent entry point.

The template document carries two markers. It is split once into named
regions and re-assembled around a typed ``EntryPoint``, so generated code
can only ever land in the import slot or the plugin-initialization slot.

Example:
    >>> template = EntryPointTemplate.load(DEFAULT_TEMPLATE_PATH)
    >>> entry = EntryPoint.from_plugins(["alpha", "beta"])
    >>> source = template.render(entry)
"""

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from agent_builder.errors import PluginValidationError, TemplateError

IMPORTS_MARKER = "/* IMPORTS */"
PLUGIN_INIT_MARKER = "/* PLUGIN_INITIALIZATION */"

DEFAULT_TEMPLATE_PATH = Path(__file__).parent / "templates" / "index.template.ts"

CORE_IMPORT_SYMBOLS = ("AgentRuntime", "CacheManager", "elizaLogger")

# Identifier grammar shared by TypeScript and package-name suffixes we emit
_PLUGIN_ID = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def validate_plugins(plugins: list[str]) -> None:
    """Reject identifiers that cannot be rendered as an import symbol.

    Only syntax is checked. Whether a plugin package actually exists is left
    to the generated program.

    Raises:
        PluginValidationError: Listing every invalid identifier
    """
    invalid = [p for p in plugins if not _PLUGIN_ID.match(p)]
    if invalid:
        raise PluginValidationError(invalid)


def plugin_symbol(plugin: str) -> str:
    """Exported symbol name for a plugin ("thirdWeb" -> "thirdWebPlugin")."""
    return f"{plugin}Plugin"


def plugin_package(plugin: str, prefix: str = "@elizaos/plugin-") -> str:
    """Package name for a plugin ("thirdWeb" -> "@elizaos/plugin-thirdWeb")."""
    return f"{prefix}{plugin}"


class EntryPoint(BaseModel):
    """Generated regions of the entry point."""

    imports: str = Field(description="Import block")
    plugin_initialization: str = Field(description="enabledPlugins declaration")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_plugins(
        cls,
        plugins: list[str],
        core_package: str = "@elizaos/core",
        plugin_package_prefix: str = "@elizaos/plugin-",
        indent: str = "        ",
    ) -> "EntryPoint":
        """Render both regions for an ordered plugin list.

        Args:
            plugins: Plugin identifiers (validated)
            core_package: Runtime package for the fixed core import
            plugin_package_prefix: Prefix for per-plugin packages
            indent: Indentation of the initialization marker in the template

        Returns:
            EntryPoint with plugins in the given order
        """
        validate_plugins(plugins)

        imports = [f"import {{ {', '.join(CORE_IMPORT_SYMBOLS)} }} from '{core_package}';"]
        for plugin in plugins:
            imports.append(
                f"import {{ {plugin_symbol(plugin)} }} from "
                f"'{plugin_package(plugin, plugin_package_prefix)}';"
            )

        # Missing exports resolve to undefined at runtime and are filtered out
        if plugins:
            items = "".join(f"{indent}    {plugin_symbol(p)},\n" for p in plugins)
            init = f"const enabledPlugins = [\n{items}{indent}].filter(Boolean);"
        else:
            init = "const enabledPlugins = [].filter(Boolean);"

        return cls(imports="\n".join(imports), plugin_initialization=init)


class EntryPointTemplate(BaseModel):
    """Template text split at its two markers."""

    prologue: str
    interlude: str
    epilogue: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, text: str) -> "EntryPointTemplate":
        """Split template text at the import and initialization markers.

        Raises:
            TemplateError: If a marker is missing, repeated, or out of order
        """
        for marker in (IMPORTS_MARKER, PLUGIN_INIT_MARKER):
            count = text.count(marker)
            if count != 1:
                raise TemplateError(f"Template must contain {marker} exactly once (found {count})")

        prologue, rest = text.split(IMPORTS_MARKER)
        if PLUGIN_INIT_MARKER not in rest:
            raise TemplateError(f"{PLUGIN_INIT_MARKER} must follow {IMPORTS_MARKER}")
        interlude, epilogue = rest.split(PLUGIN_INIT_MARKER)
        return cls(prologue=prologue, interlude=interlude, epilogue=epilogue)

    @classmethod
    def load(cls, path: Path) -> "EntryPointTemplate":
        """Read and parse a template file.

        Raises:
            FileNotFoundError: If the template does not exist
            TemplateError: If the markers are malformed
        """
        return cls.parse(Path(path).read_text(encoding="utf-8"))

    @property
    def init_indent(self) -> str:
        """Whitespace preceding the initialization marker on its line."""
        last_line = self.interlude.rsplit("\n", 1)[-1]
        return last_line if not last_line.strip() else ""

    def render(self, entry: EntryPoint) -> str:
        return (
            self.prologue
            + entry.imports
            + self.interlude
            + entry.plugin_initialization
            + self.epilogue
        )
