"""Agent source tree generator.

Renders one deployable tree per agent under the builds root:

    <builds_root>/<agent_id>/
        index.ts         entry point rendered from the template
        character.json   copy of the character file (when it exists)
        package.json     manifest with core + plugin dependencies
        Dockerfile       build descriptor on top of the shared base image

The directory name comes straight from the agent id, so a second event for
the same id rewrites the same tree. Every rendered file is rewritten in full.
"""

import json
import shutil
from pathlib import Path

from loguru import logger

from agent_builder.generator.artifacts import build_package_manifest, render_dockerfile
from agent_builder.generator.render import (
    DEFAULT_TEMPLATE_PATH,
    EntryPoint,
    EntryPointTemplate,
    validate_plugins,
)
from agent_builder.models.events import GeneratorConfig
from agent_builder.settings import Settings, settings as default_settings

ENTRY_POINT_FILE = "index.ts"
CHARACTER_FILE = "character.json"
MANIFEST_FILE = "package.json"
DOCKERFILE = "Dockerfile"


class AgentGenerator:
    """Renders agent source trees from the entry-point template."""

    def __init__(self, settings: Settings | None = None):
        """Initialize generator.

        Args:
            settings: Settings instance (defaults to the module-level settings)
        """
        self.settings = settings or default_settings
        self.builds_root = Path(self.settings.builds_root).resolve()
        self.template_path = Path(self.settings.template_path or DEFAULT_TEMPLATE_PATH)

    def output_path(self, output_dir: str) -> Path:
        """Deterministic output directory for an agent."""
        return self.builds_root / output_dir

    def generate(self, config: GeneratorConfig) -> Path:
        """Generate the agent tree.

        Args:
            config: Plugins, character path and output directory name

        Returns:
            Absolute path of the generated directory

        Raises:
            PluginValidationError: If a plugin identifier is not a bare identifier
            FileNotFoundError: If the template is missing
            TemplateError: If the template markers are malformed
            OSError: On any other filesystem failure
        """
        # Fail before touching the filesystem
        validate_plugins(config.plugins)
        template = EntryPointTemplate.load(self.template_path)

        output_dir = self.output_path(config.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        entry = EntryPoint.from_plugins(
            config.plugins,
            core_package=self.settings.core_package,
            plugin_package_prefix=self.settings.plugin_package_prefix,
            indent=template.init_indent,
        )
        (output_dir / ENTRY_POINT_FILE).write_text(template.render(entry), encoding="utf-8")

        self._copy_character(config.character, output_dir)

        manifest = build_package_manifest(
            Path(config.output_dir).name,
            config.plugins,
            core_package=self.settings.core_package,
            plugin_package_prefix=self.settings.plugin_package_prefix,
            agent_package_prefix=self.settings.agent_package_prefix,
        )
        (output_dir / MANIFEST_FILE).write_text(json.dumps(manifest, indent=2), encoding="utf-8")

        (output_dir / DOCKERFILE).write_text(
            render_dockerfile(self.settings.base_image, self.settings.agent_port),
            encoding="utf-8",
        )

        logger.info(f"Generated agent in {output_dir}")
        return output_dir

    def _copy_character(self, character: str, output_dir: Path) -> None:
        """Copy the character file, or clear a stale copy when the source is absent."""
        source = Path(character)
        if not source.is_absolute():
            source = Path.cwd() / source

        target = output_dir / CHARACTER_FILE
        if source.is_file():
            shutil.copyfile(source, target)
            return

        logger.debug(f"Character file not found, skipping copy: {source}")
        if target.exists():
            target.unlink()


def generate_agent(config: GeneratorConfig, settings: Settings | None = None) -> Path:
    """Generate an agent tree with a one-off generator.

    Example:
        >>> config = GeneratorConfig(plugins=["alpha"], character="c.json", output_dir="a1")
        >>> generate_agent(config)
        PosixPath('/srv/agent-builder/builds/a1')
    """
    return AgentGenerator(settings).generate(config)
