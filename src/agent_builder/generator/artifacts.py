"""Package manifest and container build descriptor for generated agents."""

from typing import Any

from agent_builder.generator.render import plugin_package

LATEST = "latest"


def build_package_manifest(
    name: str,
    plugins: list[str],
    core_package: str = "@elizaos/core",
    plugin_package_prefix: str = "@elizaos/plugin-",
    agent_package_prefix: str = "@elizaos/agent-",
) -> dict[str, Any]:
    """Build the package.json document for a generated agent.

    Args:
        name: Base name of the output directory
        plugins: Plugin identifiers, one dependency each
        core_package: Runtime package, always a dependency
        plugin_package_prefix: Prefix used to derive plugin package names
        agent_package_prefix: Prefix for the generated package name

    Returns:
        Manifest dict with every dependency pinned to "latest"

    Example:
        >>> build_package_manifest("a1", ["alpha"])["dependencies"]
        {'@elizaos/core': 'latest', '@elizaos/plugin-alpha': 'latest'}
    """
    dependencies = {core_package: LATEST}
    for plugin in plugins:
        dependencies[plugin_package(plugin, plugin_package_prefix)] = LATEST

    return {
        "name": f"{agent_package_prefix}{name}",
        "version": "1.0.0",
        "type": "module",
        "scripts": {
            "build": "tsc",
            "start": "node dist/index.js",
        },
        "dependencies": dependencies,
    }


def render_dockerfile(base_image: str = "eliza", port: int = 3000) -> str:
    """Render the multi-stage Dockerfile built on top of the shared base image."""
    return f"""FROM {base_image}:latest as base

WORKDIR /app/custom-agent

# Generated agent files
COPY . .

RUN pnpm install

RUN pnpm run build

RUN mkdir -p data

EXPOSE {port}

CMD ["pnpm", "start"]
"""
