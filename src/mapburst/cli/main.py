"""
mapburst CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import build, export, tree


@click.group()
@click.version_option(package_name="mapburst")
def main():
    """mapburst: Source Map Sunburst Visualizer.

    Shows which original files make up a bundle, sized by bytes,
    as an interactive HTML sunburst.

    \b
    Quick Start:
      mapburst build dist/app.js
      mapburst tree dist/app.js
      mapburst json dist/app.js -o tree.json
    """
    pass


# Register commands
main.add_command(build.build)
main.add_command(tree.tree)
main.add_command(export.export_json)

if __name__ == "__main__":
    main()
