"""Project scaffolding: the external generator plus the template overlay.

Quick usage::

    from solid_flutter.config import Config
    from solid_flutter.scaffolder import FlutterGenerator, TemplateOverlay

    config = Config(project_name="my_app")
    await FlutterGenerator(config.generator).create(path)
    overlay = TemplateOverlay(config)
    await overlay.remove_default_source(path)
    await overlay.copy_tree(path)
    await overlay.merge_manifest(path)
"""

from solid_flutter.scaffolder.generator import FlutterGenerator, GeneratorError
from solid_flutter.scaffolder.overlay import OverlayError, TemplateOverlay

__all__ = [
    "FlutterGenerator",
    "GeneratorError",
    "OverlayError",
    "TemplateOverlay",
]
