"""solid-flutter: scaffold a SOLID-structured Flutter project.

Runs ``flutter create``, overlays the bundled ``flutter_base`` template,
replaces ``pubspec.yaml`` and records everything in a fresh git repository.
"""

__version__ = "0.1.0"
