from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path


@lru_cache(maxsize=1)
def ensure_local_packages_importable() -> None:
    """
    Put every ``packages/python/<name>`` project directory on sys.path.

    Each project keeps its import package one level down
    (``packages/python/content_tree/content_tree``), so the project directory
    itself is what needs to be importable when running without an editable
    install.
    """

    current = Path(__file__).resolve()
    for ancestor in current.parents:
        packages_dir = ancestor / "packages" / "python"
        if not packages_dir.exists():
            continue
        for project in sorted(packages_dir.iterdir()):
            if (project / project.name / "__init__.py").exists():
                project_path = str(project)
                if project_path not in sys.path:
                    sys.path.insert(0, project_path)
        return
