"""Import Python files from user directories without touching ``sys.path``."""

from __future__ import annotations

import hashlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType


def load_module_from_path(path: Path, namespace: str) -> ModuleType:
    """Execute *path* as a fresh module and return it.

    The module is registered in :data:`sys.modules` under a name derived
    from *namespace* and the resolved path, so two files with the same
    stem never collide. A failed import leaves no entry behind.

    Raises:
        ImportError: If no loader can be created for *path*.
        Exception: Whatever executing the module raises.
    """
    resolved = path.resolve()
    digest = hashlib.sha1(str(resolved).encode("utf-8")).hexdigest()[:10]
    name = f"{namespace}.{resolved.parent.name.replace('-', '_')}_{digest}"

    spec = importlib.util.spec_from_file_location(name, resolved)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load module from {resolved}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(name, None)
        raise
    return module
