"""Isolated import scope for connectors loaded from files.

A connector shipped as a file is executed under a private module namespace
(``_sqlbridge_scope_<digest>``) instead of its own top-level name, so it can
never shadow or replace a module the running interpreter already uses, and
two connectors with the same module name can coexist.

Supported artifacts:
    - a single ``.py`` module
    - a directory, treated like a ``sys.path`` entry
    - an archive (``.zip``, ``.whl``, ``.pyz``, ``.egg``), read with zipimport

Modules inside a package loaded this way must import their siblings
relatively (``from . import util``); absolute imports of their own top-level
name are not visible.
"""

import hashlib
import importlib
import importlib.util
import sys
import zipimport
from importlib.machinery import ModuleSpec
from pathlib import Path
from types import ModuleType
from typing import Optional

from sqlbridge.constants import ARCHIVE_SUFFIXES, ISOLATED_NAMESPACE_PREFIX
from sqlbridge.logging import get_logger

logger = get_logger(__name__)


class IsolatedScope:
    """Loads modules from one file-system location under a private namespace.

    Attributes:
        location: The module file, directory or archive
        namespace: Private package name the modules are registered under
    """

    def __init__(self, location: Path):
        self.location = Path(location)
        digest = hashlib.sha1(str(self.location.resolve()).encode("utf-8")).hexdigest()[:12]
        self.namespace = f"{ISOLATED_NAMESPACE_PREFIX}{digest}"

    @property
    def is_archive(self) -> bool:
        return self.location.suffix.lower() in ARCHIVE_SUFFIXES

    def scoped_name(self, module_name: str) -> str:
        return f"{self.namespace}.{module_name}"

    def import_module(self, module_name: str) -> ModuleType:
        """Import ``module_name`` from this scope's location.

        Args:
            module_name: Dotted module name as the connector author wrote it.
                For a single ``.py`` file it may be empty or the file's stem.

        Returns:
            The loaded module

        Raises:
            ModuleNotFoundError: If the location does not provide the module
            ImportError: If the location is not a supported artifact
        """
        if self.location.is_file() and self.location.suffix == ".py":
            return self._load_single_file(module_name)

        if not module_name:
            raise ModuleNotFoundError(
                f"A module name is required to load a connector from {self.location}"
            )

        top, _, rest = module_name.partition(".")
        package = self._load_top_level(top)
        if not rest:
            return package
        return importlib.import_module(self.scoped_name(module_name))

    def _load_single_file(self, module_name: str) -> ModuleType:
        stem = self.location.stem
        if module_name and module_name != stem:
            raise ModuleNotFoundError(
                f"No module named '{module_name}' in {self.location}", name=module_name
            )
        spec = importlib.util.spec_from_file_location(self.scoped_name(stem), self.location)
        return self._execute(spec, stem)

    def _load_top_level(self, top: str) -> ModuleType:
        scoped = self.scoped_name(top)
        if scoped in sys.modules:
            return sys.modules[scoped]

        if self.location.is_dir():
            spec = self._spec_from_directory(top, scoped)
        elif self.is_archive:
            spec = self._spec_from_archive(top, scoped)
        else:
            raise ImportError(f"Unsupported connector artifact: {self.location}")

        if spec is None:
            raise ModuleNotFoundError(f"No module named '{top}' in {self.location}", name=top)
        return self._execute(spec, top)

    def _spec_from_directory(self, top: str, scoped: str) -> Optional[ModuleSpec]:
        package_init = self.location / top / "__init__.py"
        if package_init.is_file():
            return importlib.util.spec_from_file_location(
                scoped,
                package_init,
                submodule_search_locations=[str(self.location / top)],
            )
        module_file = self.location / f"{top}.py"
        if module_file.is_file():
            return importlib.util.spec_from_file_location(scoped, module_file)
        return None

    def _spec_from_archive(self, top: str, scoped: str) -> Optional[ModuleSpec]:
        importer = zipimport.zipimporter(str(self.location))
        found = importer.find_spec(top)
        if found is None:
            return None
        is_package = found.submodule_search_locations is not None
        spec = importlib.util.spec_from_loader(
            scoped, importer, origin=found.origin, is_package=is_package
        )
        if spec is not None and is_package:
            spec.submodule_search_locations = list(found.submodule_search_locations)
        return spec

    def _execute(self, spec: Optional[ModuleSpec], display_name: str) -> ModuleType:
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load '{display_name}' from {self.location}")

        module = importlib.util.module_from_spec(spec)
        # Registered so relative imports inside the connector resolve.
        sys.modules[spec.name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(spec.name, None)
            raise

        logger.debug(
            "Loaded isolated module",
            extra={"module_name": display_name, "scoped_name": spec.name, "location": str(self.location)}
        )
        return module
