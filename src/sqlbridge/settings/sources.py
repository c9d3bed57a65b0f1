"""Settings file source.

Settings files are flat ``key=value`` text. Keys are matched against the
option names in ``BridgeSettings.file_keys`` ignoring letter case, ``-`` and
``_``, so ``DriverClass``, ``driver_class`` and ``DRIVER-CLASS`` are the same
key. Unrecognized keys are ignored.

Values are taken literally: ``${NAME}`` references are not expanded from the
environment. Only ``key=value`` lines are read; a Java-properties style
``key: value`` line is skipped with a warning naming the key.
"""

import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, Union

from dotenv import dotenv_values
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from sqlbridge.logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]

_UNASSIGNED_LINE = re.compile(r"([^:\s]+)\s*[:\s]\s*\S")


def normalize_key(key: str) -> str:
    return key.replace("-", "").replace("_", "").strip().lower()


def unassigned_keys(path: Path) -> List[str]:
    """Keys of ``key: value`` or ``key value`` lines, which are not read.

    A bare ``key`` line is not included; it is read as an empty value.
    """
    keys = []
    for line in path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" in stripped:
            continue
        match = _UNASSIGNED_LINE.match(stripped)
        if match:
            keys.append(match.group(1))
    return keys


class SettingsFileSource(PydanticBaseSettingsSource):
    """Read settings from a flat key/value file.

    The source sits below the environment source, so a value present in both
    places is taken from the environment.

    Attributes:
        file_paths: Files read in order; later files win on duplicate keys
    """

    def __init__(
        self,
        settings_cls: Type[BaseSettings],
        file_paths: Optional[Union[PathLike, Iterable[PathLike]]] = None,
    ):
        super().__init__(settings_cls)
        if file_paths is None:
            self.file_paths: Tuple[Path, ...] = ()
        elif isinstance(file_paths, (str, Path)):
            self.file_paths = (Path(file_paths),)
        else:
            self.file_paths = tuple(Path(p) for p in file_paths)
        self._values = self._read_files()

    @classmethod
    def from_dotenv_source(
        cls,
        settings_cls: Type[BaseSettings],
        dotenv_settings: PydanticBaseSettingsSource,
    ) -> "SettingsFileSource":
        """Build a file source from the file pydantic-settings was given.

        ``BridgeSettings(_env_file=path)`` is the public way to point the
        settings at a file; this reuses that path instead of the dotenv
        source's own key matching.
        """
        return cls(settings_cls, getattr(dotenv_settings, "env_file", None))

    def _key_map(self) -> Dict[str, str]:
        """Map normalized file keys to the input key the model validates."""
        file_keys = getattr(self.settings_cls, "file_keys", {})
        key_map: Dict[str, str] = {}
        for field_name, field in self.settings_cls.model_fields.items():
            target = field.validation_alias if isinstance(field.validation_alias, str) else field_name
            for key in (field_name, *file_keys.get(field_name, ())):
                key_map[normalize_key(key)] = target
        return key_map

    def _read_files(self) -> Dict[str, str]:
        key_map = self._key_map()
        values: Dict[str, str] = {}
        for path in self.file_paths:
            if not path.is_file():
                logger.warning("Settings file not found", extra={"settings_file": str(path)})
                continue
            for key in unassigned_keys(path):
                logger.warning(
                    "Skipping settings line without '='",
                    extra={"settings_file": str(path), "key": key}
                )
            for key, value in dotenv_values(path, encoding="utf-8", interpolate=False).items():
                target = key_map.get(normalize_key(key))
                if target is None:
                    logger.debug("Ignoring unrecognized settings key", extra={"key": key})
                    continue
                values[target] = "" if value is None else value
            logger.debug("Read settings file", extra={"settings_file": str(path)})
        return values

    def get_field_value(self, field: FieldInfo, field_name: str) -> Tuple[Any, str, bool]:
        target = field.validation_alias if isinstance(field.validation_alias, str) else field_name
        return self._values.get(target), target, False

    def __call__(self) -> Dict[str, Any]:
        return dict(self._values)
