"""Connector loading.

A connector is selected by a sourcing mode and a class name. Each mode is a
small strategy that knows how to resolve the class; all of them share one
instantiation step that checks the result against the ``Connector``
protocol.

Modes:
    - BUNDLED: the class is importable from the running interpreter
    - RESOURCE: the class lives in a file shipped in ``sqlbridge.resources``
    - FILE: the class lives in a module, package directory or archive on disk

Example:
    >>> outcome = load_connector(ConnectorSource.BUNDLED, "bundled",
    ...                          "sqlbridge.connectors.alchemy.AlchemyConnector")
    >>> outcome.ok
    True
"""

import importlib
from abc import ABC, abstractmethod
from contextlib import ExitStack
from importlib import resources
from pathlib import Path
from types import ModuleType
from typing import Any, List, Tuple

from sqlbridge.common.exceptions import BridgeError, configuration_error, connector_load_error
from sqlbridge.constants import DRIVER_PATH_OPTION, RESOURCE_PACKAGE, ConnectorSource
from sqlbridge.logging import get_logger
from sqlbridge.protocols import Connector
from sqlbridge.utils.decorators import traced
from .boundary import Outcome, call_foreign
from .isolation import IsolatedScope

logger = get_logger(__name__)

# Files extracted from zipped distributions stay on disk for the process
# lifetime because loaded connector modules may import from them lazily.
_resource_files = ExitStack()


def split_class_name(class_name: str) -> Tuple[str, str]:
    """Split ``pkg.module.Class`` or ``pkg.module:Class`` into module and attribute.

    The module part is empty for a bare class name, which is only meaningful
    for single-file connectors.
    """
    if ":" in class_name:
        module_name, _, attribute = class_name.partition(":")
    else:
        module_name, _, attribute = class_name.rpartition(".")
    if not attribute:
        raise ValueError(f"Invalid connector class name '{class_name}'")
    return module_name, attribute


def _resolve_attribute(module: ModuleType, attribute: str) -> Any:
    target: Any = module
    for part in attribute.split("."):
        target = getattr(target, part)
    return target


def load_failure_message(source: ConnectorSource) -> str:
    """Prefix used for connector load diagnostics."""
    if source == ConnectorSource.FILE:
        return "Attempting to load the connector failed"
    return "Attempting to load the bundled connector failed"


class ConnectorStrategy(ABC):
    """Resolves a connector class for one sourcing mode."""

    source: ConnectorSource

    @abstractmethod
    def resolve(self, class_name: str) -> Any:
        """Return the object named by ``class_name``."""

    def load(self, class_name: str) -> Connector:
        """Resolve and instantiate the connector class."""
        return instantiate_connector(self.resolve(class_name), class_name)


class BundledStrategy(ConnectorStrategy):
    """Connector already importable from the running interpreter."""

    source = ConnectorSource.BUNDLED

    def resolve(self, class_name: str) -> Any:
        module_name, attribute = split_class_name(class_name)
        if not module_name:
            raise ValueError(f"Connector class '{class_name}' must include its module")
        module = importlib.import_module(module_name)
        return _resolve_attribute(module, attribute)


class ExternalFileStrategy(ConnectorStrategy):
    """Connector loaded from a file on disk through an isolated scope.

    Attributes:
        location: Module file, package directory or archive
    """

    source = ConnectorSource.FILE

    def __init__(self, location: Path):
        self.location = Path(location)

    def resolve(self, class_name: str) -> Any:
        module_name, attribute = split_class_name(class_name)
        module = IsolatedScope(self.location).import_module(module_name)
        return _resolve_attribute(module, attribute)


class PackagedResourceStrategy(ConnectorStrategy):
    """Connector shipped as a file inside this distribution.

    Attributes:
        resource_path: Path relative to the anchor package
        anchor: Package the resource is looked up in
    """

    source = ConnectorSource.RESOURCE

    def __init__(self, resource_path: str, anchor: str = RESOURCE_PACKAGE):
        self.resource_path = resource_path
        self.anchor = anchor

    def _locate(self) -> Path:
        resource = resources.files(self.anchor).joinpath(self.resource_path)
        if not resource.is_file() and not resource.is_dir():
            raise FileNotFoundError(f"Resource not found: {self.resource_path}")
        if isinstance(resource, Path):
            return resource
        return _resource_files.enter_context(resources.as_file(resource))

    def resolve(self, class_name: str) -> Any:
        module_name, attribute = split_class_name(class_name)
        module = IsolatedScope(self._locate()).import_module(module_name)
        return _resolve_attribute(module, attribute)


def instantiate_connector(target: Any, class_name: str) -> Connector:
    """Instantiate ``target`` and check it satisfies the Connector protocol.

    Raises:
        TypeError: If ``target`` is not a class or the instance cannot connect
    """
    if not isinstance(target, type):
        raise TypeError(f"'{class_name}' is not a class")
    connector = target()
    if not isinstance(connector, Connector):
        raise TypeError(f"'{class_name}' does not provide connect(url, properties)")
    return connector


def create_strategy(
    source: ConnectorSource,
    locator: str,
    resource_anchor: str = RESOURCE_PACKAGE,
) -> ConnectorStrategy:
    if source == ConnectorSource.BUNDLED:
        return BundledStrategy()
    if source == ConnectorSource.RESOURCE:
        return PackagedResourceStrategy(locator, anchor=resource_anchor)
    return ExternalFileStrategy(Path(locator))


def _load_attributes(source: ConnectorSource, locator: str, class_name: str, *args: Any, **kwargs: Any) -> dict:
    return {"connector.source": source.value, "connector.locator": locator, "connector.class": class_name}


@traced("sqlbridge.connectors.load_connector", attribute_getter=_load_attributes)
def load_connector(
    source: ConnectorSource,
    locator: str,
    class_name: str,
    resource_anchor: str = RESOURCE_PACKAGE,
) -> Outcome[Connector]:
    """Load and instantiate a connector.

    Args:
        source: Sourcing mode
        locator: ``"bundled"``, a resource path (scheme removed) or a file path
        class_name: Dotted class name of the connector
        resource_anchor: Package that packaged resources are looked up in

    Returns:
        Outcome holding the connector, or a BridgeError whose message is a
        single diagnostic line. Nothing is retained on failure.
    """
    if source == ConnectorSource.FILE and not Path(locator).exists():
        return Outcome.failure(configuration_error(
            f"The '{DRIVER_PATH_OPTION}' option is not a valid connector file",
            config_key=DRIVER_PATH_OPTION,
            details={"path": locator},
        ))

    strategy = create_strategy(source, locator, resource_anchor)
    prefix = load_failure_message(source)

    def _on_error(exc: BaseException) -> BridgeError:
        return connector_load_error(prefix, exc, class_name=class_name)

    outcome = call_foreign(strategy.load, class_name, on_error=_on_error)
    if outcome.ok:
        logger.info(
            "Loaded connector",
            extra={"connector_class": class_name, "connector_source": source.value}
        )
    return outcome


__all__: List[str] = [
    "BundledStrategy",
    "ConnectorStrategy",
    "ExternalFileStrategy",
    "PackagedResourceStrategy",
    "create_strategy",
    "instantiate_connector",
    "load_connector",
    "load_failure_message",
    "split_class_name",
]
