"""Types describing what was learned from a connected engine.

DialectCapabilities and ScopeDefaults are produced once per data source by
the introspection steps; TablePattern and TableIdentifier are transient
values used by table resolution.
"""

from typing import Dict, Mapping, Optional

from pydantic import ConfigDict, Field

from sqlbridge.constants.dialect import (
    ID_QUOTE_CLOSE_CHAR,
    ID_QUOTE_OPEN_CHAR,
    SUPPORTS_MULTIPLE_CATALOGS,
    SUPPORTS_MULTIPLE_SCHEMAS,
)
from sqlbridge.types.base import BridgeBaseModel


def _is_yes(value: Optional[str]) -> bool:
    return value is not None and value.upper() == "YES"


class DialectCapabilities(BridgeBaseModel):
    """Engine-reported dialect facts.

    Attributes:
        quote_open: Character opening a quoted identifier
        quote_close: Character closing a quoted identifier
        multiple_catalogs: Raw SUPPORTS_MULTIPLE_CATALOGS value
        multiple_schemas: Raw SUPPORTS_MULTIPLE_SCHEMAS value
        info: Every name/value row the engine reported, ``None`` values as ``""``

    Fields stay ``None`` when the engine does not report the matching key.
    """
    quote_open: Optional[str] = None
    quote_close: Optional[str] = None
    multiple_catalogs: Optional[str] = None
    multiple_schemas: Optional[str] = None
    info: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_sqlinfo(cls, rows: Mapping[str, Optional[str]]) -> "DialectCapabilities":
        """Build capabilities from name/value rows.

        Args:
            rows: Mapping of reported names to values (values may be None)

        Returns:
            DialectCapabilities with every value normalized to a string
        """
        info = {str(name): "" if value is None else str(value) for name, value in rows.items()}
        return cls(
            quote_open=info.get(ID_QUOTE_OPEN_CHAR),
            quote_close=info.get(ID_QUOTE_CLOSE_CHAR),
            multiple_catalogs=info.get(SUPPORTS_MULTIPLE_CATALOGS),
            multiple_schemas=info.get(SUPPORTS_MULTIPLE_SCHEMAS),
            info=info,
        )

    @property
    def supports_multiple_catalogs(self) -> bool:
        """True when the engine reported ``YES`` in any letter case."""
        return _is_yes(self.multiple_catalogs)

    @property
    def supports_multiple_schemas(self) -> bool:
        """True when the engine reported ``YES`` in any letter case."""
        return _is_yes(self.multiple_schemas)

    @property
    def identifier_quotes(self) -> str:
        return (self.quote_open or "") + (self.quote_close or "")

    def quote_identifier(self, name: str) -> str:
        """Wrap ``name`` in the engine's quote characters.

        The name is used verbatim; embedded quote characters are not escaped.
        """
        return f"{self.quote_open or ''}{name}{self.quote_close or ''}"


class ScopeDefaults(BridgeBaseModel):
    """Catalog/schema pairing used for unqualified table references."""
    catalog: Optional[str] = None
    schema_: Optional[str] = Field(default=None, alias="schema")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def schema(self) -> Optional[str]:  # type: ignore[override]
        return self.schema_


class TablePattern(BridgeBaseModel):
    """A possibly wildcarded, possibly partially qualified table reference.

    ``name`` may contain engine wildcard syntax (``%`` and ``_``); it is
    handed to the engine verbatim.
    """
    catalog: Optional[str] = None
    schema_: Optional[str] = Field(default=None, alias="schema")
    name: str = Field(..., min_length=1)

    model_config = ConfigDict(populate_by_name=True)

    @property
    def schema(self) -> Optional[str]:  # type: ignore[override]
        return self.schema_

    @property
    def has_catalog(self) -> bool:
        return bool(self.catalog)

    @property
    def has_schema(self) -> bool:
        return bool(self.schema_)


class TableIdentifier(BridgeBaseModel):
    """A concrete table, exactly as reported by engine metadata.

    Engines that have no notion of catalogs or schemas may report ``None``
    for those parts; the value is kept as reported.
    """
    catalog: Optional[str] = None
    schema_: Optional[str] = Field(default=None, alias="schema")
    name: str

    model_config = ConfigDict(populate_by_name=True)

    @property
    def schema(self) -> Optional[str]:  # type: ignore[override]
        return self.schema_

    @property
    def full_name(self) -> str:
        """Dot-joined name, skipping parts the engine did not report."""
        return ".".join(part for part in (self.catalog, self.schema_, self.name) if part)
