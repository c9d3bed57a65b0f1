"""Dialect information constants.

Connected engines are expected to expose a ``sys_sqlinfo`` table of
name/value rows describing their SQL dialect. The keys below are the ones
this package consumes; every other row is kept verbatim.
"""

SQLINFO_QUERY = "SELECT NAME, VALUE FROM sys_sqlinfo"

ID_QUOTE_OPEN_CHAR = "IDENTIFIER_QUOTE_OPEN_CHAR"
ID_QUOTE_CLOSE_CHAR = "IDENTIFIER_QUOTE_CLOSE_CHAR"
SUPPORTS_MULTIPLE_CATALOGS = "SUPPORTS_MULTIPLE_CATALOGS"
SUPPORTS_MULTIPLE_SCHEMAS = "SUPPORTS_MULTIPLE_SCHEMAS"
