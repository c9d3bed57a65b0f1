"""Settings option names.

Option names are the keys users write in a settings file and the names
diagnostics refer to. Environment variables carry the ``CDATA_`` prefix.
"""

PREFIX_OPTION = "Prefix"
DRIVER_CLASS_OPTION = "DriverClass"
DRIVER_PATH_OPTION = "DriverPath"
JDBC_URL_OPTION = "JdbcUrl"
TABLES_OPTION = "Tables"
LOG_FILE_OPTION = "LogFile"

ENV_PREFIX = "CDATA_"
