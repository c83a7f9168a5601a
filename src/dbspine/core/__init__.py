"""dbspine core -- driver capability model, name resolution and dispatch.

Modules
-------
capability      DBObject marker, root of every driver-layer type
dispatch        DispatchTable: operation -> type -> implementation
datatype        Default SQL-92 type mapping (``data_type`` default)
display         format_object / show (never raises)
connection      DBConnection capability (boundary)
driver          DBDriver capability, DriverDescriptor, db_* functions
resolver        Name resolution: db_driver("SQLite")
protocols       DB-API Connection protocol
errors          Typed error hierarchy
logging         structlog configuration
settings        pydantic-settings configuration

Tags:
    dbspine, core, drivers, dispatch, resolution
"""

from dbspine.core.capability import DBObject
from dbspine.core.connection import DBConnection
from dbspine.core.datatype import ansi_data_type
from dbspine.core.dispatch import DispatchTable, dispatch, dispatch_table
from dbspine.core.display import format_object, show
from dbspine.core.driver import (
    DBDriver,
    DriverDescriptor,
    db_connect,
    db_data_type,
    db_list_connections,
    db_unload_driver,
)
from dbspine.core.errors import (
    ConfigError,
    DBSpineError,
    DispatchError,
    DriverConnectionError,
    DriverError,
    DriverNotFoundError,
    UnsupportedOperationError,
    UnsupportedTypeError,
)
from dbspine.core.resolver import (
    DriverResolver,
    db_driver,
    find_driver,
    resolve_driver,
)

__all__ = [
    # Capabilities
    "DBObject",
    "DBDriver",
    "DBConnection",
    "DriverDescriptor",
    # Dispatch
    "DispatchTable",
    "dispatch",
    "dispatch_table",
    "ansi_data_type",
    "format_object",
    "show",
    # Generic functions
    "db_driver",
    "db_connect",
    "db_list_connections",
    "db_unload_driver",
    "db_data_type",
    # Resolution
    "DriverResolver",
    "find_driver",
    "resolve_driver",
    # Errors
    "DBSpineError",
    "DriverError",
    "DriverNotFoundError",
    "DriverConnectionError",
    "DispatchError",
    "UnsupportedOperationError",
    "UnsupportedTypeError",
    "ConfigError",
]
