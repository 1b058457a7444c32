"""External GDAL command line tools.

- OgrConverter: runs ogr2ogr for one staged input
- read_gdal_version(): queries gdalinfo once at startup
"""

from gateway.tools.command import CommandResult, run_command
from gateway.tools.ogr import Ogr2OgrCommand, OgrConverter, read_gdal_version

__all__ = [
    "CommandResult",
    "run_command",
    "Ogr2OgrCommand",
    "OgrConverter",
    "read_gdal_version",
]
