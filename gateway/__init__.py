"""OGR conversion gateway: converts uploaded geospatial files with ogr2ogr over HTTP."""
