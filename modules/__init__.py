"""GeoStyle Processing Modules

This package contains the processing modules of the GeoStyle engine. Each
module implements the ModuleProcessor interface.
"""
