"""segcode version information."""

__version__ = "1.0.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 1.0.0 - Initial release: array/macro/enum tables, custom segment order,
#         common-anode inversion, dynamic-scan digit table, CLI, REST API,
#         ASCII and PNG previews
