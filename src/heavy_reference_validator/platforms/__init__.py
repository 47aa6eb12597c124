"""Platform implementations of dependency sources.

Each platform module auto-registers itself with the SourceRegistry
when imported.
"""

# Platform modules are imported dynamically by SourceRegistry.discover_platforms()
