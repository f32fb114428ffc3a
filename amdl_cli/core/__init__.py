"""
Core resolution engine.

The `CatalogAggregator` turns share URLs into typed catalog entities, falling
back to alternative lookups when a direct one is incomplete. The
`DownloadPlanner` builds on it to pair every track with its selected rendition
and output path.
"""
