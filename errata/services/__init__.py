"""Query, storage and ingestion services."""
