"""M24 indexer service CLI."""
