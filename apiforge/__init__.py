"""apiforge: REST API scaffold generator service."""
