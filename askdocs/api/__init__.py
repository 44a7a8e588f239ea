"""HTTP API for askdocs."""
