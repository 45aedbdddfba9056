"""Internals shared by the client: codec, paths, HTTP dispatch, pagination, logging."""
