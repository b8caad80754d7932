"""Integrations with the datastore, the blob store, and token signing."""
