"""Lookup and missing-word tracking on top of the word store."""
