"""Collaborator services for gw: git, the fuzzy picker and previews."""
