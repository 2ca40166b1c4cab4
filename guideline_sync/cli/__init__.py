"""
CLI command modules, registered on the group in ``guideline_sync.main``.
"""
