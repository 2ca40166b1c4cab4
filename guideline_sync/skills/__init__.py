"""
Skills — Front-matter parsing and validation of skill manifests.
"""
