"""
Artifacts — Idempotent copies of standalone files into the project.
"""
