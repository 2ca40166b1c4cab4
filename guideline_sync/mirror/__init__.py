"""
Mirror — Keep a local clone byte-identical to an upstream repository.

The local directory is a mirror, never a workspace: updates hard-reset
it to the fetched head.
"""
