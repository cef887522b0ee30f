"""Champion and per-game summarization.

The narrative itself comes from an external collaborator behind
SummarizerBase; everything else here is deterministic and local.
"""
