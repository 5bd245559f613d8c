"""
Animation system for the pad grid

- distance: grid distance metrics (origin pad -> target pad)
- envelope: window / sine helpers with IEEE float semantics
- catalog: AnimationKind and the per-pad render formulas
- glyphs: pixel font for DropTheBass

Modules are imported directly (animations.catalog etc.); nothing is
re-exported here to keep models.entity <-> catalog imports acyclic.
"""

__all__ = [
    "distance",
    "envelope",
    "catalog",
    "glyphs",
]
