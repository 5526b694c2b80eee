"""
Blotch Painter

Procedural image generator that grows color blotches outward from
random seed pixels.
"""

__version__ = "0.1.0"

# Lazy imports so the core engine loads without the imaging stack
__all__ = [
    "__version__",
    "BlotchConfig",
    "BlotchPlacer",
    "RandomRemovalSet",
    "GridState",
    "Pixel",
    "Rasterizer",
    "Pipeline",
    "PipelineConfig",
]


def __getattr__(name):
    """Lazy import to avoid loading all dependencies at once."""
    if name in ("BlotchConfig", "BlotchPlacer"):
        from blotch import placement
        return getattr(placement, name)
    elif name == "RandomRemovalSet":
        from blotch.open_set import RandomRemovalSet
        return RandomRemovalSet
    elif name in ("GridState", "Pixel"):
        from blotch import grid
        return getattr(grid, name)
    elif name == "Rasterizer":
        from blotch.rasterizer import Rasterizer
        return Rasterizer
    elif name in ("Pipeline", "PipelineConfig"):
        from blotch import pipeline
        return getattr(pipeline, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
