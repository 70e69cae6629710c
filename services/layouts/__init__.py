from .builtin import bluesky_post_url, register_builtin_layouts
from .registry import FALLBACK_LAYOUT, LayoutRegistry


def default_layouts() -> LayoutRegistry:
    """A fresh registry holding every built-in layout."""
    return register_builtin_layouts(LayoutRegistry())


__all__ = ['FALLBACK_LAYOUT', 'LayoutRegistry', 'bluesky_post_url', 'default_layouts', 'register_builtin_layouts']
