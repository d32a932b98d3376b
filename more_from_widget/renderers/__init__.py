"""Renderer implementations and helpers."""

from .base import MoreFromView, PostEntry, RenderOptions, Renderer
from .html import HtmlRenderer, esc_url

__all__ = ["HtmlRenderer", "MoreFromView", "PostEntry", "RenderOptions", "Renderer", "esc_url"]
