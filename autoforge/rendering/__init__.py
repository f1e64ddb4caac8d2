"""Template rendering: spec in, relative path -> content mapping out."""
from autoforge.rendering.layouts import RENDERERS, render
from autoforge.rendering.renderer import TemplateRenderer

__all__ = ["RENDERERS", "TemplateRenderer", "render"]
