"""Evidence-gated recommendation pipeline.

Import the submodules directly, e.g. ``from recommendations.renderer import
render_recommendations``.
"""
