"""Core agents for scenario planning and image rendering."""

from core.agents.image_renderer import ImageRendererAgent, build_image_prompt
from core.agents.scenario_planner import ScenarioPlannerAgent, parse_scenarios

__all__ = [
    "ImageRendererAgent",
    "ScenarioPlannerAgent",
    "build_image_prompt",
    "parse_scenarios",
]
