"""
Prep Registries

Registry for loading and caching the sprint curriculum tables and the Jinja2
task-description templates they contain.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from jinja2 import Environment, StrictUndefined, Template
from omegaconf import OmegaConf

from prepdesk.contexts.prep.logger import _log_debug

load_dotenv()
DEFAULT_TEMPLATES_PATH = Path(__file__).parent / "sprint_templates.yaml"
TEMPLATES_PATH = Path(os.getenv("SPRINT_TEMPLATES_PATH", str(DEFAULT_TEMPLATES_PATH)))


@dataclass(frozen=True)
class DayTemplate:
    """Focus area and topics planned for one sprint day."""

    focus: str
    topics: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DayTemplate":
        return cls(focus=str(data["focus"]), topics=[str(topic) for topic in data.get("topics") or []])


class SprintTemplateRegistry:
    """
    Registry for the sprint curriculum stored in sprint_templates.yaml.

    The YAML file is loaded once with OmegaConf and cached. Task descriptions
    are Jinja2 templates rendered with:
    - topics: list of day topics
    - first_topic: first topic, or none
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the sprint template registry.

        Args:
            templates_path: Path to the curriculum YAML. Defaults to
                           SPRINT_TEMPLATES_PATH from environment, then the bundled file
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Any] = {}
        self._template_cache: Dict[str, List[Template]] = {}

        # Catches silent failures
        self.env = Environment(undefined=StrictUndefined)

    def get_config(self) -> Dict[str, Any]:
        """
        Get the curriculum tables, loading and caching them if necessary.

        Raises:
            FileNotFoundError: If the YAML file doesn't exist
        """
        if "config" in self._cache:
            return self._cache["config"]

        if not self.templates_path.exists():
            raise FileNotFoundError(f"Sprint templates not found at {self.templates_path}")

        config = OmegaConf.load(self.templates_path)
        config_dict = OmegaConf.to_container(config, resolve=True)

        _log_debug(f"Loaded sprint templates from {self.templates_path}")
        self._cache["config"] = config_dict
        return config_dict

    def resolve_role(self, role_type: str) -> Optional[str]:
        """Map a role type onto the table that serves it (QA uses SDET), or None."""
        config = self.get_config()
        role = config.get("role_aliases", {}).get(role_type, role_type)
        return role if role in config["roles"] else None

    def get_day_templates(self, role_type: str, days: int) -> List[DayTemplate]:
        """
        Get the day templates for a role and the number of days available.

        The tier with the highest min_days not above days is used. Unknown
        roles get the generic fallback table.

        Args:
            role_type: Role type value (e.g., "SDE", "QA")
            days: Days remaining before the interview

        Returns:
            Day templates in order (may be shorter than days)
        """
        config = self.get_config()
        role = self.resolve_role(role_type)

        if role is None:
            _log_debug(f"No curriculum for role type {role_type!r}, using fallback")
            return [DayTemplate.from_dict(day) for day in config["fallback"]]

        tiers = sorted(config["roles"][role], key=lambda tier: tier["min_days"], reverse=True)
        for tier in tiers:
            if days >= tier["min_days"]:
                _log_debug(f"{role_type}: {days} days -> tier min_days={tier['min_days']}")
                return [DayTemplate.from_dict(day) for day in tier["days"]]

        return [DayTemplate.from_dict(day) for day in tiers[-1]["days"]]

    def get_filler_day(self) -> DayTemplate:
        """Day template used once the role table runs out of days."""
        return DayTemplate.from_dict(self.get_config()["filler"])

    @property
    def block_duration(self) -> str:
        return self.get_config()["block_duration"]

    def get_task_templates(self, focus: str) -> List[Template]:
        """Compiled task-description templates for a focus area (cached)."""
        if focus in self._template_cache:
            return self._template_cache[focus]

        sources = self.get_config()["tasks"].get(focus, ["General preparation"])
        templates = [self.env.from_string(source) for source in sources]

        self._template_cache[focus] = templates
        return templates

    def render_task_descriptions(self, focus: str, topics: List[str]) -> List[str]:
        """
        Render the task descriptions for one day.

        Example:
            >>> registry.render_task_descriptions("DSA", ["Arrays", "Strings"])[:2]
            ['Solve 2 problems on Arrays', 'Review pattern: Arrays, Strings']
        """
        context = {"topics": topics, "first_topic": topics[0] if topics else None}
        return [template.render(**context) for template in self.get_task_templates(focus)]

    def clear_cache(self):
        """Clear the curriculum and template caches."""
        self._cache.clear()
        self._template_cache.clear()

    def is_cached(self) -> bool:
        return "config" in self._cache


_default_registry: Optional[SprintTemplateRegistry] = None


def get_default_registry() -> SprintTemplateRegistry:
    """Process-wide registry for the configured curriculum file."""
    global _default_registry
    if _default_registry is None:
        _default_registry = SprintTemplateRegistry()
    return _default_registry
