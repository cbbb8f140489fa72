"""Graphics settings of the application."""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)


@dataclass
class GraphicsSettings:
    """The graphics configuration that render graphs are built against."""

    def validate(self) -> None:
        """Check that every setting holds a value; raise ValueError otherwise."""
        missing = [f.name for f in fields(self) if getattr(self, f.name) is None]
        if missing:
            raise ValueError(f"graphics settings without a value: {', '.join(missing)}")

    def log(self) -> list[str]:
        """Write the settings to the engine log and return the lines written."""
        lines = ["", "======== GRAPHICS SETTINGS ========"]
        lines.extend(f"{f.name}: {getattr(self, f.name)!r}" for f in fields(self))
        lines.append("")
        for line in lines:
            logger.info(line)
        return lines

    def requires_new_resources(self, old_settings: GraphicsSettings) -> bool:
        """Whether a render graph must recreate its resources after a change."""
        resource_fields = [f.name for f in fields(self) if f.metadata.get("resources")]
        return any(
            getattr(self, name) != getattr(old_settings, name) for name in resource_fields
        )