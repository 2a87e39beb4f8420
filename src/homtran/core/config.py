"""Frame tree configuration.

Pydantic models describing named frames, each posed relative to an optional
parent, with YAML/JSON loading. A frame's pose is given either as a quaternion
and translation or as a 4x4 homogeneous matrix.

Example (YAML)::

    frames:
      - name: base
        translation: [0.0, 0.0, 0.5]
      - name: camera
        parent: base
        quaternion: [0.7071067811865476, 0.0, 0.0, 0.7071067811865476]
        translation: [0.1, 0.0, 0.2]
"""

from __future__ import annotations

import json
from collections import Counter
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError, HomtranError
from .logging import get_logger
from .quaternion import UnitQuaternion
from .transform import Transform

logger = get_logger(__name__)


class FrameSpec(BaseModel):
    """Pose of one named frame relative to its parent."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, description="Unique frame name")
    parent: str | None = Field(
        default=None, description="Parent frame name (global frame if omitted)"
    )
    quaternion: tuple[float, float, float, float] = Field(
        default=(1.0, 0.0, 0.0, 0.0), description="Orientation (w, x, y, z)"
    )
    translation: tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0), description="Translation (x, y, z)"
    )
    matrix: list[list[float]] | None = Field(
        default=None, description="4x4 homogeneous matrix (overrides quaternion/translation)"
    )
    local: bool = Field(
        default=True,
        description="Pose measured in the parent's frame (True) or the global frame (False)",
    )

    @field_validator("quaternion")
    @classmethod
    def validate_quaternion(
        cls, v: tuple[float, float, float, float]
    ) -> tuple[float, float, float, float]:
        """Reject the zero quaternion."""
        if not any(v):
            raise ValueError("Quaternion must be non-zero")
        return v

    def local_transform(self) -> Transform:
        """Pose relative to the parent, before resolving the parent chain."""
        if self.matrix is not None:
            return Transform.from_matrix(self.matrix)
        return Transform(UnitQuaternion(*self.quaternion), self.translation)


class FrameTree(BaseModel):
    """A set of named frames forming a forest rooted in the global frame."""

    model_config = ConfigDict(extra="forbid")

    frames: list[FrameSpec] = Field(default_factory=list, description="Frame definitions")

    @model_validator(mode="after")
    def validate_tree(self) -> FrameTree:
        """Require unique names, known parents and no cycles."""
        counts = Counter(f.name for f in self.frames)
        duplicates = sorted(n for n, c in counts.items() if c > 1)
        if duplicates:
            raise ValueError(f"Duplicate frame names: {duplicates}")

        parents = {f.name: f.parent for f in self.frames}
        for name, parent in parents.items():
            if parent is not None and parent not in parents:
                raise ValueError(f"Frame '{name}' has unknown parent '{parent}'")

        rooted: set[str] = set()
        for name in parents:
            seen: set[str] = set()
            current = name
            while current is not None and current not in rooted:
                if current in seen:
                    raise ValueError(f"Frame '{name}' is part of a parent cycle")
                seen.add(current)
                current = parents[current]
            rooted.update(seen)
        return self

    def names(self) -> list[str]:
        return [f.name for f in self.frames]

    def build(self) -> dict[str, Transform]:
        """Resolve every frame to its pose relative to the global frame.

        Returns:
            Mapping of frame name to Transform, in definition order

        Raises:
            ConfigError: If a frame's pose cannot be decoded
        """
        specs = {f.name: f for f in self.frames}
        resolved: dict[str, Transform] = {}

        for name in specs:
            # Walk up to the nearest resolved ancestor, then resolve back down
            chain = []
            current = name
            while current is not None and current not in resolved:
                chain.append(current)
                current = specs[current].parent

            for link in reversed(chain):
                spec = specs[link]
                try:
                    pose = spec.local_transform()
                except HomtranError as exc:
                    raise ConfigError(f"Frame '{link}': {exc}") from exc
                rel_to = resolved[spec.parent] if spec.parent is not None else None
                resolved[link] = Transform(pose.quaternion, pose.translation, rel_to, spec.local)

        logger.debug("Resolved frame tree", {"frames": len(resolved)})
        return {name: resolved[name] for name in specs}


def load_config(path: str | Path) -> FrameTree:
    """Load a frame tree from a YAML or JSON file.

    Args:
        path: Path to configuration file

    Returns:
        Validated FrameTree

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigError: If the file can't be parsed or fails validation
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    content = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    try:
        if suffix in [".yaml", ".yml"]:
            data = yaml.safe_load(content)
        elif suffix == ".json":
            data = json.loads(content)
        else:
            # Try YAML first, then JSON
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError:
                data = json.loads(content)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Could not parse {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping, got {type(data).__name__}")

    try:
        tree = FrameTree(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid frame config {path}:\n{exc}") from exc

    logger.info("Loaded frame config", {"path": str(path), "frames": len(tree.frames)})
    return tree


__all__ = [
    "FrameSpec",
    "FrameTree",
    "load_config",
]
