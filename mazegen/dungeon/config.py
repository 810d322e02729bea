import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

ENV_PREFIX = "DUNGEON_"
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class GeneratorConfig:
    width: int = 64
    height: int = 36
    max_room_size: int = 11
    room_attempts: int = 600
    winding_chance: int = 50
    connectivity_chance: int = 10
    collapse_regions: bool = False

    def validate(self) -> "GeneratorConfig":
        """Reject values that are not configuration at all.

        Small or oversized values are legal and simply yield sparse grids;
        only wrong types and negative sizes raise.
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "collapse_regions":
                if not isinstance(value, bool):
                    raise ValueError(f"{f.name} must be a bool, got {value!r}")
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{f.name} must be an int, got {value!r}")
        for name in ("width", "height", "room_attempts"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        return self

    def normalized(self) -> "GeneratorConfig":
        """Return a copy with even dimensions, odd room size and clamped chances."""
        self.validate()
        width = self.width - (self.width % 2)
        height = self.height - (self.height % 2)
        max_room = self.max_room_size
        if max_room % 2 == 0:
            max_room -= 1
        return replace(
            self,
            width=width,
            height=height,
            max_room_size=max_room,
            winding_chance=min(100, max(0, self.winding_chance)),
            connectivity_chance=min(100, max(0, self.connectivity_chance)),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "GeneratorConfig":
        """Build a config from DUNGEON_* environment variables.

        Keyword overrides win over the environment; unset keys keep defaults.
        """
        env = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw.strip() == "":
                continue
            if f.name == "collapse_regions":
                values[f.name] = raw.strip().lower() in _TRUTHY
            else:
                try:
                    values[f.name] = int(raw)
                except ValueError:
                    raise ValueError(f"{ENV_PREFIX + f.name.upper()} must be an integer, got {raw!r}") from None
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @classmethod
    def for_viewport(cls, pixel_width: float, pixel_height: float, scale: float = 30.0, **kwargs) -> "GeneratorConfig":
        """Size a grid to fill a viewport of `scale`-pixel tiles (even dimensions)."""
        if scale <= 0:
            raise ValueError("scale must be positive")
        width = max(0, int(pixel_width / scale))
        height = max(0, int(pixel_height / scale))
        return cls(width=width, height=height, **kwargs).normalized()


__all__ = ["GeneratorConfig", "ENV_PREFIX"]
