"""
Intensity ramps
Ordered glyph tables from lowest to highest visual weight
"""
from typing import Dict, Sequence, Tuple, Union


class IntensityRamp:
    """Immutable glyph lookup table, index 0 is the lightest glyph."""

    __slots__ = ("_glyphs",)

    def __init__(self, glyphs: Union[str, Sequence[str]]):
        glyphs = tuple(glyphs)
        if len(glyphs) < 2:
            raise ValueError("an intensity ramp needs at least two glyphs")
        if len(set(glyphs)) != len(glyphs):
            raise ValueError(f"ramp glyphs must be distinct: {''.join(glyphs)!r}")
        for glyph in glyphs:
            if len(glyph) != 1 or glyph in "\r\n":
                raise ValueError(f"invalid ramp glyph: {glyph!r}")
        object.__setattr__(self, "_glyphs", glyphs)

    def __setattr__(self, name, value):
        raise AttributeError("IntensityRamp is immutable")

    @property
    def glyphs(self) -> Tuple[str, ...]:
        return self._glyphs

    def __len__(self) -> int:
        return len(self._glyphs)

    def __getitem__(self, index: int) -> str:
        return self._glyphs[index]

    def __iter__(self):
        return iter(self._glyphs)

    def __eq__(self, other) -> bool:
        if not isinstance(other, IntensityRamp):
            return NotImplemented
        return self._glyphs == other._glyphs

    def __hash__(self) -> int:
        return hash(self._glyphs)

    def __str__(self) -> str:
        return "".join(self._glyphs)

    def __repr__(self) -> str:
        return f"IntensityRamp({str(self)!r})"

    @classmethod
    def resolve(cls, value: Union[str, "IntensityRamp"]) -> "IntensityRamp":
        """Turn a preset name or a literal glyph string into a ramp."""
        if isinstance(value, IntensityRamp):
            return value
        preset = PRESETS.get(value.strip().lower())
        if preset is not None:
            return preset
        return cls(value)


DEFAULT_RAMP = IntensityRamp(
    "`^\",:;Il!i~+_-?][}{1)(|\\/tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$"
)

PRESETS: Dict[str, IntensityRamp] = {
    "default": DEFAULT_RAMP,
    "standard": IntensityRamp(" .:-=+*#%@"),
    "simple": IntensityRamp(" .*#@"),
    "blocks": IntensityRamp(" ░▒▓█"),
}
