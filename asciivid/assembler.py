"""
Grid assembler
Turns rows of ramp indices into a block of text
"""
from .ramp import IntensityRamp


def assemble(indices, ramp: IntensityRamp) -> str:
    """Join glyphs row by row; every row, the last included, ends in a newline."""
    glyphs = ramp.glyphs
    return "".join(
        "".join(glyphs[int(i)] for i in row) + "\n"
        for row in indices
    )
