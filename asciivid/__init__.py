"""asciivid - play videos as live character art in the terminal."""

__version__ = "0.1.0"
