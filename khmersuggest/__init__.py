"""Roman → Khmer transliteration suggestions for input methods."""
__version__ = "0.1.0"
