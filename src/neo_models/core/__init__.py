"""Core building blocks shared by every neo-models feature."""
