"""Group Forge: dependency-aware generation of account groups."""

__version__ = "0.1.0"
