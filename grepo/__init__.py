"""grepo - watch a set of git repositories and search across them."""

__version__ = "0.2.0"
