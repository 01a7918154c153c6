"""brewdiag: environment diagnostics for a Homebrew-style package manager."""

__version__ = "0.1.0"
