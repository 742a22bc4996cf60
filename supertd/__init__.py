"""Target-determination helpers for Buck2 builds and a `buck2 targets` runner."""

__version__ = "0.1.0"