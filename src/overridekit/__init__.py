"""overridekit - synthesize missing overrides of pure virtual C++ methods."""

__version__ = "0.1.0"
