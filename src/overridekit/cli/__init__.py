"""Command line host for overridekit tweaks."""
