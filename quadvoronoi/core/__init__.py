"""Implementation modules for quadvoronoi; import from the package root instead."""
