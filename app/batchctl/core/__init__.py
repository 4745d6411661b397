"""Core engine: orchestration, configuration, paths, errors and theming."""
