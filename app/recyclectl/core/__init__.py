"""Core infrastructure: paths, configuration, errors, logging and theming."""
