"""Kernel of ioeffect: the port, its domain models, errors, logging and config."""
