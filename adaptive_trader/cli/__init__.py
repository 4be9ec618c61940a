"""Command line interface."""

from .main import cli, main, build_orchestrator

__all__ = ['cli', 'main', 'build_orchestrator']
