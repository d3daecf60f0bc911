"""Authored behaviour networks."""

from .cave_monster import ROOT_TASK, build_cave_monster_network

__all__ = ["ROOT_TASK", "build_cave_monster_network"]
