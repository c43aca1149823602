"""
FlagQuest Game Controller.

Stateful shell around the pure engine: owns the live session and the
player record, drives delayed transitions, and notifies the presentation
layer.
"""

from src.game.controller import GameController

__all__ = ["GameController"]
