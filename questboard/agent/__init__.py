"""AI player module.

Provides the scripted opponent that the turn engine consults whenever an
AI seat has to act.
"""

from .scripted_player import ScriptedPlayer

__all__ = ["ScriptedPlayer"]
