"""
Line blame - attributes the focused editor line to the commit that last
changed it and keeps that attribution current while the user moves,
edits and saves.

Packages:
    lineblame.git.blame   blame sources, cache, line and URL resolution
    lineblame.editor      active editor state and editor events
    lineblame.view        status bar model and user-facing messages
    lineblame.api         HTTP bridge for editor plugins
"""

__version__ = "1.0.0"
