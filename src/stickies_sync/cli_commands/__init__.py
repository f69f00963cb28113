"""CLI command modules for stickies-sync.

- shared.py: config/logger loading, console, controller runner, rendering
- document_commands.py: show, new, add, edit, recolor, move, remove, clear
"""
