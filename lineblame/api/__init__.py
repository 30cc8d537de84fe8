"""
HTTP bridge between an editor plugin and the blame engine.
"""
