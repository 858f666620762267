"""Workspace directory tree building.

This package builds the ordered, filtered and depth-limited tree of a workspace
folder that backs the editor's file-browser panel.
"""
