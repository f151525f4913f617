"""
FILE: taskbeacon/__init__.py
PURPOSE: Taskwarrior companion: LLM enrichment against personal goals, balanced focus lists
"""
