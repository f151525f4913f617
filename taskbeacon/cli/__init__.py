"""
FILE: taskbeacon/cli/__init__.py
PURPOSE: Typer command line (entry point: taskbeacon.cli.main:main)
"""
