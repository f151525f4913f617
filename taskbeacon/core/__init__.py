"""
FILE: taskbeacon/core/__init__.py
PURPOSE: Domain models, configuration, task store, flows and the focus balancer
"""
