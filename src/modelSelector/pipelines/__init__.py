"""
Command pipelines for modelSelector.
"""
