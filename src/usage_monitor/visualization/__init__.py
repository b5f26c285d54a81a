"""
Visualization components for the usage cost monitor.
"""
