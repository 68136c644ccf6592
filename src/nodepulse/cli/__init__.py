"""
Command line interface for NodePulse.
"""
