"""
Split JMeter JTL result files into warmup and measurement phases.
"""

__version__ = "1.0.0"
