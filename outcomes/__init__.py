"""Outcomes - standardized outcome measure scoring

Measures: ODI (back), KOOS (knee), QuickDASH (shoulder/upper limb),
NPRS (pain), GROC (global change).
"""

__version__ = "1.0.0"
