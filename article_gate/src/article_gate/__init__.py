"""
YMYL health article gate.

Validates citation sources before generation and checks generated articles
for length, medical disclaimer, secondary keywords and cited claims before
they are accepted as publishable.
"""

__version__ = "1.0.0"
