"""
SwiftCamp - Learn Swift through lessons and coded challenges.

Core packages:
- schemas: lessons, challenges, learner progress
- classroom: catalog loading, progress storage, progress engine
- sandbox: submission screening and simulated execution
"""

__version__ = "0.1.0"
