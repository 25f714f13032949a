"""Investment projection engine.

Deterministic compound-growth paths, a seeded Monte Carlo ensemble,
annual percentile bands and goal solving. Every function is pure: the
random stream is created per call from an explicit seed.
"""
