"""
Recommendation engine: turns pillar breakdowns into ranked improvement
actions with conservative point-gain estimates.

Modules
-------
generator : generate_recommendations() — one rule per pillar below its
            threshold; gains simulated from the same ScoringConfig the
            pillars use.  Pure functions, no I/O.
ranker    : cap_gain() + rank_recommendations() + easiest_win().
"""
