"""
Restaurant matching engine.

Responsibilities:
- Gate candidates on radius, cuisine, price and tag constraints.
- Score the survivors with a weighted distance / attribute / rating formula.
- Explain each match and rank the results deterministically.
"""
