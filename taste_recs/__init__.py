"""
Taste Recs - Taste Vector Recommendation Engine
===============================================

Onboarding and personalization core for a movie/TV discovery app. Users pick
taste clusters, answer a short A/B quiz, and get a 24-dimensional taste
vector that ranks catalog titles and keeps learning from interactions.

Modules:
    - config: Configuration and constants
    - vector: Taste vector model, clamping and similarity
    - clusters: Onboarding taste clusters and seed vectors
    - catalog: Quiz pair pools
    - selector: Quiz pair selection per phase
    - scoring: Quiz answer scoring engine
    - content: Catalog metadata to content vector mapping
    - ranking: Match scoring, re-ordering and diversity
    - profile: Taste profile and interaction learning
    - store: File-backed profile persistence
    - quiz: Quiz session orchestrator
    - explainer: Explanation generation
    - cli: Command-line interface
"""

__version__ = "1.0.0"
__author__ = "Taste Recs Team"
