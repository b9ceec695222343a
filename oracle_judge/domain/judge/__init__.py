"""
Judge Domain

Scoring oracle adapter: prompts, incremental response parsing, engine.
"""
