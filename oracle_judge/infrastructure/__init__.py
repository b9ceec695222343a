"""
Infrastructure Layer

This layer contains concrete implementations of interfaces defined
in the application and domain layers. It handles external concerns
like HTTP calls to model providers and storage.
"""
