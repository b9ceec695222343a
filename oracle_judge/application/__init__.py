"""
Application Layer

This layer contains use cases (application logic) and DTOs (data transfer objects).
It orchestrates domain logic without containing business rules itself.

- Use cases coordinate judging and submission flows
- DTOs define request/response contracts
- Interfaces define dependencies (inverted)
"""
