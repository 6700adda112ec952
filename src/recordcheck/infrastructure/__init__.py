"""Infrastructure layer — booking API client and test-data generator.

This layer depends on stdlib and third-party libs (httpx, Faker).
It must never import from domain, services, commands, or output.
The service layer bridges between domain models and infrastructure.
"""
