"""
Infrastructure Layer - Clean Architecture
Contém implementações concretas de cache (Redis) e provider (WeatherAPI)
"""
