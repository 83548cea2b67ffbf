"""Testes unitários para WeatherQuery e esquema de chave de cache"""
import dataclasses

import pytest

from domain.value_objects.weather_query import WeatherQuery, build_cache_key


class TestWeatherQuery:
    """Testes para normalização e chave de cache"""

    @pytest.mark.parametrize("city", ["London", "london", "LONDON", "  London  ", "\tlOnDoN\n"])
    def test_case_and_whitespace_variants_share_cache_key(self, city):
        """REGRA: variações de caixa/espaços geram a mesma chave"""
        assert WeatherQuery(city).cache_key == "weather:london"

    def test_trimmed_keeps_original_case(self):
        query = WeatherQuery("  New York ")
        assert query.trimmed == "New York"
        assert query.normalized == "new york"

    def test_inner_whitespace_is_preserved(self):
        """Apenas espaços nas pontas são removidos"""
        assert WeatherQuery("São  Paulo").cache_key == "weather:são  paulo"

    def test_build_cache_key_matches_value_object(self):
        assert build_cache_key(" Rio de Janeiro ") == WeatherQuery("rio de janeiro").cache_key

    def test_is_immutable(self):
        query = WeatherQuery("London")
        with pytest.raises(dataclasses.FrozenInstanceError):
            query.city = "Paris"
